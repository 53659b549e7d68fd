"""Still frames handed to the classifier."""

from __future__ import annotations

import base64
import mimetypes
import re
from pathlib import Path
from typing import Iterable, List

from hb_cli.core.constants import MAX_FRAMES
from hb_cli.core.models import Frame

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]*)(;base64)?,(?P<data>.*)$", re.DOTALL)


def load_frame(path: Path) -> Frame:
    """Read an image file and base64-encode it."""
    mime_type, _ = mimetypes.guess_type(path.name)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return Frame(mime_type=mime_type or DEFAULT_MIME_TYPE, data=payload)


def parse_data_url(value: str) -> Frame:
    """Parse ``data:<mime>;base64,<payload>`` or bare base64 text."""
    match = _DATA_URL.match(value.strip())
    if match:
        mime_type = match.group("mime") or DEFAULT_MIME_TYPE
        payload = match.group("data")
    else:
        mime_type = DEFAULT_MIME_TYPE
        payload = value.strip()
    # Raises binascii.Error (a ValueError) on garbage.
    base64.b64decode(payload, validate=True)
    return Frame(mime_type=mime_type, data=payload)


def frame_from_spec(spec: str) -> Frame:
    """Load a frame from a ``data:`` URL or an image path."""
    if spec.startswith("data:"):
        return parse_data_url(spec)
    return load_frame(Path(spec).expanduser())


def load_frames(specs: Iterable[str], limit: int = MAX_FRAMES) -> List[Frame]:
    frames: List[Frame] = []
    for spec in specs:
        if len(frames) >= limit:
            break
        if spec:
            frames.append(frame_from_spec(spec))
    return frames
