"""Text helpers."""

from __future__ import annotations

import re
from typing import List

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_TERMINATORS = (".", "!", "?")


def split_sentences(value: str) -> List[str]:
    """Split text on sentence-ending punctuation followed by whitespace."""
    return [part.strip() for part in _SENTENCE_BOUNDARY.split(value) if part.strip()]


def ensure_terminated(value: str) -> str:
    """Return stripped text ending in `.`, `!` or `?`."""
    text = value.strip()
    if not text:
        return text
    return text if text.endswith(_TERMINATORS) else f"{text}."


def labelize(tag: str) -> str:
    """Display name for a tag: first character upper-cased."""
    return tag[:1].upper() + tag[1:]
