"""Gemini vision client used as the external clip classifier."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Optional

import requests

from hb_cli.core.constants import (
    CLASSIFIER_PROMPT,
    DEFAULT_MODEL,
    GEMINI_API_BASE,
    MAX_FRAMES,
)
from hb_cli.core.models import Frame, VideoFile

logger = logging.getLogger(__name__)


class ClassifierError(RuntimeError):
    """Raised for classifier request failures after retries."""


class ClassifierClient:
    """Thin wrapper around the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = GEMINI_API_BASE,
        max_retries: int = 2,
        timeout_seconds: int = 30,
        max_frames: int = MAX_FRAMES,
        prompt: str = CLASSIFIER_PROMPT,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self.timeout_seconds = timeout_seconds
        self.max_frames = min(max_frames, MAX_FRAMES)
        self.prompt = prompt

    @property
    def _url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, frames: List[Frame]) -> Dict[str, Any]:
        parts: List[Dict[str, Any]] = [{"text": self.prompt}]
        for frame in frames[: self.max_frames]:
            parts.append({"inline_data": {"mime_type": frame.mime_type, "data": frame.data}})
        return {"contents": [{"role": "user", "parts": parts}]}

    def _request(self, payload: Dict[str, Any]) -> Any:
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = requests.request(
                    method="POST",
                    url=self._url,
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                    timeout=self.timeout_seconds,
                )
                if response.status_code in (429, 500, 502, 503, 504):
                    raise requests.HTTPError(response.text, response=response)
                response.raise_for_status()
                return response.json()
            except (requests.RequestException, ValueError) as exc:
                last_error = exc
                if attempt >= self.max_retries:
                    break
                time.sleep(min(2**attempt, 8))

        raise ClassifierError(f"Classifier request to {self.model} failed: {last_error}")

    @staticmethod
    def response_text(body: Any) -> str:
        """Concatenate the text parts of the first candidate."""
        if not isinstance(body, dict):
            return ""
        candidates = body.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        return "".join(str(part.get("text") or "") for part in parts if isinstance(part, dict))

    def classify(self, video: VideoFile) -> Optional[str]:
        """Return the raw model text for a clip, or ``None`` when unavailable."""
        frames = list(video.frames)
        if not frames:
            logger.info("No preview frames for %s; skipping classifier", video.name)
            return None

        try:
            body = self._request(self.build_payload(frames))
        except ClassifierError as exc:
            logger.warning("%s", exc)
            return None

        text = self.response_text(body)
        logger.debug("Classifier returned %d characters for %s", len(text), video.name)
        return text or None


def build_classifier(config: Dict[str, Any]) -> Optional[ClassifierClient]:
    """Build a client from config, or ``None`` when classification is off."""
    cfg = config.get("classifier", {})
    if not cfg.get("enabled", False):
        return None

    key_env = str(cfg.get("api_key_env") or "GEMINI_API_KEY")
    api_key = os.getenv(key_env, "").strip()
    if not api_key:
        logger.warning("Classifier enabled but %s is not set; continuing without it", key_env)
        return None

    return ClassifierClient(
        api_key=api_key,
        model=str(cfg.get("model") or DEFAULT_MODEL),
        base_url=str(cfg.get("base_url") or GEMINI_API_BASE),
        max_retries=int(cfg.get("max_retries", 2)),
        timeout_seconds=int(cfg.get("timeout_seconds", 30)),
        max_frames=int(cfg.get("max_frames", MAX_FRAMES)),
    )
