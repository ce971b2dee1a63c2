from __future__ import annotations

import json
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

FALLBACK_REPLY = "Something went wrong 😕"


class CompanionError(RuntimeError):
    """Raised when the companion service cannot produce a reply."""


class CompanionClient:
    """HTTP client for the chat companion: ``{prompt}`` in, text or image URL out."""

    def __init__(
        self,
        chat_url: str | None = None,
        image_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._chat_url = chat_url
        self._image_url = image_url
        self._timeout = timeout

    @property
    def can_generate_images(self) -> bool:
        return bool(self._image_url)

    def chat(self, prompt: str) -> str:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt for chat is empty.")
        if not self._chat_url:
            raise CompanionError("Companion chat endpoint is not configured.")
        payload = _post_json(self._chat_url, {"prompt": prompt}, self._timeout)
        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str) or not text:
            return FALLBACK_REPLY
        return text

    def generate_image(self, prompt: str) -> str:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt for image generation is empty.")
        if not self._image_url:
            raise CompanionError("Image generation endpoint is not configured.")
        payload = _post_json(self._image_url, {"prompt": prompt}, self._timeout)
        image_url = payload.get("imageUrl") if isinstance(payload, dict) else None
        if not isinstance(image_url, str) or not image_url:
            raise CompanionError("Image generation returned no image.")
        return image_url


def _post_json(url: str, body: dict[str, Any], timeout: float) -> Any:
    request = Request(
        url,
        data=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        method="POST",
    )
    try:
        with urlopen(request, timeout=timeout) as response:
            raw = response.read()
    except HTTPError as exc:
        raise CompanionError(f"Companion error: {exc.code} {exc.reason}") from exc
    except URLError as exc:
        raise CompanionError(f"Companion connection failed: {exc.reason}") from exc
    except TimeoutError as exc:
        raise CompanionError("Companion request timed out.") from exc
    if not raw:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CompanionError("Companion returned invalid JSON.") from exc
