"""Validation of raw provider replies into typed results.

Pure functions. Every failure raises :class:`ResponseShapeError`, which the
retry layer treats as fatal.
"""

import json
from typing import Any

from pydantic import ValidationError

from bff.errors import ResponseShapeError
from bff.models import Assessment
from bff.services.prompts import MAX_WORDS


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence, if any."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    body = text[3:]
    if body.startswith("json"):
        body = body[4:]
    if body.rstrip().endswith("```"):
        body = body.rstrip()[:-3]
    return body.strip()


def parse_json_object(text: str | None) -> dict[str, Any]:
    if not text:
        raise ResponseShapeError("Invalid response format from API: empty response.")
    try:
        parsed = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        raise ResponseShapeError(f"Invalid response format from API: {exc.msg}.") from exc
    if not isinstance(parsed, dict):
        raise ResponseShapeError("Invalid response format from API: expected a JSON object.")
    return parsed


def parse_word_list(text: str | None) -> list[str]:
    """Return at most ``MAX_WORDS`` words from a ``{"words": [...]}`` reply."""
    words = parse_json_object(text).get("words")
    if not isinstance(words, list) or not words:
        raise ResponseShapeError("Invalid response format from API: 'words' array not found.")
    if not all(isinstance(w, str) for w in words):
        raise ResponseShapeError("Invalid response format from API: 'words' must be strings.")
    return words[:MAX_WORDS]


def parse_assessment(text: str | None) -> Assessment:
    data = parse_json_object(text)
    # bool is an int subclass; pydantic would also coerce "42" and 42.0
    if not isinstance(data.get("score"), int) or isinstance(data.get("score"), bool):
        raise ResponseShapeError("Invalid response format from API: 'score' must be an integer.")
    try:
        return Assessment.model_validate(data)
    except ValidationError as exc:
        raise ResponseShapeError(
            f"Invalid response format from API: {exc.errors()[0]['msg']}."
        ) from exc


def require_audio(audio_base64: str | None) -> str:
    if not audio_base64:
        raise ResponseShapeError("No audio data received from TTS API")
    return audio_base64
