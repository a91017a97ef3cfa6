"""Thin adapter over the Gemini SDK.

Handlers build a :class:`ProviderRequest` and get back a
:class:`ProviderReply`; nothing outside this module touches ``google.genai``.
SDK errors are converted to :class:`ProviderError` so that the retry layer
can classify them by status code.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from bff.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlineAudio:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class ProviderRequest:
    model: str
    prompt: str
    response_schema: dict[str, Any] | None = None
    audio: InlineAudio | None = None
    voice: str | None = None               # set → ask for an AUDIO response


@dataclass(frozen=True)
class ProviderReply:
    text: str | None = None
    audio_base64: str | None = None


class Provider(Protocol):
    async def generate(self, request: ProviderRequest) -> ProviderReply: ...


class GenAIProvider:
    """Provider backed by ``google-genai``'s async client."""

    def __init__(self, api_key: str, timeout_seconds: float | None = None):
        self._client = genai.Client(api_key=api_key)
        self._timeout = timeout_seconds

    async def generate(self, request: ProviderRequest) -> ProviderReply:
        call = self._client.aio.models.generate_content(
            model=request.model,
            contents=_build_contents(request),
            config=_build_config(request),
        )
        try:
            if self._timeout is not None:
                response = await asyncio.wait_for(call, timeout=self._timeout)
            else:
                response = await call
        except asyncio.TimeoutError as exc:
            raise ProviderError(
                f"Provider call timed out after {self._timeout}s", status_code=504
            ) from exc
        except genai_errors.APIError as exc:
            raise ProviderError(str(exc), status_code=exc.code) from exc

        if request.voice is not None:
            return ProviderReply(audio_base64=_first_inline_data(response))
        return ProviderReply(text=response.text)


def _build_contents(request: ProviderRequest) -> list:
    contents: list = [request.prompt]
    if request.audio is not None:
        contents.append(
            types.Part.from_bytes(data=request.audio.data, mime_type=request.audio.mime_type)
        )
    return contents


def _build_config(request: ProviderRequest) -> types.GenerateContentConfig | None:
    if request.voice is not None:
        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=request.voice),
                ),
            ),
        )
    if request.response_schema is not None:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=request.response_schema,
        )
    return None


def _first_inline_data(response: types.GenerateContentResponse) -> str | None:
    """Base64 text of candidates[0].content.parts[0].inline_data, if present."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None
    inline = content.parts[0].inline_data
    if inline is None or not inline.data:
        return None
    return base64.b64encode(inline.data).decode("ascii")
