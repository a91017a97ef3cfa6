"""Operation handlers and action dispatch.

A :class:`Gateway` owns the provider, the shared result cache and the retry
policy; all three are injected so tests (or a different cache backend) can
swap them without touching the handlers.

Handler pipeline:
  1. Probe the cache (never for assessments)
  2. On miss, build the provider request
  3. Send it through ``with_retry``
  4. Validate the reply into a typed result
  5. Store cacheable results
"""

import asyncio
import base64
import binascii
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from bff.config import Settings
from bff.errors import InvalidActionError, InvalidPayloadError, ResponseShapeError
from bff.models import (
    Action,
    Assessment,
    AssessPronunciationPayload,
    GenerateSpeechPayload,
    GenerateWordsPayload,
    TranslatedInstructionsPayload,
)
from bff.services import parsing, prompts
from bff.services.cache import ResultCache, cache_key
from bff.services.provider import GenAIProvider, InlineAudio, Provider, ProviderRequest
from bff.services.retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_action(name: Any) -> Action:
    try:
        return Action(name)
    except ValueError:
        raise InvalidActionError(name) from None


def _validate_payload(model: type[BaseModel], action: Action, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise InvalidPayloadError(f"Invalid payload for {action.value}: expected an object.")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in exc.errors())
        raise InvalidPayloadError(
            f"Invalid payload for {action.value}: check field(s) {fields}."
        ) from exc


class Gateway:
    def __init__(
        self,
        provider: Provider,
        cache: ResultCache,
        retry_policy: RetryPolicy | None = None,
        *,
        text_model: str = "gemini-2.5-flash",
        tts_model: str = "gemini-2.5-flash-preview-tts",
        base_language: str = "English",
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        self.provider = provider
        self.cache = cache
        self.retry_policy = retry_policy or RetryPolicy()
        self.text_model = text_model
        self.tts_model = tts_model
        self.base_language = base_language
        self._sleep = sleep or asyncio.sleep

        self._handlers: dict[Action, tuple[type[BaseModel], Callable[[Any], Awaitable[Any]]]] = {
            Action.GENERATE_WORDS: (
                GenerateWordsPayload,
                lambda p: self.generate_words(p.topic, p.language),
            ),
            Action.GENERATE_SPEECH: (
                GenerateSpeechPayload,
                lambda p: self.generate_speech(p.text, p.voice),
            ),
            Action.ASSESS_PRONUNCIATION: (
                AssessPronunciationPayload,
                lambda p: self.assess_pronunciation(
                    p.word, p.language, p.user_audio_base64, p.mime_type
                ),
            ),
            Action.GET_TRANSLATED_INSTRUCTIONS: (
                TranslatedInstructionsPayload,
                lambda p: self.get_translated_instructions(p.language_name),
            ),
        }
        missing = set(Action) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler registered for {sorted(a.value for a in missing)}")

    @classmethod
    def from_settings(cls, settings: Settings, provider: Provider | None = None) -> "Gateway":
        """Build the production gateway. Fails fast when API_KEY is unset."""
        if provider is None:
            provider = GenAIProvider(
                api_key=settings.require_api_key(),
                timeout_seconds=settings.PROVIDER_TIMEOUT_SECONDS,
            )
        return cls(
            provider=provider,
            cache=ResultCache(ttl_seconds=settings.CACHE_TTL_SECONDS),
            retry_policy=RetryPolicy.from_settings(settings),
            text_model=settings.TEXT_MODEL,
            tts_model=settings.TTS_MODEL,
            base_language=settings.BASE_LANGUAGE,
        )

    # ── Dispatch ────────────────────────────────────────────

    async def dispatch(self, action: Action, payload: Any) -> Any:
        """Validate *payload* for *action* and run the matching handler.

        The result is JSON-ready (pydantic models are dumped to dicts).
        """
        model, handler = self._handlers[action]
        result = await handler(_validate_payload(model, action, payload))
        if isinstance(result, BaseModel):
            return result.model_dump()
        return result

    # ── Handlers ────────────────────────────────────────────

    async def generate_words(self, topic: str, language: str) -> list[str]:
        key = cache_key("words", topic, language)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        request = ProviderRequest(
            model=self.text_model,
            prompt=prompts.words_prompt(topic, language),
            response_schema=prompts.WORDS_SCHEMA,
        )

        async def call() -> list[str]:
            reply = await self.provider.generate(request)
            return parsing.parse_word_list(reply.text)

        words = await self._retry(call)
        self.cache.set(key, words)
        return words

    async def generate_speech(self, text: str, voice: str) -> str:
        key = cache_key("speech", text, voice)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        request = ProviderRequest(
            model=self.tts_model,
            prompt=prompts.speech_prompt(text),
            voice=voice,
        )

        async def call() -> str:
            reply = await self.provider.generate(request)
            return parsing.require_audio(reply.audio_base64)

        audio = await self._retry(call)
        self.cache.set(key, audio)
        return audio

    async def assess_pronunciation(
        self, word: str, language: str, user_audio_base64: str, mime_type: str
    ) -> Assessment:
        # Never cached: each recording is a one-off sample.
        try:
            audio_bytes = base64.b64decode(user_audio_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidPayloadError(
                "Invalid payload for assessPronunciation: userAudioBase64 is not valid base64."
            ) from exc

        request = ProviderRequest(
            model=self.text_model,
            prompt=prompts.assessment_prompt(word, language),
            response_schema=prompts.ASSESSMENT_SCHEMA,
            audio=InlineAudio(data=audio_bytes, mime_type=mime_type),
        )

        async def call() -> Assessment:
            reply = await self.provider.generate(request)
            return parsing.parse_assessment(reply.text)

        return await self._retry(call)

    async def get_translated_instructions(self, language_name: str) -> str:
        if language_name.lower() == self.base_language.lower():
            return prompts.BASE_INSTRUCTIONS

        key = cache_key("instructions", language_name)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        request = ProviderRequest(
            model=self.text_model,
            prompt=prompts.translation_prompt(language_name),
        )

        async def call() -> str:
            reply = await self.provider.generate(request)
            if not reply.text:
                raise ResponseShapeError("Failed to translate instructions: empty response.")
            return reply.text

        translated = await self._retry(call)
        self.cache.set(key, translated)
        return translated

    async def _retry(self, call: Callable[[], Awaitable[T]]) -> T:
        return await with_retry(call, self.retry_policy, sleep=self._sleep)


def get_gateway(request: Request) -> Gateway:
    """Dependency – the process-wide gateway built at startup."""
    return request.app.state.gateway
