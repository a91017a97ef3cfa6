"""Pydantic models for API request/response schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ── Envelope ────────────────────────────────────────────────

class Action(str, Enum):
    GENERATE_WORDS = "generateWords"
    GENERATE_SPEECH = "generateSpeech"
    ASSESS_PRONUNCIATION = "assessPronunciation"
    GET_TRANSLATED_INSTRUCTIONS = "getTranslatedInstructions"


class ErrorBody(BaseModel):
    error: str


# ── Payloads ────────────────────────────────────────────────

class GenerateWordsPayload(BaseModel):
    topic: str
    language: str


class GenerateSpeechPayload(BaseModel):
    text: str
    voice: str


class AssessPronunciationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str
    language: str
    user_audio_base64: str = Field(alias="userAudioBase64")
    mime_type: str = Field(alias="mimeType")


class TranslatedInstructionsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language_name: str = Field(alias="languageName")


# ── Results ─────────────────────────────────────────────────

class Assessment(BaseModel):
    score: int = Field(ge=1, le=100)       # 100 = native-level
    feedback: str


class Language(BaseModel):
    code: str
    name: str
    voice: str                             # default TTS voice for the language
