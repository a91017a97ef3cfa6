"""GET /api/languages — practice languages with their default TTS voice."""

from fastapi import APIRouter

from bff.models import Language
from bff.services.prompts import SUPPORTED_LANGUAGES

router = APIRouter(tags=["languages"])


@router.get("/languages", response_model=list[Language])
async def list_languages():
    return SUPPORTED_LANGUAGES
