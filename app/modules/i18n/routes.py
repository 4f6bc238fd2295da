from fastapi import APIRouter
from app.config import settings
from app.modules.i18n.schemas import (
    LanguagesResponse, TranslateRequest, TranslateResponse, TranslationsResponse
)
from app.modules.i18n.service import Translator

router = APIRouter(prefix="/i18n", tags=["i18n"])


@router.get("/languages", response_model=LanguagesResponse)
async def list_languages():
    return LanguagesResponse(
        default=settings.default_language,
        languages=settings.get_supported_languages_list(),
    )


@router.get("/{language}", response_model=TranslationsResponse)
async def get_translations(language: str):
    """Full dictionary for a language; unsupported languages get the default one."""
    translator = Translator(language)
    return TranslationsResponse(language=translator.language, translations=translator.translations)


@router.post("/{language}/translate", response_model=TranslateResponse)
async def translate(language: str, request: TranslateRequest):
    translator = Translator(language)
    return TranslateResponse(
        language=translator.language,
        key=request.key,
        text=translator.t(request.key, request.values),
    )
