from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class LanguagesResponse(BaseModel):
    default: str
    languages: List[str]


class TranslateRequest(BaseModel):
    key: str = Field(..., min_length=1)
    values: Optional[Dict[str, Any]] = None


class TranslateResponse(BaseModel):
    language: str
    key: str
    text: str


class TranslationsResponse(BaseModel):
    language: str
    translations: Dict[str, Any]
