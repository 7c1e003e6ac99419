"""Translation request/response models."""

from pydantic import BaseModel, Field


class TranslateRequest(BaseModel):
    phrase: str = Field(..., min_length=1, max_length=2000)
    sourceLanguage: str = Field(..., min_length=1)
    targetLanguage: str = Field(..., min_length=1)


class TranslateResponse(BaseModel):
    translation: str


class LanguageInfo(BaseModel):
    code: str
    name: str


class LanguageListResponse(BaseModel):
    languages: list[LanguageInfo]


class ExpandRequest(BaseModel):
    phrase: str = Field(..., min_length=1, max_length=2000)
    language: str = Field(..., min_length=1)
    targetLanguage: str = Field(..., min_length=1)


class ExpandResponse(BaseModel):
    expandedPhrase: str
    translation: str
