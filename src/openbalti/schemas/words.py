from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from openbalti.schemas.enums import DifficultyLevel, SourceType, WordStatus


class ExampleIn(BaseModel):
    balti: str
    english: str


class WordIn(BaseModel):
    """Create/update body. Presence of balti/english is checked by the handler."""

    balti: Optional[str] = None
    english: Optional[str] = None
    pronunciation: Optional[str] = None
    partOfSpeech: Optional[str] = None
    dialect: Optional[str] = None
    difficultyLevel: Optional[DifficultyLevel] = None
    categories: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    examples: Optional[List[ExampleIn]] = None
    relatedWords: Optional[List[str]] = None
    etymology: Optional[str] = None
    culturalContext: Optional[str] = None
    usageNotes: Optional[str] = None
    status: Optional[WordStatus] = None

    def document(self) -> dict:
        data = self.model_dump(exclude_unset=True, mode="json")
        for key in ("balti", "english"):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data


class ReviewIn(BaseModel):
    # Any, so unknown values reach the handler and get its error message;
    # an omitted value is rejected there too
    reviewStatus: Any = None


class FeedbackIn(BaseModel):
    isUseful: Any = None
    isTrusted: Any = None
    needsReview: Any = None
    comment: Optional[str] = None


class HistoricalFormIn(BaseModel):
    period: str
    form: str
    meaning: str
    script: Optional[str] = None


class RelatedLanguageIn(BaseModel):
    language: str
    word: str
    meaning: str


class SourceIn(BaseModel):
    title: str
    author: Optional[str] = None
    year: Optional[int] = None
    type: SourceType


class EtymologyIn(BaseModel):
    origin: Optional[str] = None
    historicalForms: Optional[List[HistoricalFormIn]] = None
    linguisticFamily: Optional[str] = None
    relatedLanguages: Optional[List[RelatedLanguageIn]] = None
    culturalContext: Optional[str] = None
    firstRecorded: Optional[str] = None
    evolution: Optional[str] = None
    sources: Optional[List[SourceIn]] = None

    def document(self) -> dict:
        return self.model_dump(exclude_unset=True, mode="json")


class EtymologyVerifyIn(BaseModel):
    isVerified: bool = Field(default=True)


class FavoriteIn(BaseModel):
    wordId: Optional[str] = None
