from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from openbalti.schemas.enums import SessionType


class LearningSessionIn(BaseModel):
    sessionType: SessionType
    wordsStudied: List[str] = Field(default_factory=list)
    score: Optional[float] = Field(default=None, ge=0, le=100)
    duration: int = Field(default=0, ge=0)
    correctAnswers: int = Field(default=0, ge=0)
    totalQuestions: int = Field(default=0, ge=0)
