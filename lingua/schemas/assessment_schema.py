"""Record returned by the spoken-response assessment."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FeedbackTier(str, Enum):
    """Qualitative band derived from the raw similarity."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_WORK = "needs_work"


class SpeechAssessment(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )

    transcript: str
    expected: str
    match_score: float = Field(ge=0.0, le=1.0)
    intelligibility_score: float = Field(ge=0.0, le=1.0)
    tier: FeedbackTier
    feedback: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
