"""Pydantic models describing a (base or resolved) lesson document."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lingua.schemas.exercise_schema import Exercise


class LocalizedTitle(BaseModel):
    """Lesson title in the learner's language and in the target language."""

    native: str
    localized: str


class AlternatePhrasing(BaseModel):
    """Another way to say a dialogue line, tagged with its own dialect."""

    model_config = ConfigDict(extra="allow")

    dialect: str
    text: str
    ipa: str = ""
    confidence_score: Optional[float] = None


class DialogueBlock(BaseModel):
    """One line of the lesson dialogue.

    ``translation`` is nullable on purpose: ``None`` means no translation is
    available for this text, which is not the same as an empty translation.
    """

    model_config = ConfigDict(extra="allow")

    speaker: str
    text: str
    translation: Optional[str] = None
    ipa: str = ""
    dialect: Optional[str] = None
    audio_asset_id: Optional[str] = None
    context: str = ""
    alternate_phrasing: List[AlternatePhrasing] = Field(default_factory=list)

    def phrasing_for(self, dialect: str) -> Optional[AlternatePhrasing]:
        """Return the alternate phrasing authored for ``dialect``, if any."""

        for phrasing in self.alternate_phrasing:
            if phrasing.dialect == dialect:
                return phrasing
        return None


class VocabularyEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    word: str
    translation: Optional[str] = None
    ipa: Optional[str] = None
    pos: Optional[str] = None
    dialect: Optional[str] = None


class SrsFlashcard(BaseModel):
    """Flashcard with precomputed scheduling fields (display only)."""

    model_config = ConfigDict(extra="allow")

    card_id: str
    front: str
    back: str
    ipa: str = ""
    next_review_days: int = 0
    ease_factor: float = 2.5
    interval: int = 0
    repetitions: int = 0
    dialect: Optional[str] = None
    confidence_score: Optional[float] = None
    human_review: bool = False


class CulturalNotes(BaseModel):
    """Display notes plus review metadata; extra dialect notes are kept as-is."""

    model_config = ConfigDict(extra="allow")

    formality: Optional[str] = None
    gestures: Optional[str] = None
    regional_variations: Optional[str] = None
    confidence_score: Optional[float] = None
    human_review: Optional[bool] = None


class ScoringCriterion(BaseModel):
    criterion: str
    weight: float
    description: str = ""


class SampleResponse(BaseModel):
    text: str = ""
    ipa: str = ""


class SpeakingRubric(BaseModel):
    model_config = ConfigDict(extra="allow")

    activity_id: Optional[str] = None
    type: Optional[str] = None
    title: str = ""
    scenario: str = ""
    prompt: str = ""
    expected_elements: List[str] = Field(default_factory=list)
    phoneme_confidence_threshold: Optional[float] = None
    intelligibility_threshold: Optional[float] = None
    scoring_criteria: List[ScoringCriterion] = Field(default_factory=list)
    sample_response: Optional[SampleResponse] = None
    phoneme_focus: List[str] = Field(default_factory=list)
    phoneme_tolerance: Optional[Dict[str, Any]] = None


class Activity(BaseModel):
    model_config = ConfigDict(extra="allow")

    activity_id: str
    type: str
    title: str = ""
    content: Any = None
    estimated_minutes: int = 0


class Lesson(BaseModel):
    """Canonical content unit, identical in shape before and after resolution."""

    model_config = ConfigDict(extra="allow")

    lesson_id: str
    level: str
    dialect: str
    title: LocalizedTitle
    objectives: List[str] = Field(default_factory=list)
    estimated_minutes: int = 0
    prerequisite_ids: List[str] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)
    dialogue_blocks: List[DialogueBlock] = Field(default_factory=list)
    vocabulary: List[VocabularyEntry] = Field(default_factory=list)
    srs_flashcards: List[SrsFlashcard] = Field(default_factory=list)
    exercises: List[Exercise] = Field(default_factory=list)
    cultural_notes: Optional[CulturalNotes] = None
    speaking_rubric: Optional[SpeakingRubric] = None
    acceptance_criteria: List[str] = Field(default_factory=list)
    confidence_score: Optional[float] = None
    human_review: Optional[bool] = None
