"""Exercise documents (tagged union on ``type``) and the result record."""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BLANK_MARKER = "_____"


class ExerciseFeedback(BaseModel):
    correct: str = ""
    incorrect: str = ""


class ExerciseOption(BaseModel):
    text: str
    correct: bool = Field(
        default=False,
        validation_alias=AliasChoices("correct", "is_correct", "isCorrect"),
    )


class MatchingPair(BaseModel):
    """A source item and the target item it must be paired with."""

    source_text: str = Field(validation_alias=AliasChoices("source_text", "spanish", "source"))
    target_text: str = Field(validation_alias=AliasChoices("target_text", "english", "target"))


class DialogueLine(BaseModel):
    speaker: str
    text: str

    @property
    def blank_count(self) -> int:
        return self.text.count(BLANK_MARKER)


class _ExerciseBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    exercise_id: str
    instruction: str = ""
    question: Optional[str] = None
    feedback: Optional[ExerciseFeedback] = None


class MultipleChoiceExercise(_ExerciseBase):
    type: Literal["multiple_choice"] = "multiple_choice"
    options: List[ExerciseOption] = Field(default_factory=list)


class MatchingExercise(_ExerciseBase):
    type: Literal["matching"] = "matching"
    pairs: List[MatchingPair] = Field(default_factory=list)


class FillInBlanksExercise(_ExerciseBase):
    """Dialogue with ``_____`` markers and one expected answer per marker.

    ``acceptable_variants`` maps an expected answer to alternate spellings.
    ``word_bank`` optionally lists the tiles offered (distractors included);
    without it the bank is made of the expected answers.
    """

    type: Literal["fill_in_blanks"] = "fill_in_blanks"
    dialogue: List[DialogueLine] = Field(default_factory=list)
    answers: List[str] = Field(default_factory=list)
    acceptable_variants: Dict[str, List[str]] = Field(default_factory=dict)
    word_bank: Optional[List[str]] = None


class UnsupportedExercise(_ExerciseBase):
    """Exercise types that appear in content but have no evaluator."""

    type: Literal["ordering", "speaking"]


Exercise = Annotated[
    Union[MultipleChoiceExercise, MatchingExercise, FillInBlanksExercise, UnsupportedExercise],
    Field(discriminator="type"),
]


class ExerciseResult(BaseModel):
    """Outcome of one accepted submission.

    Serialises as ``{exerciseId, isCorrect, userAnswer, attempts}`` with
    ``model_dump(by_alias=True)``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    exercise_id: str
    is_correct: bool
    user_answer: str
    attempts: int = Field(ge=1)

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
