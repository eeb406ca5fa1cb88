from .assessment_schema import FeedbackTier, SpeechAssessment
from .exercise_schema import (
    BLANK_MARKER,
    DialogueLine,
    Exercise,
    ExerciseFeedback,
    ExerciseOption,
    ExerciseResult,
    FillInBlanksExercise,
    MatchingExercise,
    MatchingPair,
    MultipleChoiceExercise,
    UnsupportedExercise,
)
from .lesson_schema import (
    Activity,
    AlternatePhrasing,
    CulturalNotes,
    DialogueBlock,
    Lesson,
    LocalizedTitle,
    SampleResponse,
    ScoringCriterion,
    SpeakingRubric,
    SrsFlashcard,
    VocabularyEntry,
)
from .override_schema import (
    CulturalNotesOverride,
    DialectOverride,
    DialogueLineReplacement,
    OverrideSections,
    VocabularyReplacement,
)

__all__ = [
    "Activity",
    "AlternatePhrasing",
    "BLANK_MARKER",
    "CulturalNotes",
    "CulturalNotesOverride",
    "DialectOverride",
    "DialogueBlock",
    "DialogueLine",
    "DialogueLineReplacement",
    "Exercise",
    "ExerciseFeedback",
    "ExerciseOption",
    "ExerciseResult",
    "FeedbackTier",
    "FillInBlanksExercise",
    "Lesson",
    "LocalizedTitle",
    "MatchingExercise",
    "MatchingPair",
    "MultipleChoiceExercise",
    "OverrideSections",
    "SampleResponse",
    "ScoringCriterion",
    "SpeakingRubric",
    "SpeechAssessment",
    "SrsFlashcard",
    "UnsupportedExercise",
    "VocabularyEntry",
    "VocabularyReplacement",
]
