"""Exercise evaluators: one state machine per exercise instance."""

from __future__ import annotations

import logging
import random
from typing import Dict, Optional, Type

from lingua.services.exercises.base_evaluator import (
    MAX_ATTEMPTS,
    BaseExerciseEvaluator,
    CompletionCallback,
    EvaluatorState,
    ExerciseStatus,
)
from lingua.services.exercises.fill_in_blanks import (
    BlankPlacement,
    FillInBlanksEvaluator,
    WordTile,
    blank_matches,
)
from lingua.services.exercises.matching import MatchTarget, MatchingEvaluator, PairingOutcome
from lingua.services.exercises.multiple_choice import MultipleChoiceEvaluator

logger = logging.getLogger(__name__)

EVALUATORS: Dict[str, Type[BaseExerciseEvaluator]] = {
    "multiple_choice": MultipleChoiceEvaluator,
    "matching": MatchingEvaluator,
    "fill_in_blanks": FillInBlanksEvaluator,
}


def build_evaluator(
    exercise,
    *,
    rng: Optional[random.Random] = None,
    on_complete: Optional[CompletionCallback] = None,
) -> Optional[BaseExerciseEvaluator]:
    """Pick the evaluator class once, from the exercise ``type`` tag.

    Types without an evaluator (``ordering``, ``speaking``) yield ``None`` so the
    caller can simply skip them.
    """

    evaluator_cls = EVALUATORS.get(exercise.type)
    if evaluator_cls is None:
        logger.info(
            "[EXERCISE] %s: no evaluator for type %r, skipped",
            exercise.exercise_id,
            exercise.type,
        )
        return None
    return evaluator_cls(exercise, rng=rng, on_complete=on_complete)


__all__ = [
    "EVALUATORS",
    "MAX_ATTEMPTS",
    "BaseExerciseEvaluator",
    "BlankPlacement",
    "CompletionCallback",
    "EvaluatorState",
    "ExerciseStatus",
    "FillInBlanksEvaluator",
    "MatchTarget",
    "MatchingEvaluator",
    "MultipleChoiceEvaluator",
    "PairingOutcome",
    "WordTile",
    "blank_matches",
    "build_evaluator",
]
