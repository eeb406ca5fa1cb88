from __future__ import annotations

import logging
import random
from typing import Any, Optional, Tuple

from lingua.schemas.exercise_schema import MultipleChoiceExercise
from lingua.services.exercises.base_evaluator import BaseExerciseEvaluator, CompletionCallback

logger = logging.getLogger(__name__)


class MultipleChoiceEvaluator(BaseExerciseEvaluator):
    """Correct iff the selected option text equals the flagged option text."""

    exercise: MultipleChoiceExercise

    def __init__(
        self,
        exercise: MultipleChoiceExercise,
        *,
        rng: Optional[random.Random] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        super().__init__(exercise, rng=rng, on_complete=on_complete)
        self.selected: str = ""
        self._correct_text = self._find_correct_text(exercise)

    @staticmethod
    def _find_correct_text(exercise: MultipleChoiceExercise) -> Optional[str]:
        flagged = [option.text for option in exercise.options if option.correct]
        if not flagged:
            logger.warning(
                "[EXERCISE] %s: no option flagged correct, every answer will be wrong",
                exercise.exercise_id,
            )
            return None
        if len(flagged) > 1:
            logger.warning(
                "[EXERCISE] %s: %s options flagged correct, using the first",
                exercise.exercise_id,
                len(flagged),
            )
        return flagged[0]

    def select(self, option_text: str) -> bool:
        """Record the learner's choice; ignored once the exercise is final."""

        if not self._accepts_input():
            return False
        self.selected = option_text
        return True

    @property
    def can_submit(self) -> bool:
        return bool(self.selected)

    @property
    def correct_answer(self) -> Optional[str]:
        return self._correct_text

    def _accept_answer(self, answer: Any) -> None:
        self.selected = str(answer)

    def _evaluate(self) -> Tuple[bool, str]:
        is_correct = self._correct_text is not None and self.selected == self._correct_text
        return is_correct, self.selected

    def _clear_input(self) -> None:
        self.selected = ""
