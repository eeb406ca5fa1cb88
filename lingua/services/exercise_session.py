"""Evaluators for every exercise of one resolved lesson."""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from lingua.schemas.exercise_schema import ExerciseResult
from lingua.schemas.lesson_schema import Lesson
from lingua.services.exercises import BaseExerciseEvaluator, build_evaluator

logger = logging.getLogger(__name__)


class ExerciseSession:
    """Holds one evaluator per supported exercise and the latest result of each.

    The session lives as long as the lesson is on screen. Results are kept by
    exercise id, a newer result replacing an older one; persisting them is the
    caller's job (``on_complete`` receives each finalised result).
    """

    def __init__(
        self,
        lesson: Lesson,
        *,
        rng: Optional[random.Random] = None,
        on_complete: Optional[Callable[[ExerciseResult], None]] = None,
    ) -> None:
        self.lesson_id = lesson.lesson_id
        self._rng = rng or random.Random()
        self._on_complete = on_complete
        self.results: Dict[str, ExerciseResult] = {}
        self.evaluators: Dict[str, BaseExerciseEvaluator] = {}

        for exercise in lesson.exercises:
            evaluator = build_evaluator(exercise, rng=self._rng, on_complete=self._record)
            if evaluator is not None:
                self.evaluators[exercise.exercise_id] = evaluator

        logger.debug(
            "[EXERCISE] session for %s: %s/%s exercises playable",
            self.lesson_id,
            len(self.evaluators),
            len(lesson.exercises),
        )

    def _record(self, result: ExerciseResult) -> None:
        self.results[result.exercise_id] = result
        if self._on_complete is not None:
            self._on_complete(result)

    def evaluator(self, exercise_id: str) -> BaseExerciseEvaluator:
        return self.evaluators[exercise_id]

    def restart(self, exercise_id: str) -> BaseExerciseEvaluator:
        """Start an exercise over (attempts back to zero); its last result stays recorded."""

        evaluator = self.evaluators[exercise_id]
        evaluator.reset()
        return evaluator

    @property
    def completed_ids(self) -> List[str]:
        return [exercise_id for exercise_id in self.evaluators if exercise_id in self.results]

    @property
    def correct_count(self) -> int:
        return sum(1 for result in self.results.values() if result.is_correct)

    @property
    def is_complete(self) -> bool:
        return all(exercise_id in self.results for exercise_id in self.evaluators)
