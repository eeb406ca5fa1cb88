"""Shared interaction state machine for every exercise variant."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from lingua.schemas.exercise_schema import ExerciseResult

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3

CompletionCallback = Callable[[ExerciseResult], None]


class ExerciseStatus(str, Enum):
    UNANSWERED = "unanswered"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class EvaluatorState:
    """Snapshot of an evaluator, safe to hand to a renderer."""

    status: ExerciseStatus
    attempts: int
    is_correct: Optional[bool] = None
    revealed: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.status == ExerciseStatus.SUBMITTED and (
            bool(self.is_correct) or self.attempts >= MAX_ATTEMPTS
        )


class BaseExerciseEvaluator(ABC):
    """
    Machine à états commune : ``Unanswered -> Submitted``. Une réponse fausse
    avec des essais restants laisse l'exercice rouvrable : une nouvelle saisie ou
    un nouveau ``submit`` repart de ``Unanswered``. Une bonne réponse ou le
    troisième essai rendent ``Submitted`` terminal. Les sous-classes ne
    fournissent que la saisie et le calcul de correction ; ce socle ne branche
    jamais sur le type d'exercice.
    """

    def __init__(
        self,
        exercise: Any,
        *,
        rng: Optional[random.Random] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        self.exercise = exercise
        self.exercise_id: str = exercise.exercise_id
        self._rng = rng or random.Random()
        self._on_complete = on_complete
        self._status = ExerciseStatus.UNANSWERED
        self._attempts = 0
        self._is_correct: Optional[bool] = None

    # ------------------------------------------------------------------
    # Capability set
    # ------------------------------------------------------------------
    def submit(self, answer: Any = None) -> Optional[ExerciseResult]:
        """Grade an answer and return a result, or ``None`` if rejected.

        After a wrong answer with attempts left, a new ``submit`` discards the
        graded input and grades ``answer`` instead. A final exercise ignores it.
        """

        if self.is_terminal:
            logger.debug(
                "[EXERCISE] %s: submit ignored, exercise is final (attempts=%s)",
                self.exercise_id,
                self._attempts,
            )
            return None

        if self._status == ExerciseStatus.SUBMITTED:
            self._reopen()
            self._clear_input()

        if answer is not None:
            self._accept_answer(answer)
        if not self.can_submit:
            logger.debug("[EXERCISE] %s: submit ignored, input incomplete", self.exercise_id)
            return None

        self._attempts += 1
        is_correct, user_answer = self._evaluate()
        self._is_correct = is_correct
        self._status = ExerciseStatus.SUBMITTED

        result = ExerciseResult(
            exercise_id=self.exercise_id,
            is_correct=is_correct,
            user_answer=user_answer,
            attempts=self._attempts,
        )

        if self.is_terminal:
            logger.info(
                "[EXERCISE] %s finalised: correct=%s attempts=%s",
                self.exercise_id,
                is_correct,
                self._attempts,
            )
            if self._on_complete is not None:
                self._on_complete(result)
        return result

    def reset(self) -> None:
        """Bring the instance back to its fresh state, attempts included."""

        self._reopen()
        self._attempts = 0
        self._clear_input()
        logger.debug("[EXERCISE] %s: reset", self.exercise_id)

    def current_state(self) -> EvaluatorState:
        return EvaluatorState(
            status=self._status,
            attempts=self._attempts,
            is_correct=self._is_correct,
            revealed=self.revealed,
        )

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def is_terminal(self) -> bool:
        return self._status == ExerciseStatus.SUBMITTED and (
            bool(self._is_correct) or self._attempts >= MAX_ATTEMPTS
        )

    @property
    def revealed(self) -> bool:
        """True when the cap ran out on a wrong answer and the solution is shown."""

        return self.is_terminal and not self._is_correct

    def _reopen(self) -> None:
        self._status = ExerciseStatus.UNANSWERED
        self._is_correct = None

    def _accepts_input(self) -> bool:
        """Whether learner input is accepted; a graded wrong answer is reopened."""

        if self.is_terminal:
            return False
        if self._status == ExerciseStatus.SUBMITTED:
            self._reopen()
        return True

    # ------------------------------------------------------------------
    # Variant hooks
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def can_submit(self) -> bool:
        """Whether the learner input is complete enough to be graded."""

    @property
    @abstractmethod
    def correct_answer(self) -> Any:
        """The solution shown once the exercise is revealed."""

    @abstractmethod
    def _accept_answer(self, answer: Any) -> None:
        """Load an explicit answer passed to :meth:`submit`."""

    @abstractmethod
    def _evaluate(self) -> Tuple[bool, str]:
        """Return ``(is_correct, serialised_answer)`` for the current input."""

    @abstractmethod
    def _clear_input(self) -> None:
        """Forget the learner input."""
