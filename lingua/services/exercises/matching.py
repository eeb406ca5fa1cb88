from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from lingua.schemas.exercise_schema import MatchingExercise
from lingua.services.exercises.base_evaluator import BaseExerciseEvaluator, CompletionCallback

logger = logging.getLogger(__name__)


class PairingOutcome(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"


@dataclass(frozen=True)
class MatchTarget:
    """A right-column item; ``target_id`` tells apart targets sharing the same text."""

    target_id: int
    text: str


class MatchingEvaluator(BaseExerciseEvaluator):
    """Pairs are built one at a time and only correct pairs are kept.

    A wrong pairing is rejected on the spot and clears the selection without
    consuming an attempt; submission opens once every source item is paired,
    so a submitted matching exercise is always correct.
    """

    exercise: MatchingExercise

    def __init__(
        self,
        exercise: MatchingExercise,
        *,
        rng: Optional[random.Random] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        super().__init__(exercise, rng=rng, on_complete=on_complete)
        self._solution: Dict[str, str] = {}
        for pair in exercise.pairs:
            self._solution.setdefault(pair.source_text, pair.target_text)

        self.source_items: List[str] = list(self._solution)
        targets = [
            MatchTarget(target_id=index, text=pair.target_text)
            for index, pair in enumerate(exercise.pairs)
        ]
        self._rng.shuffle(targets)
        self.target_items: List[MatchTarget] = targets
        self._targets_by_id: Dict[int, MatchTarget] = {target.target_id: target for target in targets}

        self._pairs: Dict[str, int] = {}
        self.selected_source: Optional[str] = None

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def select_source(self, source_text: str) -> PairingOutcome:
        """Pick (or un-pick) a source item awaiting its target."""

        if (
            not self._accepts_input()
            or source_text not in self._solution
            or source_text in self._pairs
        ):
            return PairingOutcome.IGNORED
        if self.selected_source == source_text:
            self.selected_source = None
            return PairingOutcome.DESELECTED
        self.selected_source = source_text
        return PairingOutcome.SELECTED

    def select_target(self, target_id: int) -> PairingOutcome:
        """Try to pair the picked source item with the target ``target_id``."""

        target = self._targets_by_id.get(target_id)
        if (
            not self._accepts_input()
            or self.selected_source is None
            or target is None
            or self.is_paired(target_id)
        ):
            return PairingOutcome.IGNORED

        source_text = self.selected_source
        self.selected_source = None
        if self._solution[source_text] != target.text:
            logger.debug(
                "[EXERCISE] %s: pairing %r -> %r rejected",
                self.exercise_id,
                source_text,
                target.text,
            )
            return PairingOutcome.REJECTED

        self._pairs[source_text] = target_id
        return PairingOutcome.ACCEPTED

    def is_paired(self, target_id: int) -> bool:
        return target_id in self._pairs.values()

    def free_target(self, text: str) -> Optional[int]:
        """First unpaired target showing ``text``, in display order."""

        for target in self.target_items:
            if target.text == text and not self.is_paired(target.target_id):
                return target.target_id
        return None

    @property
    def matched(self) -> Dict[str, str]:
        return {
            source_text: self._targets_by_id[target_id].text
            for source_text, target_id in self._pairs.items()
        }

    @property
    def remaining(self) -> int:
        return len(self._solution) - len(self._pairs)

    # ------------------------------------------------------------------
    # Evaluator hooks
    # ------------------------------------------------------------------
    @property
    def can_submit(self) -> bool:
        return self.remaining == 0

    @property
    def correct_answer(self) -> Dict[str, str]:
        return dict(self._solution)

    def _accept_answer(self, answer: Any) -> None:
        """Replay a ``{source: target text}`` mapping through the pairing rules."""

        if not isinstance(answer, Mapping):
            return
        for source_text, target_text in answer.items():
            target_id = self.free_target(target_text)
            if target_id is None:
                continue
            if self.select_source(source_text) == PairingOutcome.SELECTED:
                self.select_target(target_id)

    def _evaluate(self) -> Tuple[bool, str]:
        is_correct = len(self._pairs) == len(self._solution)
        return is_correct, json.dumps(self.matched, ensure_ascii=False)

    def _clear_input(self) -> None:
        self._pairs = {}
        self.selected_source = None
