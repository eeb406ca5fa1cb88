from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from lingua.schemas.exercise_schema import FillInBlanksExercise
from lingua.services.exercises.base_evaluator import BaseExerciseEvaluator, CompletionCallback

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordTile:
    """A word-bank tile; ``tile_id`` tells apart tiles sharing the same text."""

    tile_id: int
    text: str


class BlankPlacement:
    """Bidirectional blank <-> tile mapping.

    Invariant: a tile identity occupies at most one blank, and a blank holds at
    most one tile. Only :meth:`place` and :meth:`vacate` mutate it.
    """

    def __init__(self, blank_count: int) -> None:
        self._slots: List[Optional[int]] = [None] * blank_count
        self._tile_slots: Dict[int, int] = {}

    def place(self, tile_id: int, slot: int) -> Optional[int]:
        """Put ``tile_id`` in ``slot`` and return the tile it displaced, if any.

        A tile already sitting in another blank leaves that blank first.
        """

        if not 0 <= slot < len(self._slots):
            raise IndexError(slot)
        previous_slot = self._tile_slots.get(tile_id)
        if previous_slot == slot:
            return None
        if previous_slot is not None:
            self.vacate(previous_slot)
        displaced = self.vacate(slot)
        self._slots[slot] = tile_id
        self._tile_slots[tile_id] = slot
        return displaced

    def vacate(self, slot: int) -> Optional[int]:
        """Empty ``slot`` and return the tile that was in it."""

        if not 0 <= slot < len(self._slots):
            raise IndexError(slot)
        tile_id = self._slots[slot]
        if tile_id is not None:
            self._slots[slot] = None
            del self._tile_slots[tile_id]
        return tile_id

    def tile_at(self, slot: int) -> Optional[int]:
        return self._slots[slot]

    def slot_of(self, tile_id: int) -> Optional[int]:
        return self._tile_slots.get(tile_id)

    def is_placed(self, tile_id: int) -> bool:
        return tile_id in self._tile_slots

    @property
    def slots(self) -> Tuple[Optional[int], ...]:
        return tuple(self._slots)

    @property
    def all_filled(self) -> bool:
        return all(tile_id is not None for tile_id in self._slots)

    def clear(self) -> None:
        for slot in range(len(self._slots)):
            self.vacate(slot)


def _norm(value: str) -> str:
    return value.strip().lower()


def blank_matches(word: str, expected: str, variants: Mapping[str, Iterable[str]]) -> bool:
    """Trimmed, case-insensitive match against the expected word or its variants."""

    candidate = _norm(word)
    if candidate == _norm(expected):
        return True
    return any(candidate == _norm(variant) for variant in variants.get(expected, ()))


class FillInBlanksEvaluator(BaseExerciseEvaluator):
    """Word-bank tiles dropped into ordered blanks of a short dialogue."""

    exercise: FillInBlanksExercise

    def __init__(
        self,
        exercise: FillInBlanksExercise,
        *,
        rng: Optional[random.Random] = None,
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        super().__init__(exercise, rng=rng, on_complete=on_complete)
        self.answers: List[str] = list(exercise.answers)
        self.variants: Dict[str, List[str]] = dict(exercise.acceptable_variants)

        marker_count = sum(line.blank_count for line in exercise.dialogue)
        if exercise.dialogue and marker_count != len(self.answers):
            logger.warning(
                "[EXERCISE] %s: %s blank markers for %s answers",
                exercise.exercise_id,
                marker_count,
                len(self.answers),
            )

        words = exercise.word_bank if exercise.word_bank is not None else self.answers
        tiles = [WordTile(tile_id=index, text=word) for index, word in enumerate(words)]
        self._rng.shuffle(tiles)
        self.word_bank: List[WordTile] = tiles
        self._tiles_by_id: Dict[int, WordTile] = {tile.tile_id: tile for tile in tiles}

        self.placement = BlankPlacement(len(self.answers))
        self.picked_tile: Optional[int] = None

    # ------------------------------------------------------------------
    # Interaction (tap a tile, then tap a blank)
    # ------------------------------------------------------------------
    def select_tile(self, tile_id: int) -> bool:
        """Pick or un-pick a tile still in the bank."""

        if not self._accepts_input() or tile_id not in self._tiles_by_id or self.placement.is_placed(tile_id):
            return False
        self.picked_tile = None if self.picked_tile == tile_id else tile_id
        return True

    def select_blank(self, slot: int) -> bool:
        """Drop the picked tile in ``slot``, or send a placed tile back to the bank."""

        if not self._accepts_input() or not 0 <= slot < len(self.answers):
            return False
        if self.picked_tile is not None:
            self.placement.place(self.picked_tile, slot)
            self.picked_tile = None
            return True
        return self.placement.vacate(slot) is not None

    def place(self, tile_id: int, slot: int) -> bool:
        """Direct placement, bypassing the pick step."""

        if not self._accepts_input() or tile_id not in self._tiles_by_id or not 0 <= slot < len(self.answers):
            return False
        self.placement.place(tile_id, slot)
        if self.picked_tile == tile_id:
            self.picked_tile = None
        return True

    def word_at(self, slot: int) -> Optional[str]:
        tile_id = self.placement.tile_at(slot)
        if tile_id is None:
            return None
        return self._tiles_by_id[tile_id].text

    def blank_results(self) -> List[Optional[bool]]:
        """Per-blank correctness; ``None`` for an empty blank."""

        results: List[Optional[bool]] = []
        for slot, expected in enumerate(self.answers):
            word = self.word_at(slot)
            results.append(None if word is None else blank_matches(word, expected, self.variants))
        return results

    # ------------------------------------------------------------------
    # Evaluator hooks
    # ------------------------------------------------------------------
    @property
    def can_submit(self) -> bool:
        return self.placement.all_filled

    @property
    def correct_answer(self) -> List[str]:
        return list(self.answers)

    def _accept_answer(self, answer: Any) -> None:
        """Accept a sequence of tile ids, one per blank in order."""

        if not isinstance(answer, Sequence) or isinstance(answer, str):
            return
        for slot, tile_id in enumerate(answer[: len(self.answers)]):
            if tile_id is not None:
                self.place(tile_id, slot)

    def _evaluate(self) -> Tuple[bool, str]:
        results = self.blank_results()
        is_correct = all(result is True for result in results)
        user_answer = ",".join(self.word_at(slot) or "" for slot in range(len(self.answers)))
        return is_correct, user_answer

    def _clear_input(self) -> None:
        self.placement.clear()
        self.picked_tile = None
