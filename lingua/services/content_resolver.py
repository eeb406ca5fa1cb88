"""Overlay a sparse dialect override onto a base lesson."""

from __future__ import annotations

import logging
from typing import List, Optional

from lingua.schemas.lesson_schema import Lesson
from lingua.schemas.override_schema import (
    CulturalNotesOverride,
    DialectOverride,
    DialogueLineReplacement,
    VocabularyReplacement,
)

logger = logging.getLogger(__name__)


class ContentResolver:
    """Produce the lesson a learner sees for one ``(lesson, dialect)`` pair.

    Resolution always works on a deep copy of the base lesson. Each override
    category is applied only when present in the document, in a fixed order
    (vocabulary, dialogue lines, cultural notes, phoneme tolerance). References
    to vocabulary words or dialogue lines missing from the base are skipped:
    content and overrides evolve separately and rendering must not fail.
    """

    def resolve(
        self,
        base: Lesson,
        override: Optional[DialectOverride],
        target_dialect: str,
    ) -> Lesson:
        resolved = base.model_copy(deep=True)
        resolved.dialect = target_dialect

        if override is None:
            logger.debug(
                "[RESOLVER] %s: no override for %s, base content relabelled",
                base.lesson_id,
                target_dialect,
            )
            return resolved

        sections = override.overrides
        if sections.vocabulary_replacements is not None:
            self._apply_vocabulary(resolved, sections.vocabulary_replacements)
        if sections.dialogue_line_replacements is not None:
            self._apply_dialogue_lines(resolved, sections.dialogue_line_replacements)
        if sections.cultural_notes_overrides is not None:
            self._apply_cultural_notes(resolved, sections.cultural_notes_overrides)
        if sections.phoneme_tolerance_adjustments is not None:
            self._apply_phoneme_tolerance(resolved, sections.phoneme_tolerance_adjustments)

        logger.info("[RESOLVER] %s resolved for %s", base.lesson_id, target_dialect)
        return resolved

    # ------------------------------------------------------------------
    # Category patches (mutate the private copy only)
    # ------------------------------------------------------------------
    def _apply_vocabulary(self, lesson: Lesson, replacements: List[VocabularyReplacement]) -> None:
        for replacement in replacements:
            entry = next(
                (item for item in lesson.vocabulary if item.word == replacement.base_word),
                None,
            )
            if entry is None:
                logger.debug(
                    "[RESOLVER] %s: vocabulary word %r not found, skipped",
                    lesson.lesson_id,
                    replacement.base_word,
                )
                continue
            entry.word = replacement.dialect_word

    def _apply_dialogue_lines(
        self, lesson: Lesson, replacements: List[DialogueLineReplacement]
    ) -> None:
        blocks = lesson.dialogue_blocks
        for replacement in replacements:
            index = replacement.line_index
            # Negative indices would silently address the end of the dialogue.
            if index < 0 or index >= len(blocks):
                logger.debug(
                    "[RESOLVER] %s: dialogue line %s out of range, skipped",
                    lesson.lesson_id,
                    index,
                )
                continue
            blocks[index].text = replacement.text
            blocks[index].translation = replacement.translation

    def _apply_cultural_notes(self, lesson: Lesson, notes: CulturalNotesOverride) -> None:
        if lesson.cultural_notes is None:
            logger.debug("[RESOLVER] %s: no base cultural notes, skipped", lesson.lesson_id)
            return
        lesson.cultural_notes = lesson.cultural_notes.model_copy(update=notes.present_fields())

    def _apply_phoneme_tolerance(self, lesson: Lesson, adjustments: dict) -> None:
        rubric = lesson.speaking_rubric
        if rubric is None:
            logger.debug("[RESOLVER] %s: no speaking rubric, skipped", lesson.lesson_id)
            return
        merged = dict(rubric.phoneme_tolerance or {})
        merged.update(adjustments)
        rubric.phoneme_tolerance = merged


_default_resolver = ContentResolver()


def resolve_lesson(
    base: Lesson,
    override: Optional[DialectOverride],
    target_dialect: str,
) -> Lesson:
    """Module-level shortcut around a shared stateless resolver."""

    return _default_resolver.resolve(base, override, target_dialect)
