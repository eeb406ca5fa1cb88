"""Sparse dialect patch documents applied on top of a base lesson."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class VocabularyReplacement(BaseModel):
    """Replace the word of the first vocabulary entry equal to ``base_word``."""

    base_word: str = Field(validation_alias=AliasChoices("base_word", "base"))
    dialect_word: str = Field(validation_alias=AliasChoices("dialect_word", "dialect"))


class DialogueLineReplacement(BaseModel):
    """New text for one dialogue line.

    A missing ``translation`` is stored as ``None`` and always overwrites the
    base translation.
    """

    line_index: int
    text: str
    translation: Optional[str] = None


class CulturalNotesOverride(BaseModel):
    """Display fields replaced wholesale when present (``None`` included)."""

    model_config = ConfigDict(extra="ignore")

    formality: Optional[str] = None
    gestures: Optional[str] = None
    regional_variations: Optional[str] = None

    REPLACED_FIELDS: ClassVar[Tuple[str, ...]] = ("formality", "gestures", "regional_variations")

    def present_fields(self) -> Dict[str, Optional[str]]:
        """Return only the display fields the document actually provided."""

        return {
            name: getattr(self, name)
            for name in self.REPLACED_FIELDS
            if name in self.model_fields_set
        }


class OverrideSections(BaseModel):
    """The four recognised override categories, each independently optional."""

    model_config = ConfigDict(extra="forbid")

    vocabulary_replacements: Optional[List[VocabularyReplacement]] = None
    dialogue_line_replacements: Optional[List[DialogueLineReplacement]] = None
    cultural_notes_overrides: Optional[CulturalNotesOverride] = None
    phoneme_tolerance_adjustments: Optional[Dict[str, Any]] = None


class DialectOverride(BaseModel):
    """Override document as authored on disk."""

    model_config = ConfigDict(extra="allow")

    lesson_id: Optional[str] = None
    dialect: Optional[str] = None
    overrides: OverrideSections = Field(default_factory=OverrideSections)
