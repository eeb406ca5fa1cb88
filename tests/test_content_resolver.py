from __future__ import annotations

import pytest
from pydantic import ValidationError

from lingua.schemas.lesson_schema import Lesson
from lingua.schemas.override_schema import DialectOverride
from lingua.services.content_resolver import ContentResolver, resolve_lesson


def _override(**sections) -> DialectOverride:
    return DialectOverride.model_validate({"overrides": sections})


def test_absent_override_only_relabels_dialect(base_lesson):
    resolved = resolve_lesson(base_lesson, None, "es-419")

    assert resolved.dialect == "es-419"
    assert resolved.model_dump(exclude={"dialect"}) == base_lesson.model_dump(exclude={"dialect"})


def test_empty_override_document_is_a_no_op(base_lesson):
    resolved = resolve_lesson(base_lesson, DialectOverride.model_validate({}), "es-ES")

    assert resolved.model_dump(exclude={"dialect"}) == base_lesson.model_dump(exclude={"dialect"})


def test_puerto_rico_override_end_to_end(base_lesson, pr_override):
    resolved = ContentResolver().resolve(base_lesson, pr_override, "es-PR")

    assert resolved.dialect == "es-PR"
    assert resolved.vocabulary[0].word == "pai"
    assert resolved.vocabulary[0].translation == "dad"
    assert resolved.vocabulary[1].word == "mamá"

    line = resolved.dialogue_blocks[0]
    assert line.text == "Este es mi pai."
    # Replacement without translation clears the base translation.
    assert line.translation is None
    assert line.speaker == "Ana"
    assert line.ipa == "ˈes.te es mi paˈpa"

    notes = resolved.cultural_notes
    assert notes.formality == "Usted is less common among family."
    assert notes.gestures == "A handshake is common."
    assert notes.confidence_score == 0.9
    assert notes.human_review is True

    assert resolved.speaking_rubric.phoneme_tolerance == {
        "s_aspiration": True,
        "d_deletion": False,
        "relaxed_rhythm": True,
    }


def test_resolution_never_mutates_base(base_lesson, pr_override):
    before = base_lesson.model_dump()

    resolve_lesson(base_lesson, pr_override, "es-PR")

    assert base_lesson.model_dump() == before
    assert base_lesson.dialect == "es-MX"


def test_only_first_matching_vocabulary_entry_is_replaced(base_document):
    base_document["vocabulary"].append({"word": "papá", "translation": "pope"})
    lesson = Lesson.model_validate(base_document)
    resolved = resolve_lesson(
        lesson, _override(vocabulary_replacements=[{"base_word": "papá", "dialect_word": "pai"}]), "es-PR"
    )

    assert [entry.word for entry in resolved.vocabulary] == ["pai", "mamá", "papá"]


def test_unknown_vocabulary_word_is_skipped(base_lesson):
    resolved = resolve_lesson(
        base_lesson, _override(vocabulary_replacements=[{"base": "abuelo", "dialect": "abuelito"}]), "es-PR"
    )

    assert [entry.word for entry in resolved.vocabulary] == ["papá", "mamá"]


@pytest.mark.parametrize("line_index", [5, 2, -1])
def test_out_of_range_dialogue_line_is_skipped(base_lesson, line_index):
    resolved = resolve_lesson(
        base_lesson,
        _override(dialogue_line_replacements=[{"line_index": line_index, "text": "Nada"}]),
        "es-ES",
    )

    assert [block.text for block in resolved.dialogue_blocks] == [
        "Este es mi papá.",
        "¡Mucho gusto, señor!",
    ]


def test_dialogue_replacement_keeps_given_translation(base_lesson):
    resolved = resolve_lesson(
        base_lesson,
        _override(
            dialogue_line_replacements=[
                {"line_index": 1, "text": "¡Encantado, señor!", "translation": "Delighted, sir!"}
            ]
        ),
        "es-ES",
    )

    assert resolved.dialogue_blocks[1].text == "¡Encantado, señor!"
    assert resolved.dialogue_blocks[1].translation == "Delighted, sir!"
    assert resolved.dialogue_blocks[0].translation == "This is my dad."


def test_cultural_notes_explicit_null_replaces_field(base_lesson):
    resolved = resolve_lesson(
        base_lesson, _override(cultural_notes_overrides={"gestures": None}), "es-ES"
    )

    assert resolved.cultural_notes.gestures is None
    assert resolved.cultural_notes.formality == "Use usted with elders."


def test_cultural_notes_override_ignores_unknown_keys(base_lesson):
    resolved = resolve_lesson(
        base_lesson,
        _override(cultural_notes_overrides={"formality": "Tú is fine.", "confidence_score": 0.1}),
        "es-ES",
    )

    assert resolved.cultural_notes.formality == "Tú is fine."
    assert resolved.cultural_notes.confidence_score == 0.9


def test_cultural_notes_without_base_notes_are_skipped(base_document):
    base_document["cultural_notes"] = None
    lesson = Lesson.model_validate(base_document)

    resolved = resolve_lesson(lesson, _override(cultural_notes_overrides={"formality": "x"}), "es-ES")

    assert resolved.cultural_notes is None


def test_phoneme_adjustments_without_rubric_are_skipped(base_document):
    base_document["speaking_rubric"] = None
    lesson = Lesson.model_validate(base_document)

    resolved = resolve_lesson(
        lesson, _override(phoneme_tolerance_adjustments={"s_aspiration": True}), "es-PR"
    )

    assert resolved.speaking_rubric is None


def test_unknown_override_category_is_rejected():
    with pytest.raises(ValidationError):
        _override(grammar_replacements=[{"base": "vosotros", "dialect": "ustedes"}])
