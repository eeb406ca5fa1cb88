from __future__ import annotations


def test_phrasing_for_returns_dialect_variant(base_lesson):
    line = base_lesson.dialogue_blocks[0]

    phrasing = line.phrasing_for("es-PR")

    assert phrasing is not None
    assert phrasing.text == "Este es mi pai."
    assert phrasing.confidence_score == 0.8


def test_phrasing_for_unknown_dialect_is_none(base_lesson):
    assert base_lesson.dialogue_blocks[0].phrasing_for("es-ES") is None
    assert base_lesson.dialogue_blocks[1].phrasing_for("es-PR") is None


def test_unknown_lesson_keys_are_preserved(base_lesson):
    assert base_lesson.vocabulary[0].model_extra == {"frequency_rank": 310}
