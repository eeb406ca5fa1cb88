"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import copy
import json
import random
import sys
from pathlib import Path

import pytest

# Ensure the lingua package is importable when tests run from the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from lingua.schemas.lesson_schema import Lesson
from lingua.schemas.override_schema import DialectOverride


BASE_LESSON = {
    "lesson_id": "a1-family",
    "level": "A1",
    "dialect": "es-MX",
    "title": {"native": "Family & Relationships", "localized": "La familia"},
    "objectives": ["Name family members", "Describe your family"],
    "estimated_minutes": 20,
    "prerequisite_ids": ["a1-greetings"],
    "dialogue_blocks": [
        {
            "speaker": "Ana",
            "text": "Este es mi papá.",
            "translation": "This is my dad.",
            "ipa": "ˈes.te es mi paˈpa",
            "dialect": "es-MX",
            "context": "Introducing a parent",
            "alternate_phrasing": [
                {"dialect": "es-PR", "text": "Este es mi pai.", "ipa": "", "confidence_score": 0.8}
            ],
        },
        {
            "speaker": "Luis",
            "text": "¡Mucho gusto, señor!",
            "translation": "Nice to meet you, sir!",
            "ipa": "",
            "dialect": "es-MX",
            "context": "",
            "alternate_phrasing": [],
        },
    ],
    "vocabulary": [
        {"word": "papá", "translation": "dad", "ipa": "paˈpa", "pos": "noun", "frequency_rank": 310},
        {"word": "mamá", "translation": "mom", "ipa": "maˈma", "pos": "noun", "frequency_rank": 305},
    ],
    "srs_flashcards": [
        {
            "card_id": "fam-001",
            "front": "papá",
            "back": "dad",
            "next_review_days": 1,
            "ease_factor": 2.5,
            "interval": 1,
            "repetitions": 0,
        }
    ],
    "exercises": [
        {
            "exercise_id": "fam-mc-1",
            "type": "multiple_choice",
            "instruction": "Choose the greeting",
            "options": [{"text": "Hola", "correct": True}, {"text": "Adiós", "correct": False}],
            "feedback": {"correct": "¡Bien!", "incorrect": "Try again."},
        },
        {
            "exercise_id": "fam-match-1",
            "type": "matching",
            "instruction": "Match the words",
            "pairs": [
                {"spanish": "papá", "english": "dad"},
                {"spanish": "mamá", "english": "mom"},
                {"spanish": "hermano", "english": "brother"},
            ],
        },
        {
            "exercise_id": "fam-fill-1",
            "type": "fill_in_blanks",
            "instruction": "Complete the dialogue",
            "dialogue": [
                {"speaker": "A", "text": "Yo _____ Ana."},
                {"speaker": "B", "text": "Mucho _____."},
            ],
            "answers": ["soy", "gusto"],
            "acceptable_variants": {"soy": ["Soy", "SOY "]},
        },
        {
            "exercise_id": "fam-order-1",
            "type": "ordering",
            "instruction": "Put the words in order",
        },
    ],
    "cultural_notes": {
        "formality": "Use usted with elders.",
        "gestures": "A handshake is common.",
        "regional_variations": "Papá is used everywhere.",
        "confidence_score": 0.9,
        "human_review": True,
    },
    "speaking_rubric": {
        "activity_id": "fam-speak-1",
        "type": "speaking",
        "title": "Introduce your dad",
        "scenario": "Meeting a friend",
        "prompt": "Introduce your father.",
        "expected_elements": ["papá", "este es"],
        "phoneme_confidence_threshold": 0.7,
        "intelligibility_threshold": 0.6,
        "scoring_criteria": [{"criterion": "accuracy", "weight": 1.0, "description": "Words"}],
        "sample_response": {"text": "Este es mi papá.", "ipa": ""},
        "phoneme_tolerance": {"s_aspiration": False, "d_deletion": False},
    },
    "confidence_score": 0.95,
    "human_review": True,
}

PR_OVERRIDE = {
    "lesson_id": "a1-family",
    "dialect": "es-PR",
    "overrides": {
        "vocabulary_replacements": [{"base": "papá", "dialect": "pai"}],
        "dialogue_line_replacements": [{"line_index": 0, "text": "Este es mi pai."}],
        "cultural_notes_overrides": {"formality": "Usted is less common among family."},
        "phoneme_tolerance_adjustments": {"s_aspiration": True, "relaxed_rhythm": True},
    },
}


@pytest.fixture()
def base_document() -> dict:
    return copy.deepcopy(BASE_LESSON)


@pytest.fixture()
def override_document() -> dict:
    return copy.deepcopy(PR_OVERRIDE)


@pytest.fixture()
def base_lesson(base_document) -> Lesson:
    return Lesson.model_validate(base_document)


@pytest.fixture()
def pr_override(override_document) -> DialectOverride:
    return DialectOverride.model_validate(override_document)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def content_dir(tmp_path, base_document, override_document) -> Path:
    """A content directory with one lesson, an es-PR override and a stray file."""

    directory = tmp_path / "content"
    directory.mkdir()

    def write(name: str, payload: dict) -> None:
        (directory / name).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

    write("a1-family.base.json", base_document)
    write("a1-family.overrides.es-PR.json", override_document)

    greetings = copy.deepcopy(base_document)
    greetings["lesson_id"] = "a1-greetings"
    greetings["title"] = {"native": "Greetings", "localized": "Saludos"}
    write("a1-greetings.base.json", greetings)

    write("a1-weather.overrides.es-ES.json", {"overrides": {}})
    return directory
