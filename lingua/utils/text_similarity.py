"""Normalised edit-distance similarity between two short texts."""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

# Spanish opening marks included; accents are significant and left alone.
_PUNCTUATION = re.compile(r"[¿?¡!.,;:]")


def normalize_text(value: str | None) -> str:
    """Lowercase, strip ``¿?¡!.,;:`` and trim surrounding whitespace."""

    return _PUNCTUATION.sub("", (value or "").lower()).strip()


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance over code points, unit costs."""

    return Levenshtein.distance(a, b)


def similarity(a: str | None, b: str | None) -> float:
    """Return ``1 - distance / max(len)`` on normalised inputs, in ``[0, 1]``.

    Identical normalised strings short-circuit to exactly ``1.0``, which also
    covers two empty inputs.
    """

    na = normalize_text(a)
    nb = normalize_text(b)
    if na == nb:
        return 1.0
    distance = edit_distance(na, nb)
    return 1.0 - distance / max(len(na), len(nb))
