# Fichier : lingua/utils/lang_utils.py
from __future__ import annotations

import re

_TAG_PATTERN = re.compile(r"^([A-Za-z]{2,3})(?:[-_]([A-Za-z]{2}|\d{3}))?$")


def normalize_dialect_tag(tag: str | None) -> str | None:
    """
    Retourne un tag BCP 47 canonique ("es_mx" -> "es-MX", "ES-419" -> "es-419").
    Les libellés libres ("Puerto Rico", "España") passent par detect_dialect.
    Fallback: None.
    """
    value = (tag or "").strip()
    if not value:
        return None

    match = _TAG_PATTERN.match(value)
    if match is None:
        return detect_dialect(value)

    language, region = match.groups()
    if region is None:
        return language.lower()
    return f"{language.lower()}-{region.upper()}"


def detect_dialect(label: str) -> str | None:
    """
    Retourne le tag de dialecte depuis un libellé de région.
    Ex: "Puerto Rico" -> "es-PR", "español de España" -> "es-ES"
    """
    t = (label or "").strip().lower()
    mapping = {
        "puerto rico": "es-PR",
        "puertorriqueño": "es-PR",
        "boricua": "es-PR",
        "españa": "es-ES",
        "spain": "es-ES",
        "castellano": "es-ES",
        "peninsular": "es-ES",
        "méxico": "es-MX",
        "mexico": "es-MX",
        "mexicano": "es-MX",
        "latinoamérica": "es-419",
        "latin america": "es-419",
        "latam": "es-419",
        # ajoute au besoin
    }
    for k, v in mapping.items():
        if k in t:
            return v
    return None

