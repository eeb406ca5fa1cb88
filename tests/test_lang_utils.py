import pytest

from lingua.utils.lang_utils import detect_dialect, normalize_dialect_tag


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("es-MX", "es-MX"),
        ("es_mx", "es-MX"),
        ("ES-pr", "es-PR"),
        ("es-419", "es-419"),
        ("es", "es"),
        ("  es_ES ", "es-ES"),
        ("Puerto Rico", "es-PR"),
        ("", None),
        (None, None),
        ("español neutro", None),
    ],
)
def test_normalize_dialect_tag(tag, expected):
    assert normalize_dialect_tag(tag) == expected


def test_detect_dialect_from_region_label():
    assert detect_dialect("Español de España") == "es-ES"
    assert detect_dialect("Latinoamérica") == "es-419"
    assert detect_dialect("mexicano") == "es-MX"
    assert detect_dialect("Argentina") is None
