# Fichier: lingua/core/config.py
import logging
import sys
from typing import List

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from lingua.utils.lang_utils import normalize_dialect_tag


class Settings(BaseSettings):
    # --- Lesson content ---
    CONTENT_DIR: str = "content"
    BASE_DIALECT: str = "es-MX"
    SUPPORTED_DIALECTS: List[str] = [
        "es-MX",
        "es-ES",
        "es-PR",
        "es-419",
    ]
    FALLBACK_LESSON_ID: str = "a1-greetings"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("BASE_DIALECT", mode="before")
    @classmethod
    def _normalize_base_dialect(cls, value: str) -> str:
        """Accept loosely written tags such as ``es_mx`` or ``ES-mx``."""

        if not isinstance(value, str):
            return value
        return normalize_dialect_tag(value) or value

    @field_validator("SUPPORTED_DIALECTS", mode="after")
    @classmethod
    def _normalize_supported_dialects(cls, value: List[str]) -> List[str]:
        normalized: List[str] = []
        for tag in value:
            candidate = normalize_dialect_tag(tag)
            if candidate and candidate not in normalized:
                normalized.append(candidate)
        return normalized

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().upper()
        return value


def format_settings_errors(exc: ValidationError) -> List[str]:
    """One line per rejected variable, with the value that was read."""

    lines: List[str] = []
    for error in exc.errors():
        variable = ".".join(str(part) for part in error.get("loc", ())) or "<settings>"
        line = f"  - {variable}: {error.get('msg', 'invalid value')}"
        if "input" in error:
            line += f" (got {error['input']!r})"
        lines.append(line)
    return lines or [f"  - {exc}"]


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Print the rejected variables before the import-time error propagates."""

    print("Invalid lingua settings (environment or .env):", file=sys.stderr)
    print("\n".join(format_settings_errors(exc)), file=sys.stderr)


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler for scripts embedding the library."""

    logging.basicConfig(level=(level or settings.LOG_LEVEL))


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
