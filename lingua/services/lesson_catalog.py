"""Discover lesson documents on disk and serve resolved lessons."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from lingua.core.config import settings
from lingua.schemas.lesson_schema import Lesson
from lingua.schemas.override_schema import DialectOverride
from lingua.services.content_resolver import ContentResolver
from lingua.utils.lang_utils import normalize_dialect_tag

logger = logging.getLogger(__name__)

BASE_SUFFIX = ".base.json"
OVERRIDE_INFIX = ".overrides."


@dataclass(frozen=True)
class LessonSummary:
    lesson_id: str
    level: str
    title: str
    dialects: tuple[str, ...]


class LessonCatalog:
    """
    Catalogue of ``<lesson_id>.base.json`` documents and their
    ``<lesson_id>.overrides.<dialect>.json`` patches.

    Documents are parsed lazily and cached; every :meth:`get_lesson` call
    still returns a freshly resolved lesson.
    """

    def __init__(
        self,
        content_dir: Path | str | None = None,
        *,
        base_dialect: str | None = None,
        supported_dialects: Sequence[str] | None = None,
        fallback_lesson_id: str | None = None,
        resolver: ContentResolver | None = None,
    ) -> None:
        self.content_dir = Path(content_dir or settings.CONTENT_DIR)
        self.base_dialect = base_dialect or settings.BASE_DIALECT
        self.supported_dialects = list(supported_dialects or settings.SUPPORTED_DIALECTS)
        self.fallback_lesson_id = fallback_lesson_id or settings.FALLBACK_LESSON_ID
        self.resolver = resolver or ContentResolver()

        self._base_paths: Dict[str, Path] = {}
        self._override_paths: Dict[str, Dict[str, Path]] = {}
        self._bases: Dict[str, Lesson] = {}
        self._overrides: Dict[tuple[str, str], DialectOverride] = {}
        self._scan()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------
    def _scan(self) -> None:
        if not self.content_dir.is_dir():
            logger.warning("[CATALOG] content directory %s not found", self.content_dir)
            return

        for path in sorted(self.content_dir.glob("*.json")):
            name = path.name
            if name.endswith(BASE_SUFFIX):
                self._base_paths[name[: -len(BASE_SUFFIX)]] = path
            elif OVERRIDE_INFIX in name:
                lesson_id, _, rest = name.partition(OVERRIDE_INFIX)
                dialect = normalize_dialect_tag(rest[: -len(".json")])
                if not dialect:
                    logger.warning("[CATALOG] unreadable dialect in %s, ignored", name)
                    continue
                self._override_paths.setdefault(lesson_id, {})[dialect] = path

        orphans = sorted(set(self._override_paths) - set(self._base_paths))
        if orphans:
            logger.warning("[CATALOG] overrides without base lesson: %s", ", ".join(orphans))
        logger.info(
            "[CATALOG] %s lessons found in %s",
            len(self._base_paths),
            self.content_dir,
        )

    @staticmethod
    def _read(path: Path) -> dict:
        return json.loads(path.read_text(encoding="utf-8-sig"))

    def _base(self, lesson_id: str) -> Lesson:
        lesson = self._bases.get(lesson_id)
        if lesson is None:
            lesson = Lesson.model_validate(self._read(self._base_paths[lesson_id]))
            self._bases[lesson_id] = lesson
        return lesson

    def _override(self, lesson_id: str, dialect: str) -> Optional[DialectOverride]:
        path = self._override_paths.get(lesson_id, {}).get(dialect)
        if path is None:
            return None
        key = (lesson_id, dialect)
        override = self._overrides.get(key)
        if override is None:
            override = DialectOverride.model_validate(self._read(path))
            self._overrides[key] = override
        return override

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def lesson_ids(self) -> List[str]:
        return sorted(self._base_paths)

    def available_dialects(self, lesson_id: str) -> List[str]:
        """The base dialect plus every dialect with an authored override."""

        dialects = [self.base_dialect]
        for dialect in sorted(self._override_paths.get(lesson_id, {})):
            if dialect not in dialects:
                dialects.append(dialect)
        return dialects

    def list_lessons(self) -> List[LessonSummary]:
        summaries = []
        for lesson_id in self.lesson_ids():
            base = self._base(lesson_id)
            summaries.append(
                LessonSummary(
                    lesson_id=lesson_id,
                    level=base.level,
                    title=base.title.localized,
                    dialects=tuple(self.available_dialects(lesson_id)),
                )
            )
        summaries.sort(key=lambda item: (item.level, item.lesson_id))
        return summaries

    def get_lesson(self, lesson_id: str, dialect: str) -> Lesson:
        """Resolve ``lesson_id`` for ``dialect``.

        Unknown lesson ids fall back to the configured fallback lesson; a
        dialect without an override is served as the base content relabelled.
        """

        target = normalize_dialect_tag(dialect)
        if target is None or target not in self.supported_dialects:
            raise ValueError(f"Unsupported dialect: {dialect!r}")

        if lesson_id not in self._base_paths:
            if self.fallback_lesson_id not in self._base_paths:
                raise KeyError(lesson_id)
            logger.warning(
                "[CATALOG] unknown lesson %r, serving %r instead",
                lesson_id,
                self.fallback_lesson_id,
            )
            lesson_id = self.fallback_lesson_id

        override = None if target == self.base_dialect else self._override(lesson_id, target)
        return self.resolver.resolve(self._base(lesson_id), override, target)
