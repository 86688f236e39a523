"""Repository for game presentation settings."""
from __future__ import annotations

from pathlib import Path

from storyterm.data.errors import DataValidationError
from storyterm.data.repositories.base import RepositoryBase
from storyterm.domain.defs import GameSettingsDef
from storyterm.domain.defs.settings_def import DEFAULT_ANSWER_TIMEOUT, DEFAULT_FUZZY_THRESHOLD


class SettingsRepository(RepositoryBase[GameSettingsDef]):
    """Loads settings.json, falling back to defaults when the file is absent."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__("settings.json", base_path)

    def _load_raw(self) -> dict[str, object]:
        if not self._get_file_path().exists():
            return {}
        return super()._load_raw()

    def _build(self, raw: dict[str, object]) -> GameSettingsDef:
        title = self._require_str(raw.get("title", "PLACEHOLDER"), "settings.title")
        answer_timeout = self._parse_timeout(raw.get("answer_timeout", DEFAULT_ANSWER_TIMEOUT))
        default_answer = self._require_int64(raw.get("default_answer", 0), "settings.default_answer")
        if default_answer < 0:
            raise DataValidationError("settings.default_answer must not be negative.")
        fuzzy_threshold = self._require_int64(
            raw.get("fuzzy_threshold", DEFAULT_FUZZY_THRESHOLD), "settings.fuzzy_threshold"
        )
        if not 0 <= fuzzy_threshold <= 100:
            raise DataValidationError("settings.fuzzy_threshold must be between 0 and 100.")
        return GameSettingsDef(
            title=title,
            answer_timeout=answer_timeout,
            default_answer=default_answer,
            fuzzy_threshold=fuzzy_threshold,
        )

    @staticmethod
    def _parse_timeout(value: object) -> float | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise DataValidationError("settings.answer_timeout must be a positive number or null.")
        return float(value)
