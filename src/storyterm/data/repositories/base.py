"""Base repository implementation for JSON definition data."""
from __future__ import annotations

from pathlib import Path
from typing import Generic, List, TypeVar

from storyterm.core.types import is_int64
from storyterm.data.errors import DataValidationError
from storyterm.data.json_loader import load_json
from storyterm.data import paths

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for single-document repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definition: T | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> T:
        """Convert a raw dict into a typed definition."""
        raise NotImplementedError

    def load(self) -> T:
        """Return the parsed definition, loading it on first use."""
        if self._definition is None:
            raw = self._load_raw()
            self._definition = self._build(raw)
        return self._definition

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_list(value: object, context: str) -> List[object]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_bool(value: object, context: str) -> bool:
        if not isinstance(value, bool):
            raise DataValidationError(f"{context} must be a boolean.")
        return value

    @staticmethod
    def _require_int64(value: object, context: str) -> int:
        # bool is an int subclass; JSON true/false is never a counter value.
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        if not is_int64(value):
            raise DataValidationError(f"{context} must fit in a signed 64-bit integer.")
        return value
