"""CLI configuration helpers for per-user options."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

LOG = logging.getLogger(__name__)

_DEFAULTS: Dict[str, object] = {"show_variables": False, "answer_timeout": None}


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Storyterm"
        return Path.home() / "Storyterm"
    return Path.home() / ".config" / "storyterm"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_timeout(value: object) -> float | None:
    if value is False or value == 0:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return None
    return float(value)


def _normalize(raw: Dict[str, object]) -> Dict[str, object]:
    return {
        "show_variables": raw.get("show_variables") is True,
        "answer_timeout": _normalize_timeout(raw.get("answer_timeout")),
    }


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults.

    ``answer_timeout`` is None unless the player overrides the story's value;
    ``0`` or ``false`` in the file turns the timeout off (returned as 0.0).
    """
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return dict(_DEFAULTS)
    except (OSError, ValueError) as exc:
        LOG.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return dict(_DEFAULTS)
    if not isinstance(raw, dict):
        return dict(_DEFAULTS)
    return _normalize(raw)
