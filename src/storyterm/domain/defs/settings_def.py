"""Game settings definition."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ANSWER_TIMEOUT = 10.0
DEFAULT_FUZZY_THRESHOLD = 70


@dataclass(frozen=True, slots=True)
class GameSettingsDef:
    """Presentation settings shipped alongside the story."""

    title: str = "PLACEHOLDER"
    answer_timeout: float | None = DEFAULT_ANSWER_TIMEOUT
    default_answer: int = 0
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD
