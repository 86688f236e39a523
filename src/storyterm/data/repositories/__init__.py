"""Repository exports."""

from .settings_repo import SettingsRepository
from .story_repo import StoryRepository, load_story

__all__ = [
    "SettingsRepository",
    "StoryRepository",
    "load_story",
]
