"""Domain definition exports."""

from .settings_def import GameSettingsDef
from .story_def import (
    ActionDef,
    AnswerDef,
    BatchDef,
    Compare,
    ConditionDef,
    Operation,
    PromptDef,
    StoryDef,
)

__all__ = [
    "ActionDef",
    "AnswerDef",
    "BatchDef",
    "Compare",
    "ConditionDef",
    "GameSettingsDef",
    "Operation",
    "PromptDef",
    "StoryDef",
]
