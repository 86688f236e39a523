"""Service layer exports."""

from .errors import ExecutorContractError, InvalidChoiceError, StoryFinishedError
from .story_executor import PromptView, StoryExecutor
from .story_validator import Issue, format_issue, has_errors, validate_story

__all__ = [
    "ExecutorContractError",
    "InvalidChoiceError",
    "Issue",
    "PromptView",
    "StoryExecutor",
    "StoryFinishedError",
    "format_issue",
    "has_errors",
    "validate_story",
]
