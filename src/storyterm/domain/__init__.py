"""Domain layer: story definitions, variables and playthrough state."""

from .state import StoryPosition, StoryState
from .variables import Variables, VariableSlot

__all__ = ["StoryPosition", "StoryState", "VariableSlot", "Variables"]
