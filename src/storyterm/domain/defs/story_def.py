"""Story definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from storyterm.core.types import wrap_int64


class Operation(Enum):
    """A function that may be executed on a variable."""

    SET = "set"
    ADD = "add"
    SUB = "sub"

    def execute(self, current: int, operand: int) -> int:
        """Return the new value of a variable holding ``current``.

        Add and Sub wrap around the signed 64-bit range instead of overflowing.
        """
        if self is Operation.SET:
            return wrap_int64(operand)
        if self is Operation.ADD:
            return wrap_int64(current + operand)
        return wrap_int64(current - operand)


class Compare(Enum):
    """A comparison between a variable and a constant."""

    EQUAL = "equal"
    NOT = "not"
    LESS = "less"
    MORE = "more"

    def check(self, current: int, operand: int) -> bool:
        """Evaluate ``current <op> operand``."""
        if self is Compare.EQUAL:
            return current == operand
        if self is Compare.NOT:
            return current != operand
        if self is Compare.LESS:
            return current < operand
        return current > operand


@dataclass(frozen=True, slots=True)
class ActionDef:
    """Mutation applied to a named variable."""

    name: str
    op: Operation
    value: int


@dataclass(frozen=True, slots=True)
class ConditionDef:
    """Guard evaluated against a named variable."""

    name: str
    op: Compare
    value: int


@dataclass(frozen=True, slots=True)
class AnswerDef:
    """Represents a selectable answer on a prompt."""

    text: str = ""
    actions: Tuple[ActionDef, ...] = ()


@dataclass(frozen=True, slots=True)
class PromptDef:
    """A single narrative beat.

    When ``pre_condition`` evaluates to False the prompt is skipped.
    """

    request: str
    answers: Tuple[AnswerDef, ...] = ()
    pre_condition: ConditionDef | None = None


@dataclass(frozen=True, slots=True)
class BatchDef:
    """Ordered group of prompts, optionally presented in random order."""

    randomized: bool
    prompts: Tuple[PromptDef, ...] = ()


@dataclass(frozen=True, slots=True)
class StoryDef:
    """Fully parsed story document."""

    batches: Tuple[BatchDef, ...] = ()
    actions: Tuple[ActionDef, ...] = ()
