"""Repository for the story document."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Type, TypeVar

from storyterm.data.errors import DataValidationError
from storyterm.data.repositories.base import RepositoryBase
from storyterm.domain.defs import (
    ActionDef,
    AnswerDef,
    BatchDef,
    Compare,
    ConditionDef,
    Operation,
    PromptDef,
    StoryDef,
)

E = TypeVar("E", bound=Enum)


class StoryRepository(RepositoryBase[StoryDef]):
    """Loads the story document and validates its structure.

    Unknown fields are ignored so that authoring tools can annotate the file.
    """

    def __init__(self, base_path: Path | str | None = None, filename: str = "story.json") -> None:
        super().__init__(filename, base_path)

    def _build(self, raw: dict[str, object]) -> StoryDef:
        actions = self._parse_actions(raw.get("actions"), "actions")
        raw_batches = self._require_list(raw.get("batches"), "batches")
        batches = tuple(
            self._parse_batch(entry, f"batches[{index}]") for index, entry in enumerate(raw_batches)
        )
        return StoryDef(batches=batches, actions=actions)

    def _parse_batch(self, value: object, context: str) -> BatchDef:
        batch_map = self._require_mapping(value, context)
        randomized = self._require_bool(batch_map.get("random", False), f"{context}.random")
        raw_prompts = self._require_list(batch_map.get("prompts"), f"{context}.prompts")
        prompts = tuple(
            self._parse_prompt(entry, f"{context}.prompts[{index}]") for index, entry in enumerate(raw_prompts)
        )
        return BatchDef(randomized=randomized, prompts=prompts)

    def _parse_prompt(self, value: object, context: str) -> PromptDef:
        prompt_map = self._require_mapping(value, context)
        request = self._require_str(prompt_map.get("request"), f"{context}.request")
        pre_condition = None
        if prompt_map.get("if") is not None:
            pre_condition = self._parse_condition(prompt_map["if"], f"{context}.if")
        raw_answers = self._require_list(prompt_map.get("answers"), f"{context}.answers")
        answers: List[AnswerDef] = []
        for index, entry in enumerate(raw_answers):
            answer_ctx = f"{context}.answers[{index}]"
            answer_map = self._require_mapping(entry, answer_ctx)
            text = self._require_str(answer_map.get("text", ""), f"{answer_ctx}.text")
            actions = self._parse_actions(answer_map.get("actions"), f"{answer_ctx}.actions")
            answers.append(AnswerDef(text=text, actions=actions))
        return PromptDef(request=request, answers=tuple(answers), pre_condition=pre_condition)

    def _parse_condition(self, value: object, context: str) -> ConditionDef:
        condition_map = self._require_mapping(value, context)
        name = self._require_str(condition_map.get("name"), f"{context}.name")
        # Older story files spell the comparison field "cmd".
        op_key = "op" if "op" in condition_map else "cmd"
        op = self._parse_enum(Compare, condition_map.get(op_key), f"{context}.{op_key}")
        condition_value = self._require_int64(condition_map.get("value"), f"{context}.value")
        return ConditionDef(name=name, op=op, value=condition_value)

    def _parse_actions(self, raw_actions: object, context: str) -> tuple[ActionDef, ...]:
        if raw_actions is None:
            return ()
        actions: List[ActionDef] = []
        for index, entry in enumerate(self._require_list(raw_actions, context)):
            action_ctx = f"{context}[{index}]"
            action_map = self._require_mapping(entry, action_ctx)
            name = self._require_str(action_map.get("name"), f"{action_ctx}.name")
            op = self._parse_enum(Operation, action_map.get("op"), f"{action_ctx}.op")
            action_value = self._require_int64(action_map.get("value"), f"{action_ctx}.value")
            actions.append(ActionDef(name=name, op=op, value=action_value))
        return tuple(actions)

    @staticmethod
    def _parse_enum(enum_type: Type[E], value: object, context: str) -> E:
        if isinstance(value, str):
            try:
                return enum_type(value.lower())
            except ValueError:
                pass
        allowed = ", ".join(f"'{member.value}'" for member in enum_type)
        raise DataValidationError(f"{context} must be one of {allowed} (found {value!r}).")


def load_story(path: Path | str) -> StoryDef:
    """Load a story from an explicit file path."""
    story_path = Path(path)
    return StoryRepository(base_path=story_path.parent, filename=story_path.name).load()
