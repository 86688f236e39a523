"""Static story validation utilities."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Set

from storyterm.core.types import Severity
from storyterm.domain.defs import ActionDef, PromptDef, StoryDef


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str] = field(default_factory=dict)


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_story(story: StoryDef) -> list[Issue]:
    """Report authoring mistakes that would make a story misbehave at runtime."""
    issues: list[Issue] = []
    if not story.batches:
        issues.append(
            Issue(severity="ERROR", code="EMPTY_STORY", message="Story has no batches.")
        )
        return issues

    written = _written_variables(story)
    for batch_index, batch in enumerate(story.batches):
        if not batch.prompts:
            issues.append(
                Issue(
                    severity="WARNING",
                    code="EMPTY_BATCH",
                    message="Batch has no prompts and will be skipped.",
                    context={"batch": str(batch_index)},
                )
            )
        for prompt_index, prompt in enumerate(batch.prompts):
            context = {"batch": str(batch_index), "prompt": str(prompt_index)}
            _validate_prompt(prompt, context, written, issues)

    first_batch = story.batches[0]
    if first_batch.prompts and first_batch.prompts[0].pre_condition is not None:
        issues.append(
            Issue(
                severity="WARNING",
                code="FIRST_PROMPT_CONDITION",
                message="The opening prompt is always shown; its condition is never evaluated.",
                context={"batch": "0", "prompt": "0"},
            )
        )
    return issues


def _validate_prompt(
    prompt: PromptDef, context: dict[str, str], written: Set[str], issues: list[Issue]
) -> None:
    if not prompt.request.strip():
        issues.append(
            Issue(
                severity="WARNING",
                code="EMPTY_REQUEST",
                message="Prompt has an empty request.",
                context=dict(context),
            )
        )
    if not prompt.answers:
        issues.append(
            Issue(
                severity="ERROR",
                code="NO_ANSWERS",
                message="Prompt has no answers, so the player cannot continue.",
                context=dict(context),
            )
        )
    condition = prompt.pre_condition
    if condition is not None and condition.name not in written:
        issues.append(
            Issue(
                severity="WARNING",
                code="UNWRITTEN_CONDITION_VARIABLE",
                message="Condition reads a variable that no action ever writes (it is always 0).",
                context={**context, "variable": condition.name},
            )
        )


def _written_variables(story: StoryDef) -> Set[str]:
    actions: list[ActionDef] = list(story.actions)
    for batch in story.batches:
        for prompt in batch.prompts:
            for answer in prompt.answers:
                actions.extend(answer.actions)
    return {action.name for action in actions}
