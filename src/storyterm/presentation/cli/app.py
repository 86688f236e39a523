"""Console-driven UI loop for storyterm."""
from __future__ import annotations

import argparse
import logging
import secrets
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from thefuzz import process

from storyterm.core.rng import RNG
from storyterm.data import DataError
from storyterm.data.repositories import SettingsRepository, StoryRepository, load_story
from storyterm.domain.defs import GameSettingsDef, StoryDef
from storyterm.presentation.cli import config
from storyterm.presentation.cli.render import (
    debug_enabled,
    render_ending,
    render_heading,
    render_prompt,
    render_variables,
)
from storyterm.services import StoryExecutor, format_issue, has_errors, validate_story
from storyterm.utils.logging import configure_logging

LOG = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1
_QUIT_WORDS = {"q", "quit", "exit"}


@dataclass(slots=True)
class AnswerPolicy:
    """How raw player input is turned into an answer index."""

    answer_timeout: float | None
    default_answer: int
    fuzzy_threshold: int


class QuitGame(Exception):
    """Raised when the player asks to leave mid-story."""


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="storyterm", description="Play a branching terminal story.")
    parser.add_argument("--story", help="Path to a story JSON file (defaults to the bundled story).")
    parser.add_argument("--seed", type=int, help="Seed for randomized batches (random when omitted).")
    parser.add_argument("--check", action="store_true", help="Validate the story and exit.")
    parser.add_argument("--no-timeout", action="store_true", help="Never pick an answer on the player's behalf.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session and return the process exit code."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(logging.DEBUG if debug_enabled() else logging.WARNING)
    user_config = config.load_config()

    try:
        story = _load_story(args.story)
        settings = SettingsRepository(base_path=Path(args.story).parent if args.story else None).load()
    except DataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.check:
        return _run_check(story)

    issues = validate_story(story)
    if has_errors(issues):
        for issue in issues:
            if issue.severity == "ERROR":
                print(f"error: {format_issue(issue)}", file=sys.stderr)
        return 1

    policy = _build_answer_policy(settings, user_config, no_timeout=args.no_timeout)
    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    LOG.info("Starting story with seed %d", seed)
    print(f"=== {settings.title} ===")
    executor = StoryExecutor(story)
    show_variables = bool(user_config["show_variables"]) or debug_enabled()
    try:
        run_story_loop(executor, RNG(seed), policy, show_variables=show_variables)
    except (QuitGame, EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
    return 0


def _load_story(story_path: str | None) -> StoryDef:
    if story_path:
        return load_story(story_path)
    return StoryRepository().load()


def _run_check(story: StoryDef) -> int:
    issues = validate_story(story)
    for issue in issues:
        print(format_issue(issue))
    if has_errors(issues):
        print("Story validation failed.")
        return 1
    print("Story validation passed.")
    return 0


def _build_answer_policy(
    settings: GameSettingsDef, user_config: dict[str, object], *, no_timeout: bool
) -> AnswerPolicy:
    override = user_config.get("answer_timeout")
    if no_timeout or override == 0:
        timeout = None
    elif override is None:
        timeout = settings.answer_timeout
    else:
        timeout = float(override)
    return AnswerPolicy(
        answer_timeout=timeout,
        default_answer=settings.default_answer,
        fuzzy_threshold=settings.fuzzy_threshold,
    )


def run_story_loop(
    executor: StoryExecutor,
    rng: RNG,
    policy: AnswerPolicy,
    *,
    show_variables: bool = False,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Play prompts until the story is exhausted or reaches a prompt with no answers."""
    view = executor.get_current_view()
    while view is not None:
        render_prompt(view)
        if show_variables:
            render_variables(executor.variables.as_dict())
        if not view.answers:
            LOG.warning("Prompt %d of batch %d has no answers; ending the story", view.position, view.batch)
            break
        choice_index = prompt_answer(view.answers, policy, clock=clock)
        executor.select_answer(choice_index, rng)
        view = executor.get_current_view()
    render_ending()


def prompt_answer(
    answers: Sequence[str],
    policy: AnswerPolicy,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """Read player input until it names an answer, honouring the answer timeout."""
    if not answers:
        raise ValueError("Cannot prompt for an answer: the prompt has no answers.")
    started = clock()
    while True:
        raw = input("> ").strip()
        if raw.lower() in _QUIT_WORDS:
            raise QuitGame()
        elapsed = clock() - started
        if policy.answer_timeout is not None and elapsed > policy.answer_timeout:
            fallback = min(policy.default_answer, len(answers) - 1)
            render_heading("Too late")
            print(f"You hesitated for {elapsed:.0f}s. The choice was made for you: {answers[fallback] or '...'}")
            return fallback
        index = match_answer(raw, answers, policy.fuzzy_threshold)
        if index is not None:
            return index
        print(f"Please enter a number between 1 and {len(answers)} or part of an answer.")


def match_answer(raw: str, answers: Sequence[str], threshold: int) -> int | None:
    """Resolve input to an answer index: a 1-based number, or fuzzy-matched text."""
    if not raw:
        return None
    if raw.isdigit():
        index = int(raw) - 1
        return index if 0 <= index < len(answers) else None
    choices = {index: text for index, text in enumerate(answers) if text}
    if not choices:
        return None
    best = process.extractOne(raw, choices)
    if best is None:
        return None
    _, score, index = best
    if score < threshold:
        LOG.debug("Fuzzy match for %r scored %d, below %d", raw, score, threshold)
        return None
    return index
