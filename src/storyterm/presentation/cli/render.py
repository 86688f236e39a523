"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, Mapping, Sequence

from storyterm.services import PromptView

DEFAULT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when STORYTERM_DEBUG is explicitly set to '1'."""
    return os.getenv("STORYTERM_DEBUG") == "1"


def wrap_text_for_box(text: str, width: int, *, indent_continuation: bool = True) -> list[str]:
    """
    Wrap text to fit within a fixed width, breaking on word boundaries.

    Args:
        text: The text to wrap
        width: Maximum width per line
        indent_continuation: If True, indent continuation lines with 2 spaces

    Returns:
        List of wrapped lines, each <= width characters
    """
    if not text or width <= 0:
        return [text] if text else [""]

    prefix = ""
    content = text
    if text.startswith("- "):
        prefix = "- "
        content = text[2:]

    subsequent_indent = "  " if indent_continuation else ""
    lines = textwrap.wrap(
        content,
        width=width - len(prefix),
        subsequent_indent=subsequent_indent,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [""]
    lines[0] = prefix + lines[0]
    return lines


def wrap_paragraphs(text: str, width: int = DEFAULT_WIDTH) -> list[str]:
    """Wrap each authored line separately so explicit line breaks survive."""
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        lines.extend(wrap_text_for_box(paragraph, width, indent_continuation=False))
    return lines


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_prompt(view: PromptView, *, width: int = DEFAULT_WIDTH) -> None:
    """Render a prompt's request followed by its numbered answers."""
    print()
    if debug_enabled():
        print(f"[batch {view.batch}, prompt {view.position}]")
    for line in wrap_paragraphs(view.request, width):
        print(line)
    render_answers(view.answers)


def render_answers(answers: Sequence[str]) -> None:
    """Display numbered answers."""
    if not answers:
        return
    print()
    for idx, label in enumerate(answers, start=1):
        print(f"{idx}. {label or '...'}")


def render_variables(variables: Mapping[str, int]) -> None:
    """Display the current variable values, sorted by name."""
    render_heading("Variables")
    render_bullet_lines(f"{name} = {variables[name]}" for name in sorted(variables))


def render_ending() -> None:
    render_heading("The End")
    print("Thank you for playing.")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")
