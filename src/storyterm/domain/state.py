"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from storyterm.domain.defs import StoryDef
from storyterm.domain.variables import Variables


@dataclass(frozen=True, slots=True)
class StoryPosition:
    """Read-only cursor exposed to collaborators such as the audio layer."""

    batch: int
    prompt: int


@dataclass
class StoryState:
    """Mutable playthrough state over an immutable story.

    ``prompt_orders[b][p]`` is the index into ``story.batches[b].prompts`` of
    the prompt shown at position ``p`` of batch ``b``. Randomized batches swap
    entries of this list; the story itself is never reordered.
    """

    story: StoryDef
    variables: Variables = field(default_factory=Variables)
    current_batch: int = 0
    current_prompt: int = 0
    prompt_orders: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.prompt_orders:
            self.prompt_orders = [list(range(len(batch.prompts))) for batch in self.story.batches]

    @property
    def is_finished(self) -> bool:
        return self.current_batch >= len(self.story.batches)
