"""Story progression services."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from storyterm.core.rng import RandomSource
from storyterm.domain.defs import PromptDef, StoryDef
from storyterm.domain.state import StoryPosition, StoryState
from storyterm.domain.variables import Variables
from storyterm.services.errors import InvalidChoiceError, StoryFinishedError

LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class PromptView:
    """Data returned to the presentation layer for rendering."""

    batch: int
    position: int
    request: str
    answers: List[str]


class StoryExecutor:
    """Interpreter that walks a story, applying answer effects to its variables.

    The executor owns its variables and its cursor. The story definition is
    shared read-only, so several executors may run over one parsed story.
    """

    def __init__(self, story: StoryDef, *, variables: Variables | None = None) -> None:
        if variables is None:
            variables = Variables()
        self._state = StoryState(story=story, variables=variables)
        for action in story.actions:
            self._state.variables.apply(action)
        # Only empty batches are passed over here; the opening prompt's condition is not evaluated.
        state = self._state
        while not state.is_finished and not state.prompt_orders[state.current_batch]:
            state.current_batch += 1
        LOG.debug("Story started with variables %s", self._state.variables.as_dict())

    @property
    def story(self) -> StoryDef:
        return self._state.story

    @property
    def variables(self) -> Variables:
        """Variables of this playthrough."""
        return self._state.variables

    @property
    def position(self) -> StoryPosition | None:
        """Current (batch, prompt) cursor, or None once the story is over."""
        if self._state.is_finished:
            return None
        return StoryPosition(batch=self._state.current_batch, prompt=self._state.current_prompt)

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    def get_current_prompt(self) -> PromptDef | None:
        """Return the prompt to display, or None when the story is over."""
        state = self._state
        if state.is_finished:
            return None
        batch = state.story.batches[state.current_batch]
        order = state.prompt_orders[state.current_batch]
        return batch.prompts[order[state.current_prompt]]

    def get_current_view(self) -> PromptView | None:
        prompt = self.get_current_prompt()
        if prompt is None:
            return None
        return PromptView(
            batch=self._state.current_batch,
            position=self._state.current_prompt,
            request=prompt.request,
            answers=[answer.text for answer in prompt.answers],
        )

    def select_answer(self, choice_index: int, rng: RandomSource) -> PromptDef | None:
        """Apply the chosen answer and advance to the next prompt to display.

        Returns None when the story has been exhausted. Raises
        StoryFinishedError or InvalidChoiceError when the caller breaks the
        contract (no prompt is showing, or the index is out of range).
        """
        prompt = self.get_current_prompt()
        if prompt is None:
            raise StoryFinishedError("Cannot select an answer: the story is over.")
        if not 0 <= choice_index < len(prompt.answers):
            raise InvalidChoiceError(
                f"Answer index {choice_index} is invalid for a prompt with {len(prompt.answers)} answers."
            )

        for action in prompt.answers[choice_index].actions:
            new_value = self._state.variables.apply(action)
            LOG.debug("%s %s %d -> %d", action.name, action.op.value, action.value, new_value)

        self._state.current_prompt += 1
        self._advance(rng)
        return self.get_current_prompt()

    def _advance(self, rng: RandomSource) -> None:
        """Move the cursor to the next prompt that may be shown."""
        state = self._state
        while True:
            if state.is_finished:
                LOG.debug("Story exhausted")
                return

            batch = state.story.batches[state.current_batch]
            order = state.prompt_orders[state.current_batch]
            if state.current_prompt >= len(order):
                state.current_batch += 1
                state.current_prompt = 0
                LOG.debug("Entering batch %d", state.current_batch)
                continue

            if batch.randomized:
                swap_index = rng.randrange(state.current_prompt, len(order))
                order[state.current_prompt], order[swap_index] = order[swap_index], order[state.current_prompt]

            prompt = batch.prompts[order[state.current_prompt]]
            condition = prompt.pre_condition
            if condition is not None and not condition.op.check(
                state.variables.get(condition.name), condition.value
            ):
                LOG.debug(
                    "Skipping prompt %d of batch %d (%s %s %d failed)",
                    order[state.current_prompt],
                    state.current_batch,
                    condition.name,
                    condition.op.value,
                    condition.value,
                )
                state.current_prompt += 1
                continue
            return
