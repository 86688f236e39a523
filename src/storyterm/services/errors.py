"""Service-layer exceptions."""


class ExecutorContractError(Exception):
    """Raised when the story executor is driven in a way its caller must never attempt."""


class StoryFinishedError(ExecutorContractError):
    """Raised when an answer is selected after the story has ended."""


class InvalidChoiceError(ExecutorContractError, IndexError):
    """Raised when an answer index does not exist on the current prompt."""
