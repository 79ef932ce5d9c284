"""livetree error hierarchy.

All livetree-specific errors inherit from LivetreeError for easy catching.
Each also inherits the builtin it refines, so callers catching
NotImplementedError or TypeError keep working.
"""


class LivetreeError(Exception):
    """Base error for all livetree operations."""


class AbstractOperationError(LivetreeError, NotImplementedError):
    """An abstract base-class operation was invoked directly."""


class ReadOnlyViewError(LivetreeError, TypeError):
    """Mutation attempted on a mapped (derived) view."""


class UnrenderableValueError(LivetreeError, TypeError):
    """A value matches none of the shapes the materializer knows."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Don't know how to turn {value!r} into a node")
        self.value = value
