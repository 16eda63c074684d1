"""Domain-specific errors for plan generation.

Validation errors are raised before any generation work starts. Generation
failures carry the week range that could not be produced so a caller can
report it and retry the whole operation.
"""


class PlannerError(Exception):
    """Base exception for all planning errors."""

    pass


class PlanValidationError(PlannerError):
    """Raised when a plan request is invalid (hard stop, no retry)."""

    pass


class PlannerInvariantError(PlannerError):
    """Raised when the generator state machine is driven out of order."""

    pass


class GenerationFailure(PlannerError):
    """Raised when a chunk cannot be turned into a trustworthy day list.

    Attributes:
        start_week: First week of the failing chunk
        end_week: Last week of the failing chunk
    """

    def __init__(self, start_week: int, end_week: int, message: str) -> None:
        self.start_week = start_week
        self.end_week = end_week
        super().__init__(f"Weeks {start_week}-{end_week}: {message}")


class ChunkParseError(GenerationFailure):
    """Raised when producer output is not a parsable JSON array of days."""

    pass


class ChunkUndersizedError(GenerationFailure):
    """Raised when a chunk returns fewer usable days than the fill threshold.

    Attributes:
        received: Usable days returned
        expected: Days requested for the chunk
    """

    def __init__(self, start_week: int, end_week: int, received: int, expected: int) -> None:
        self.received = received
        self.expected = expected
        super().__init__(
            start_week,
            end_week,
            f"producer returned {received} of {expected} days",
        )


class GenerationTimeoutError(GenerationFailure):
    """Raised when the whole generation exceeds the caller's timeout."""

    pass
