"""Exception hierarchy for AsyncUnit."""


class AsyncUnitError(Exception):
    """Base class for all AsyncUnit errors."""

    pass


class TaskContractError(AsyncUnitError, TypeError):
    """Raised when a runner is started without a usable task."""

    pass


class UnattributedTaskError(AsyncUnitError):
    """Raised for a failure signal that arrives after its runner has finished."""

    pass


class TaskTimeoutError(AsyncUnitError, TimeoutError):
    """Failure detail for a task that exceeded its time limit."""

    def __init__(self, message: str, time_limit: float):
        super().__init__(message)
        self.time_limit = time_limit


class SelectorError(AsyncUnitError, ValueError):
    """Raised when a selector string cannot be parsed."""

    pass
