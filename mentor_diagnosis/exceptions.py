"""Exceptions raised by the diagnostic engine.

Validation failures are never exceptions; gates return booleans. These cover
programming errors and persistence problems only.
"""


class InvalidStatusTransition(ValueError):
    """A module status change that the lifecycle does not allow."""

    def __init__(self, message: str, current: str = "", requested: str = ""):
        super().__init__(message)
        self.current = current
        self.requested = requested


class InvalidAnswerPath(ValueError):
    """A dotted answer path that does not exist in the module's answers."""


class UnknownOperation(ValueError):
    """A named collection operation that the module does not provide."""


class PersistenceError(Exception):
    """Error from a persistence adapter."""
