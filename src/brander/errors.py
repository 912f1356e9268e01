"""Custom exception types used across the Brander pipeline."""
from __future__ import annotations


class BranderError(Exception):
    """Base exception for Brander-specific errors."""


class ConfigurationError(BranderError):
    """Raised when configuration data is malformed, incomplete or ambiguous."""


class ExpressionError(ConfigurationError):
    """Raised when an embedded expression cannot be compiled or evaluated."""

    def __init__(self, expression: str, message: str) -> None:
        super().__init__(f"Unable to evaluate expression {expression!r}: {message}")
        self.expression = expression
        self.message = message


class DispatchError(ConfigurationError):
    """Raised when no registered handler can take on a context."""

    def __init__(self, kind: str, type_name: str, message: str) -> None:
        super().__init__(f'"{kind}" configuration {message}: {type_name}')
        self.kind = kind
        self.type_name = type_name


class TaskExecutionError(BranderError):
    """Raised when a built-in task fails irrecoverably."""

    def __init__(self, task: str, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Task '{task}' failed: {message}")
        self.task = task
        self.cause = cause
        self.message = message
