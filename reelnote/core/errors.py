"""Failure taxonomy shared by every unit of work.

Invariants:
- The kind of a failure is fixed by its class, never by its message.
- ``FEEDBACK`` failures reach the user only, ``PROPAGATE`` failures reach the
  log only, ``FEEDBACK_PROPAGATE`` failures reach both.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """How a failed unit of work is reported."""
    FEEDBACK = "feedback"
    FEEDBACK_PROPAGATE = "feedback_propagate"
    PROPAGATE = "propagate"


class WorkError(Exception):
    """A classified failure with an optional underlying cause."""

    kind: ErrorKind = ErrorKind.PROPAGATE

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        operation: str | None = None,
        service: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.operation = operation
        self.service = service
        if cause is not None:
            self.__cause__ = cause

    @property
    def user_message(self) -> str | None:
        """Text shown to the user, or None when the failure stays internal."""
        if self.kind is ErrorKind.PROPAGATE:
            return None
        return self.message

    @property
    def should_escalate(self) -> bool:
        return self.kind is not ErrorKind.FEEDBACK

    def describe(self) -> dict[str, str | None]:
        """Return the context an operator needs to diagnose the failure."""
        return {
            "kind": self.kind.value,
            "service": self.service,
            "operation": self.operation,
            "message": self.message,
            "error": f"{type(self.cause).__name__}: {self.cause}" if self.cause is not None else None,
        }


class FeedbackError(WorkError):
    """Expected, user-correctable condition."""
    kind = ErrorKind.FEEDBACK


class FeedbackPropagateError(WorkError):
    """Unexpected remote failure shown to the user as a generic message."""
    kind = ErrorKind.FEEDBACK_PROPAGATE


class PropagateError(WorkError):
    """Broken precondition that is only reported to operators."""
    kind = ErrorKind.PROPAGATE


def feedback_error(message: str) -> FeedbackError:
    return FeedbackError(message)


def feedback_propagate_error(
    message: str,
    cause: BaseException,
    *,
    operation: str | None = None,
    service: str | None = None,
) -> FeedbackPropagateError:
    return FeedbackPropagateError(message, cause=cause, operation=operation, service=service)


def propagate_error(
    cause: BaseException | str,
    *,
    operation: str | None = None,
    service: str | None = None,
) -> PropagateError:
    if isinstance(cause, BaseException):
        return PropagateError(str(cause), cause=cause, operation=operation, service=service)
    return PropagateError(cause, operation=operation, service=service)
