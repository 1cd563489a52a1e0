"""Failure taxonomy for the save-link command.

Every failure the bot can report is a BotFailure tagged with a FailureKind.
format_failure() turns one into the text shown to the requester.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

GENERIC_ERROR_MESSAGE = "An unexpected error occurred while processing your request."


class FailureKind(str, Enum):
    PERMISSION = "permission"
    VALIDATION = "validation"
    EXTRACTION = "extraction"
    FILING = "filing"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class BotFailure(Exception):
    """A classified failure carrying its kind, a message and the original error."""

    def __init__(self, kind: FailureKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"BotFailure(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def permission(cls, message: str) -> "BotFailure":
        return cls(FailureKind.PERMISSION, message)

    @classmethod
    def validation(cls, message: str, cause: Optional[BaseException] = None) -> "BotFailure":
        return cls(FailureKind.VALIDATION, message, cause)

    @classmethod
    def extraction(cls, message: str, cause: Optional[BaseException] = None) -> "BotFailure":
        return cls(FailureKind.EXTRACTION, message, cause)

    @classmethod
    def filing(cls, message: str, cause: Optional[BaseException] = None) -> "BotFailure":
        return cls(FailureKind.FILING, message, cause)

    @classmethod
    def configuration(cls, message: str) -> "BotFailure":
        return cls(FailureKind.CONFIGURATION, message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "BotFailure":
        """Pass a BotFailure through untouched, classify anything else as UNKNOWN."""
        if isinstance(exc, BotFailure):
            return exc
        return cls(FailureKind.UNKNOWN, str(exc), exc)


def permission_denied_message(role_name: str) -> str:
    return f"You need the {role_name} role to use this command"


def format_failure(failure: BotFailure) -> str:
    """
    Map a failure to the reply shown to the user.
    Pure function of kind and message.
    """
    kind = failure.kind
    message = failure.message

    if kind is FailureKind.PERMISSION:
        return message
    if kind is FailureKind.VALIDATION:
        return f"Invalid input: {message}"
    if kind is FailureKind.EXTRACTION:
        return f"Failed to fetch content from the provided URL: {message}"
    if kind is FailureKind.FILING:
        return f"Failed to create the tracking issue: {message}"

    # UNKNOWN, and CONFIGURATION should it ever get this far
    return message or GENERIC_ERROR_MESSAGE
