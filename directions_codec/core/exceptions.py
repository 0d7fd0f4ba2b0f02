"""
Error types raised while parsing or formatting list-valued parameters.

Absence (a missing parameter, an empty string, an empty slot) is never an
error. Only malformed tokens and values that break a field rule are.
"""
from typing import Any, Optional


class CodecError(ValueError):
    """Base class for all codec failures."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.detail = message
        self.position = position
        if position is not None:
            message = f"{message} (position {position})"
        super().__init__(message)

    def at(self, position: int) -> "CodecError":
        """Return a copy of this error pinned to a list position."""
        return CodecError(self.detail, position=position)


class MalformedElementError(CodecError):
    """A present token does not parse as its declared element type."""

    def __init__(self, message: str, token: Any = None, position: Optional[int] = None):
        super().__init__(message, position)
        self.token = token

    def at(self, position: int) -> "MalformedElementError":
        return MalformedElementError(self.detail, token=self.token, position=position)


class ValidationViolationError(CodecError):
    """A well-formed value breaks a field-specific rule."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        position: Optional[int] = None
    ):
        super().__init__(message, position)
        self.field = field
        self.value = value

    def at(self, position: int) -> "ValidationViolationError":
        return ValidationViolationError(self.detail, field=self.field, value=self.value, position=position)


class DirectionsApiError(Exception):
    """The directions API answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
