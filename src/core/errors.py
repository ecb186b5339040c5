"""Errors raised by the platform client before any request is sent."""

from enum import Enum

__all__ = ["ErrorKind", "PlatformClientError", "InvalidParameterError"]


class ErrorKind(str, Enum):
    """Categories of locally detected errors."""

    INVALID_PARAMETER = "invalid_parameter"


class PlatformClientError(Exception):
    """Base error for the platform client.

    Attributes:
        kind: Error category.
        code: Short machine-readable code.
        detail: Human-readable explanation.
    """

    def __init__(self, kind: ErrorKind, code: str, detail: str) -> None:
        self.kind = kind
        self.code = code
        self.detail = detail
        super().__init__(f"[{code}] {detail}")


class InvalidParameterError(PlatformClientError):
    """A required parameter is missing or empty.

    Attributes:
        parameter: Name of the offending parameter.
    """

    def __init__(self, parameter: str, detail: str | None = None) -> None:
        self.parameter = parameter
        super().__init__(
            kind=ErrorKind.INVALID_PARAMETER,
            code="INVALID_PARAMETER",
            detail=detail or f"Missing required parameter: {parameter}",
        )
