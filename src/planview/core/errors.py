"""Errors raised while turning raw input into a layout."""

from enum import Enum


class GenerationErrorKind(str, Enum):
    PARSE_ERROR = "parse_error"
    SCHEMA_ERROR = "schema_error"
    SERVICE_FAILURE = "service_failure"
    TIMEOUT = "timeout"


class GenerationError(Exception):
    """Raised when a generator cannot produce a layout.

    Attributes:
        kind: Failure category, used to pick the message shown to the user.
    """

    def __init__(self, kind: GenerationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind in (GenerationErrorKind.SERVICE_FAILURE, GenerationErrorKind.TIMEOUT)

    def __repr__(self) -> str:
        return f"GenerationError(kind={self.kind.value!r}, message={str(self)!r})"


def parse_error(message: str) -> GenerationError:
    return GenerationError(GenerationErrorKind.PARSE_ERROR, message)


def schema_error(message: str) -> GenerationError:
    return GenerationError(GenerationErrorKind.SCHEMA_ERROR, message)
