"""
Result type and error classes shared by the Stream API wrappers.

Every remote-call wrapper returns either Ok(data) or Err(kind, error) instead
of raising, so the dashboard can render failures inline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    REMOTE_REQUEST = "remote_request"
    INPUT_VALIDATION = "input_validation"


class StreamPanelError(Exception):
    """Base class for errors raised locally by the panel."""

    kind = None


class ConfigError(StreamPanelError):
    """Required environment variables are missing."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


class InputValidationError(StreamPanelError):
    """A form field or argument failed a local check before any API call."""

    kind = ErrorKind.INPUT_VALIDATION


class RemoteRequestError(StreamPanelError):
    """
    Non-2xx response or transport failure.

    Raised inside the client for bodies that are not a Stream API envelope
    and converted to an Err before it leaves the method.
    """

    kind = ErrorKind.REMOTE_REQUEST


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T = None

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "data": self.data}


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    error: str

    @property
    def success(self) -> bool:
        return False

    @property
    def data(self) -> None:
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error}

    @classmethod
    def from_exception(cls, exc: StreamPanelError) -> "Err":
        return cls(exc.kind or ErrorKind.REMOTE_REQUEST, str(exc))


OperationResult = Union[Ok[T], Err]


def error_message(result: "OperationResult[Any]") -> Optional[str]:
    """Return the error text of a failed result, None for a success."""
    return None if result.success else result.error
