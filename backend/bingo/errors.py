"""Error kinds and the result type returned by room operations.

Leaf services raise a ``BingoError`` subclass tagged with its kind. The room
state machine turns those into ``Result.failure`` at its boundary, so the
socket and HTTP layers only ever look at ``result.ok`` and ``result.error``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = 'invalid_input'
    AUTHORIZATION = 'authorization'
    PHASE_VIOLATION = 'phase_violation'
    CONFLICT = 'conflict'
    NOT_FOUND = 'not_found'
    INVALID_TOKEN = 'invalid_token'
    EXHAUSTED = 'exhausted'


class BingoError(Exception):
    """Base class for every rejected room operation."""
    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInput(BingoError):
    """Malformed letter, cell coordinates or name."""
    kind = ErrorKind.INVALID_INPUT


class NotHost(BingoError):
    """Caller is not the session currently bound as host."""
    kind = ErrorKind.AUTHORIZATION


class PhaseViolation(BingoError):
    """Operation not allowed in the current room phase."""
    kind = ErrorKind.PHASE_VIOLATION


class Conflict(BingoError):
    """Duplicate player, or the room is already in use."""
    kind = ErrorKind.CONFLICT


class NotFound(BingoError):
    kind = ErrorKind.NOT_FOUND


class InvalidToken(BingoError):
    """Reclaim secret matches nothing."""
    kind = ErrorKind.INVALID_TOKEN


class NumbersExhausted(BingoError):
    """All 75 numbers have been drawn."""
    kind = ErrorKind.EXHAUSTED


@dataclass(frozen=True)
class RoomError:
    kind: ErrorKind
    message: str

    def to_dict(self):
        return {'message': self.message, 'kind': self.kind.value}


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[RoomError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> 'Result':
        return cls(error=RoomError(kind=kind, message=message))

    @classmethod
    def from_error(cls, exc: BingoError) -> 'Result':
        return cls.failure(exc.kind, exc.message)
