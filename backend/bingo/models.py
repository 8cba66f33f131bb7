"""In-memory models for the bingo room.

The room only lives for the process lifetime, so these are plain dataclasses
rather than database rows. ``to_dict`` methods produce the camelCase shapes
sent to clients.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from bingo.errors import InvalidInput

GRID_SIZE = 5
CENTER = 2
MAX_NUMBER = 75

# Column letter -> inclusive value range
COLUMN_RANGES: Dict[str, Tuple[int, int]] = {
    'B': (1, 15),
    'I': (16, 30),
    'N': (31, 45),
    'G': (46, 60),
    'O': (61, 75),
}
COLUMN_LETTERS = tuple(COLUMN_RANGES)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def letter_for_value(value: int) -> str:
    for letter, (low, high) in COLUMN_RANGES.items():
        if low <= value <= high:
            return letter
    raise InvalidInput(f"Number {value} is outside 1-{MAX_NUMBER}")


class Phase(str, Enum):
    WAITING = 'waiting'
    PLAYING = 'playing'
    FINISHED = 'finished'


@dataclass(frozen=True)
class BingoNumber:
    letter: str
    value: int
    drawn_at: datetime

    def to_dict(self):
        return {
            'letter': self.letter,
            'value': self.value,
            'drawnAt': self.drawn_at.isoformat(),
        }


@dataclass
class BingoCard:
    id: str
    # numbers[row][col]; None is the free center cell
    numbers: List[List[Optional[int]]]
    marked: List[List[bool]]

    @staticmethod
    def is_free(row: int, col: int) -> bool:
        return row == CENTER and col == CENTER

    def toggle(self, row: int, col: int) -> bool:
        """Flip a cell's mark and return the new state. The free center stays marked."""
        if not self.is_free(row, col):
            self.marked[row][col] = not self.marked[row][col]
        return self.marked[row][col]

    def to_dict(self):
        return {
            'id': self.id,
            'numbers': [list(row) for row in self.numbers],
            'marked': [list(row) for row in self.marked],
        }


@dataclass
class Player:
    id: str
    name: str
    session_id: str
    secret: str
    card: BingoCard

    def to_dict(self):
        # Public view only: the secret and card go to the owner individually
        return {'id': self.id, 'name': self.name}


@dataclass
class Room:
    id: str
    created_at: datetime
    updated_at: datetime
    host_id: Optional[str] = None
    host_name: Optional[str] = None
    host_secret: Optional[str] = None
    players: List[Player] = field(default_factory=list)
    drawn_numbers: List[BingoNumber] = field(default_factory=list)
    phase: Phase = Phase.WAITING
    # Host (or deployment default) choice; survives restarts
    host_letter: Optional[str] = None
    # Pattern in play: the host's letter, or the letter the last game was won with
    selected_letter: Optional[str] = None
    winner_id: Optional[str] = None

    def drawn_values(self) -> Set[int]:
        return {number.value for number in self.drawn_numbers}

    def player_by_session(self, session_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.session_id == session_id), None)

    def player_by_name(self, name: str) -> Optional[Player]:
        return next((p for p in self.players if p.name == name), None)

    def is_host(self, session_id: str) -> bool:
        return self.host_id is not None and self.host_id == session_id

    def to_dict(self):
        return {
            'id': self.id,
            'hostName': self.host_name,
            'players': [p.to_dict() for p in self.players],
            'phase': self.phase.value,
            'drawnNumbers': [n.to_dict() for n in self.drawn_numbers],
            'selectedLetter': self.selected_letter,
            'winnerId': self.winner_id,
        }
