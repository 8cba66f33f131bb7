"""Room state machine: the single owner of the shared bingo room.

Phases run ``waiting -> playing -> finished``. ``restart_game`` takes a
finished room back to ``waiting`` with the same players and new cards;
``end_game`` swaps in an empty room.

Every public operation returns a ``Result``. Guards are checked before any
mutation, so a rejected operation leaves the room exactly as it was.
Operations are serialized with a lock because Flask-SocketIO may dispatch
handlers from several threads.
"""
import functools
import hmac
import logging
import random
import threading
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from bingo.errors import (
    BingoError,
    Conflict,
    InvalidInput,
    InvalidToken,
    NotFound,
    NotHost,
    PhaseViolation,
    Result,
)
from bingo.models import GRID_SIZE, Phase, Player, Room, utcnow
from bingo.services import CardGenerator, DrawEngine, PatternCatalog, WinValidator

logger = logging.getLogger(__name__)

DEFAULT_ROOM_ID = 'BINGO-ROOM'


def _uuid() -> str:
    return str(uuid.uuid4())


def _operation(method):
    """Run one room operation under the lock and wrap its outcome in a Result."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            try:
                value = method(self, *args, **kwargs)
            except BingoError as exc:
                logger.warning(f"[rejected] op={method.__name__} kind={exc.kind.value} reason={exc.message}")
                return Result.from_error(exc)
            self.room.updated_at = self._clock()
            return Result.success(value)
    return wrapper


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput('Name is required')
    return name.strip()


def _require_session(session_id) -> str:
    if not isinstance(session_id, str) or not session_id:
        raise InvalidInput('Session id is required')
    return session_id


def _secrets_match(given, expected: Optional[str]) -> bool:
    if not expected or not isinstance(given, str):
        return False
    return hmac.compare_digest(given.encode(), expected.encode())


class RoomStateMachine:
    def __init__(
        self,
        room: Optional[Room] = None,
        room_id: str = DEFAULT_ROOM_ID,
        rng: Optional[random.Random] = None,
        id_factory: Callable[[], str] = _uuid,
        secret_factory: Callable[[], str] = _uuid,
        clock: Callable[[], datetime] = utcnow,
        default_letter: Optional[str] = None,
    ):
        self._rng = rng or random.Random()
        self._new_id = id_factory
        self._new_secret = secret_factory
        self._clock = clock
        self._lock = threading.RLock()

        self.patterns = PatternCatalog()
        self.cards = CardGenerator(self._rng, id_factory)
        self.draws = DrawEngine(self._rng, clock)
        self.validator = WinValidator(self.patterns)

        if default_letter is not None and not self.patterns.is_valid_letter(default_letter):
            raise ValueError(f"DEFAULT_LETTER must be a single letter A-Z, got {default_letter!r}")
        self.default_letter = default_letter.strip().upper() if default_letter else None

        self.room = room if room is not None else self._empty_room(room_id)

    def _empty_room(self, room_id: str, created_at: Optional[datetime] = None) -> Room:
        now = self._clock()
        return Room(
            id=room_id,
            created_at=created_at or now,
            updated_at=now,
            host_letter=self.default_letter,
            selected_letter=self.default_letter,
        )

    # ---- guards ----

    def _ensure_host(self, session_id) -> None:
        if not self.room.is_host(session_id):
            raise NotHost('Only host can perform this action')

    def _ensure_phase(self, phase: Phase, message: str) -> None:
        if self.room.phase is not phase:
            raise PhaseViolation(message)

    def _player_for(self, session_id) -> Player:
        player = self.room.player_by_session(session_id)
        if player is None:
            raise NotFound('Player not found')
        return player

    # ---- host lifecycle ----

    @_operation
    def create_host(self, name, session_id):
        name = _clean_name(name)
        session_id = _require_session(session_id)
        if self.room.host_id and self.room.phase is Phase.PLAYING:
            raise Conflict('Room is already in use')

        host_secret = self._new_secret()
        room = self._empty_room(self.room.id, created_at=self.room.created_at)
        room.host_id = session_id
        room.host_name = name
        room.host_secret = host_secret
        self.room = room
        logger.info(f"[host] room={room.id} host={name!r} session={session_id}")
        return {'room': room.to_dict(), 'hostSecret': host_secret}

    @_operation
    def reclaim_host(self, host_secret, session_id):
        session_id = _require_session(session_id)
        if not _secrets_match(host_secret, self.room.host_secret):
            raise InvalidToken('Invalid host token')
        self.room.host_id = session_id
        logger.info(f"[host-reclaim] room={self.room.id} session={session_id}")
        return self.room.to_dict()

    @_operation
    def select_letter(self, session_id, letter):
        self._ensure_host(session_id)
        self._ensure_phase(Phase.WAITING, 'Pattern can only be chosen before the game starts')
        if letter is None or (isinstance(letter, str) and not letter.strip()):
            chosen = None
        elif self.patterns.is_valid_letter(letter):
            chosen = letter.strip().upper()
        else:
            raise InvalidInput(f"Invalid letter: {letter}. Must be A-Z")
        self.room.host_letter = chosen
        self.room.selected_letter = chosen
        logger.info(f"[letter] room={self.room.id} letter={self.room.selected_letter}")
        return self.room.to_dict()

    # ---- players ----

    @_operation
    def join_as_player(self, name, session_id):
        name = _clean_name(name)
        session_id = _require_session(session_id)
        if not self.room.host_id:
            raise NotFound('Room is not created yet')
        self._ensure_phase(Phase.WAITING, 'Game already started')
        if self.room.player_by_session(session_id) or self.room.player_by_name(name):
            raise Conflict('Player already joined')

        player = Player(
            id=self._new_id(),
            name=name,
            session_id=session_id,
            secret=self._new_secret(),
            card=self.cards.generate(),
        )
        self.room.players.append(player)
        logger.info(f"[join] room={self.room.id} player={player.id} name={name!r} total={len(self.room.players)}")
        return {
            'room': self.room.to_dict(),
            'playerSecret': player.secret,
            'playerId': player.id,
            'card': player.card.to_dict(),
        }

    @_operation
    def reclaim_player(self, player_secret, session_id):
        session_id = _require_session(session_id)
        player = next((p for p in self.room.players if _secrets_match(player_secret, p.secret)), None)
        if player is None:
            raise InvalidToken('Invalid player token')
        holder = self.room.player_by_session(session_id)
        if holder is not None and holder is not player:
            raise Conflict('Session already belongs to another player')

        player.session_id = session_id
        logger.info(f"[player-reclaim] room={self.room.id} player={player.id} session={session_id}")
        return {'room': self.room.to_dict(), 'card': player.card.to_dict(), 'playerId': player.id}

    @_operation
    def mark_cell(self, session_id, row, col):
        player = self._player_for(session_id)
        for coord in (row, col):
            if isinstance(coord, bool) or not isinstance(coord, int) or not 0 <= coord < GRID_SIZE:
                raise InvalidInput('Invalid cell')
        player.card.toggle(row, col)
        return {'room': self.room.to_dict(), 'card': player.card.to_dict()}

    @_operation
    def leave(self, session_id):
        # Players stay on the roster so they can reclaim their card later
        player = self.room.player_by_session(session_id)
        if player is not None:
            logger.info(f"[leave] room={self.room.id} player={player.id} kept for reclaim")
        if self.room.is_host(session_id):
            self.room.host_id = None
            logger.info(f"[leave] room={self.room.id} host disconnected")
        return self.room.to_dict()

    # ---- game flow ----

    @_operation
    def start_game(self, session_id):
        self._ensure_host(session_id)
        self._ensure_phase(Phase.WAITING, 'Game cannot be started now')
        self.room.drawn_numbers = []
        self.room.winner_id = None
        self.room.phase = Phase.PLAYING
        logger.info(f"[start] room={self.room.id} players={len(self.room.players)} letter={self.room.selected_letter}")
        return self.room.to_dict()

    @_operation
    def draw_number(self, session_id):
        self._ensure_host(session_id)
        self._ensure_phase(Phase.PLAYING, 'Game is not in playing state')
        number = self.draws.draw(self.room.drawn_numbers)
        self.room.drawn_numbers.append(number)
        logger.info(f"[draw] room={self.room.id} value={number.letter}{number.value} count={len(self.room.drawn_numbers)}")
        return {'room': self.room.to_dict(), 'number': number.to_dict()}

    @_operation
    def claim_bingo(self, session_id, letter=None):
        player = self._player_for(session_id)
        self._ensure_phase(Phase.PLAYING, 'Game is not in playing state')
        # The host's letter wins; otherwise the claimant names the pattern
        effective = self.room.host_letter
        if effective is None and letter is not None:
            if not isinstance(letter, str):
                raise InvalidInput('Letter must be a string')
            if letter.strip() and not self.patterns.is_valid_letter(letter):
                raise InvalidInput(f"Invalid letter: {letter}. Must be A-Z")
            effective = letter.strip().upper() or None
        valid = self.validator.validate(player.card, self.room.drawn_values(), effective)
        if valid:
            self.room.phase = Phase.FINISHED
            self.room.winner_id = player.id
            self.room.selected_letter = effective
        logger.info(f"[claim] room={self.room.id} player={player.id} letter={effective} valid={valid}")
        return {
            'room': self.room.to_dict(),
            'valid': valid,
            'playerId': player.id,
            'playerName': player.name,
            'selectedLetter': effective,
            'winnerId': self.room.winner_id,
        }

    @_operation
    def restart_game(self, session_id):
        self._ensure_host(session_id)
        self._ensure_phase(Phase.FINISHED, 'Game is not finished')
        fresh_cards = [self.cards.generate() for _ in self.room.players]
        for player, card in zip(self.room.players, fresh_cards):
            player.card = card
        self.room.drawn_numbers = []
        self.room.winner_id = None
        self.room.selected_letter = self.room.host_letter
        self.room.phase = Phase.WAITING
        logger.info(f"[restart] room={self.room.id} players={len(self.room.players)}")
        return self.room.to_dict()

    @_operation
    def end_game(self, session_id):
        self._ensure_host(session_id)
        self.room = self._empty_room(self.room.id)
        logger.info(f"[end] room={self.room.id} reset")
        return self.room.to_dict()

    # ---- reads ----

    def room_state(self):
        with self._lock:
            return self.room.to_dict()

    def player_cards(self) -> List[Tuple[str, dict]]:
        """(session id, card) for every player, for unicasting fresh cards."""
        with self._lock:
            return [(p.session_id, p.card.to_dict()) for p in self.room.players]
