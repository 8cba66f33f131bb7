import random
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from bingo.errors import NumbersExhausted
from bingo.models import BingoNumber, MAX_NUMBER, letter_for_value, utcnow


class DrawEngine:
    """Draws 1..75 without replacement against a room's history.

    The engine keeps no state of its own; the caller appends the returned
    number to the history it passed in.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], datetime] = utcnow):
        self._rng = rng or random.Random()
        self._clock = clock

    def available(self, history: Iterable[BingoNumber]) -> List[int]:
        drawn = {number.value for number in history}
        return [value for value in range(1, MAX_NUMBER + 1) if value not in drawn]

    def draw(self, history: Iterable[BingoNumber]) -> BingoNumber:
        available = self.available(history)
        if not available:
            raise NumbersExhausted('No more numbers available')
        value = available[self._rng.randrange(len(available))]
        return BingoNumber(letter=letter_for_value(value), value=value, drawn_at=self._clock())
