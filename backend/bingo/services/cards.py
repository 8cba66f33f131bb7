import random
import uuid
from typing import Callable, List, Optional

from bingo.models import BingoCard, CENTER, COLUMN_RANGES, GRID_SIZE


def _uuid() -> str:
    return str(uuid.uuid4())


class CardGenerator:
    """Builds fresh 5x5 cards: one column per B-I-N-G-O range, free center."""

    def __init__(self, rng: Optional[random.Random] = None, id_factory: Callable[[], str] = _uuid):
        self._rng = rng or random.Random()
        self._new_id = id_factory

    def _sample_column(self, low: int, high: int) -> List[int]:
        # Shrinking pool: each remaining candidate is equally likely on every pick
        pool = list(range(low, high + 1))
        picked = []
        while len(picked) < GRID_SIZE and pool:
            idx = self._rng.randrange(len(pool))
            picked.append(pool.pop(idx))
        return picked

    def generate(self) -> BingoCard:
        columns = [self._sample_column(low, high) for low, high in COLUMN_RANGES.values()]
        numbers = [[columns[col][row] for col in range(GRID_SIZE)] for row in range(GRID_SIZE)]
        numbers[CENTER][CENTER] = None

        marked = [[False] * GRID_SIZE for _ in range(GRID_SIZE)]
        marked[CENTER][CENTER] = True

        return BingoCard(id=self._new_id(), numbers=numbers, marked=marked)
