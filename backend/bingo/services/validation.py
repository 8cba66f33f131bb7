from typing import Iterable, Optional, Union

from bingo.models import BingoCard, BingoNumber
from bingo.services.patterns import PatternCatalog


class WinValidator:
    """Certifies a card against the selected letter's pattern.

    Stricter than line bingo: every cell the letter requires must be marked by
    the player, and every required numbered cell must also have been drawn.
    """

    def __init__(self, catalog: Optional[PatternCatalog] = None):
        self.catalog = catalog or PatternCatalog()

    def validate(
        self,
        card: BingoCard,
        drawn_numbers: Iterable[Union[BingoNumber, int]],
        selected_letter: Optional[str],
    ) -> bool:
        # No active pattern, no win
        if not self.catalog.is_valid_letter(selected_letter):
            return False

        drawn = {n.value if isinstance(n, BingoNumber) else int(n) for n in drawn_numbers}
        required = 0
        for row, col in self.catalog.required_cells(selected_letter):
            required += 1
            if not card.marked[row][col]:
                return False
            if card.is_free(row, col):
                continue
            value = card.numbers[row][col]
            if value is None or value not in drawn:
                return False
        return required > 0
