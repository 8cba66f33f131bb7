"""Letter-shaped win patterns.

Each letter A-Z maps to a 5x5 mask drawn below with ``#`` for a required
cell and ``.`` for a free one.
"""
from typing import Dict, List, Tuple

from bingo.errors import InvalidInput

Pattern = Tuple[Tuple[bool, ...], ...]

_SHAPES: Dict[str, Tuple[str, ...]] = {
    'A': ('#####', '#...#', '#####', '#...#', '#...#'),
    'B': ('####.', '#...#', '####.', '#...#', '####.'),
    'C': ('#####', '#....', '#....', '#....', '#####'),
    'D': ('####.', '#...#', '#...#', '#...#', '####.'),
    'E': ('#####', '#....', '#####', '#....', '#####'),
    'F': ('#####', '#....', '#####', '#....', '#....'),
    'G': ('#####', '#....', '#.###', '#...#', '#####'),
    'H': ('#...#', '#...#', '#####', '#...#', '#...#'),
    'I': ('#####', '..#..', '..#..', '..#..', '#####'),
    'J': ('..###', '....#', '....#', '#...#', '#####'),
    'K': ('#...#', '#..#.', '###..', '#..#.', '#...#'),
    'L': ('#....', '#....', '#....', '#....', '#####'),
    'M': ('#...#', '##.##', '#.#.#', '#...#', '#...#'),
    'N': ('#...#', '##..#', '#.#.#', '#..##', '#...#'),
    'O': ('#####', '#...#', '#...#', '#...#', '#####'),
    'P': ('#####', '#...#', '#####', '#....', '#....'),
    'Q': ('#####', '#...#', '#...#', '#..#.', '####.'),
    'R': ('#####', '#...#', '#####', '#..#.', '#...#'),
    'S': ('#####', '#....', '#####', '....#', '#####'),
    'T': ('#####', '..#..', '..#..', '..#..', '..#..'),
    'U': ('#...#', '#...#', '#...#', '#...#', '#####'),
    'V': ('#...#', '#...#', '#...#', '.#.#.', '..#..'),
    'W': ('#...#', '#...#', '#.#.#', '.###.', '#...#'),
    'X': ('#...#', '.#.#.', '..#..', '.#.#.', '#...#'),
    'Y': ('#...#', '.#.#.', '..#..', '..#..', '..#..'),
    'Z': ('#####', '...#.', '..#..', '.#...', '#####'),
}


def _to_mask(rows: Tuple[str, ...]) -> Pattern:
    return tuple(tuple(cell == '#' for cell in row) for row in rows)


PATTERNS: Dict[str, Pattern] = {letter: _to_mask(rows) for letter, rows in _SHAPES.items()}


def _normalize(letter) -> str:
    if not isinstance(letter, str):
        return ''
    return letter.strip().upper()


class PatternCatalog:
    """Read-only lookup over the fixed alphabet masks."""

    def letters(self) -> List[str]:
        return list(PATTERNS)

    def is_valid_letter(self, letter) -> bool:
        return _normalize(letter) in PATTERNS

    def get_pattern(self, letter) -> Pattern:
        key = _normalize(letter)
        if key not in PATTERNS:
            raise InvalidInput(f"Invalid letter: {letter}. Must be A-Z")
        return PATTERNS[key]

    def required_cells(self, letter) -> List[Tuple[int, int]]:
        """(row, col) of every cell the letter's shape requires."""
        pattern = self.get_pattern(letter)
        return [
            (row, col)
            for row, cells in enumerate(pattern)
            for col, required in enumerate(cells)
            if required
        ]
