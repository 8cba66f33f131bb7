import random
from datetime import datetime, timezone

import pytest

from bingo.errors import ErrorKind, InvalidInput, NumbersExhausted
from bingo.models import CENTER, COLUMN_RANGES, BingoCard, BingoNumber, letter_for_value
from bingo.services import CardGenerator, DrawEngine, PatternCatalog, WinValidator


# ---- patterns ----

def test_catalog_has_every_letter():
    catalog = PatternCatalog()
    assert catalog.letters() == [chr(c) for c in range(ord('A'), ord('Z') + 1)]
    for letter in catalog.letters():
        pattern = catalog.get_pattern(letter)
        assert len(pattern) == 5
        assert all(len(row) == 5 for row in pattern)
        assert any(any(row) for row in pattern)


def test_get_pattern_is_case_insensitive():
    catalog = PatternCatalog()
    assert catalog.get_pattern('x') == catalog.get_pattern('X')
    assert catalog.get_pattern(' o ') == catalog.get_pattern('O')


@pytest.mark.parametrize('letter', ['', '1', 'AB', 'ñ', None, 7])
def test_invalid_letters(letter):
    catalog = PatternCatalog()
    assert catalog.is_valid_letter(letter) is False
    with pytest.raises(InvalidInput) as exc:
        catalog.get_pattern(letter)
    assert exc.value.kind is ErrorKind.INVALID_INPUT


def test_x_pattern_shape():
    cells = PatternCatalog().required_cells('X')
    assert cells == [(0, 0), (0, 4), (1, 1), (1, 3), (2, 2), (3, 1), (3, 3), (4, 0), (4, 4)]


# ---- cards ----

def test_generated_cards_respect_column_ranges():
    generator = CardGenerator(random.Random(7))
    for _ in range(50):
        card = generator.generate()
        assert card.numbers[CENTER][CENTER] is None
        assert card.marked[CENTER][CENTER] is True
        values = [v for row in card.numbers for v in row if v is not None]
        assert len(values) == 24
        assert len(set(values)) == 24
        for col, (low, high) in enumerate(COLUMN_RANGES.values()):
            column = [card.numbers[row][col] for row in range(5) if not (row == CENTER and col == CENTER)]
            assert all(low <= v <= high for v in column)
        marked_cells = [(r, c) for r in range(5) for c in range(5) if card.marked[r][c]]
        assert marked_cells == [(CENTER, CENTER)]


def test_cards_get_distinct_ids():
    generator = CardGenerator(random.Random(1))
    assert generator.generate().id != generator.generate().id


def test_free_center_cannot_be_toggled():
    card = CardGenerator(random.Random(3)).generate()
    assert card.toggle(CENTER, CENTER) is True
    assert card.toggle(0, 0) is True
    assert card.toggle(0, 0) is False


# ---- draws ----

def test_draws_cover_the_whole_domain_then_exhaust():
    engine = DrawEngine(random.Random(99))
    history = []
    for _ in range(75):
        number = engine.draw(history)
        assert number.letter == letter_for_value(number.value)
        history.append(number)
    assert sorted(n.value for n in history) == list(range(1, 76))
    with pytest.raises(NumbersExhausted) as exc:
        engine.draw(history)
    assert exc.value.kind is ErrorKind.EXHAUSTED


def test_draw_uses_injected_clock():
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    engine = DrawEngine(random.Random(0), clock=lambda: stamp)
    assert engine.draw([]).drawn_at == stamp


@pytest.mark.parametrize('value,letter', [(1, 'B'), (15, 'B'), (16, 'I'), (45, 'N'), (46, 'G'), (75, 'O')])
def test_letter_ranges(value, letter):
    assert letter_for_value(value) == letter


# ---- validation ----

def _card_completing(letter, catalog):
    card = CardGenerator(random.Random(5)).generate()
    cells = catalog.required_cells(letter)
    for row, col in cells:
        card.marked[row][col] = True
    drawn = [card.numbers[r][c] for r, c in cells if card.numbers[r][c] is not None]
    return card, cells, drawn


def test_blank_letter_never_wins():
    validator = WinValidator()
    card, _, _ = _card_completing('O', validator.catalog)
    everything = list(range(1, 76))
    assert validator.validate(card, everything, '') is False
    assert validator.validate(card, everything, '   ') is False
    assert validator.validate(card, everything, None) is False
    assert validator.validate(card, everything, '?') is False


def test_completed_o_pattern_wins():
    validator = WinValidator()
    card, cells, drawn = _card_completing('O', validator.catalog)
    assert validator.validate(card, drawn, 'O') is True
    assert validator.validate(card, drawn, 'o') is True

    row, col = next(cell for cell in cells if not BingoCard.is_free(*cell))
    card.marked[row][col] = False
    assert validator.validate(card, drawn, 'O') is False


def test_marked_but_undrawn_cell_fails():
    validator = WinValidator()
    card, cells, drawn = _card_completing('O', validator.catalog)
    assert validator.validate(card, drawn[1:], 'O') is False


def test_validator_accepts_bingo_numbers():
    validator = WinValidator()
    card, _, drawn = _card_completing('X', validator.catalog)
    stamp = datetime.now(timezone.utc)
    history = [BingoNumber(letter_for_value(v), v, stamp) for v in drawn]
    assert validator.validate(card, history, 'X') is True
