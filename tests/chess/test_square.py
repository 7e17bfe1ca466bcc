"""Unit tests for /src/chess/square.py"""

import pytest

from src.chess.square import BOARD_DIMENSIONS, Square


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{'abcdefgh'[col]}{8 - row}")
        for row in range(8)
        for col in range(8)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """Row 0 is the 8th rank, column 0 is the a-file"""
    square = Square.from_algebraic(notation)
    assert square.row == row
    assert square.col == col


@pytest.mark.parametrize(
    "notation, square",
    [("a8", Square(0, 0)), ("h1", Square(7, 7)), ("e2", Square(6, 4)), ("d7", Square(1, 3))],
)
def test_to_algebraic_notation(notation: str, square: Square) -> None:
    assert square.to_algebraic() == notation


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for row in range(BOARD_DIMENSIONS[0]):
        for col in range(BOARD_DIMENSIONS[1]):
            assert Square(row, col).is_within_bounds()


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_offset() -> None:
    assert Square(4, 4).offset(-2, 1) == Square(2, 5)


def test_squares_are_values() -> None:
    """Frozen dataclass: equal coordinates are equal squares and can be used in sets"""
    assert Square(3, 3) == Square(3, 3)
    assert len({Square(3, 3), Square(3, 3)}) == 1
