"""Unit tests for /src/chess/board.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from src.chess.board import BACK_RANK, Board, Color, Square
from src.chess.pieces import Piece, PieceType

BoardFactory = Callable[[dict[str, str]], Board]


# -- CREATION ---
def test_empty_board() -> None:
    board = Board()
    assert list(board.occupied_squares()) == []
    assert len(board.grid) == 8
    assert all(len(row) == 8 for row in board.grid)


def test_starting_position() -> None:
    """Black on rows 0-1, White on rows 6-7, pieces in standard order starting from the a-file"""
    board = Board.starting_position()
    assert [piece.type for piece in board.grid[0]] == list(BACK_RANK)
    assert [piece.type for piece in board.grid[7]] == list(BACK_RANK)
    assert all(piece.color == Color.BLACK for piece in board.grid[0] + board.grid[1])
    assert all(piece.color == Color.WHITE for piece in board.grid[6] + board.grid[7])
    assert all(piece == Piece(PieceType.PAWN, Color.WHITE) for piece in board.grid[6])
    assert all(piece is None for row in board.grid[2:6] for piece in row)
    assert board.piece(Square.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)


def test_copy_is_independent() -> None:
    board = Board.starting_position()
    copied = board.copy()
    assert copied == board

    copied.remove_piece(Square.from_algebraic("e2"))
    assert copied != board
    assert board.piece(Square.from_algebraic("e2")) is not None


# -- UPDATING THE POSITION ---
def test_move_piece_to_empty_square() -> None:
    board = Board.starting_position()
    captured = board.move_piece(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    assert captured is None
    assert board.piece(Square.from_algebraic("e2")) is None
    assert board.piece(Square.from_algebraic("e4")) == Piece(PieceType.PAWN, Color.WHITE)


def test_move_piece_returns_captured_piece(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"d1": "Q", "d7": "p"})
    captured = board.move_piece(Square.from_algebraic("d1"), Square.from_algebraic("d7"))
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.piece(Square.from_algebraic("d7")) == Piece(PieceType.QUEEN, Color.WHITE)
    assert len(list(board.occupied_squares())) == 1


def test_place_and_remove_piece() -> None:
    board = Board()
    square = Square(3, 3)
    board.place_piece(Piece(PieceType.ROOK, Color.BLACK), square)
    assert board.piece(square) == Piece(PieceType.ROOK, Color.BLACK)
    board.remove_piece(square)
    assert board.piece(square) is None


# -- LOCATING PIECES ---
def test_locate_color() -> None:
    board = Board.starting_position()
    white_squares = board.locate_color(Color.WHITE)
    assert len(white_squares) == 16
    assert all(square.row in (6, 7) for square in white_squares)


@pytest.mark.parametrize("color, square_name", [(Color.WHITE, "e1"), (Color.BLACK, "e8")])
def test_find_king(color: Color, square_name: str) -> None:
    board = Board.starting_position()
    assert board.find_king(color) == Square.from_algebraic(square_name)


def test_find_missing_king() -> None:
    assert Board().find_king(Color.WHITE) is None


# -- RULE DISPATCH ---
def test_candidate_moves_of_empty_square() -> None:
    assert Board().candidate_moves(Square(4, 4)) == []
    assert Board().attack_squares(Square(4, 4)) == []


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_candidate_moves_dispatch_on_piece_type(piece_type: PieceType) -> None:
    """The board looks up the movement rule of the piece type standing on the square"""
    board = Board()
    square = Square(4, 4)
    board.place_piece(Piece(piece_type, Color.WHITE), square)

    mock_rules = {rule_type: Mock(return_value=[]) for rule_type in PieceType}
    with patch.dict("src.chess.board.MOVEMENT_RULES", mock_rules):
        board.candidate_moves(square)

    mock_rules[piece_type].assert_called_once_with(square, board)
    for other_type, mock_rule in mock_rules.items():
        if other_type != piece_type:
            mock_rule.assert_not_called()


def test_attack_squares_dispatch_on_piece_type() -> None:
    board = Board()
    square = Square(4, 4)
    board.place_piece(Piece(PieceType.PAWN, Color.BLACK), square)

    mock_rule = Mock(return_value=[Square(5, 5)])
    with patch.dict("src.chess.board.ATTACK_RULES", {PieceType.PAWN: mock_rule}):
        assert board.attack_squares(square) == [Square(5, 5)]
    mock_rule.assert_called_once_with(square, board)


# -- CHECK DETECTION ---
def test_no_check_in_starting_position() -> None:
    board = Board.starting_position()
    assert not board.is_check(Color.WHITE)
    assert not board.is_check(Color.BLACK)


@pytest.mark.parametrize(
    "pieces",
    [
        {"e1": "K", "e8": "r"},  # rook along the file
        {"e1": "K", "a5": "q"},  # queen along the diagonal
        {"e1": "K", "h4": "b"},  # bishop along the diagonal
        {"e1": "K", "f3": "n"},  # knight
        {"e1": "K", "d2": "p"},  # pawn (black pawns attack downwards)
        {"e1": "K", "e2": "k"},  # king next to king
    ],
)
def test_check_by_each_piece_type(board_with_pieces: BoardFactory, pieces: dict[str, str]) -> None:
    board = board_with_pieces(pieces)
    assert board.is_check(Color.WHITE)


@pytest.mark.parametrize(
    "pieces",
    [
        {"e1": "K", "e8": "r", "e4": "P"},  # blocked by own piece
        {"e1": "K", "e8": "r", "e4": "p"},  # blocked by opponent's piece
        {"e1": "K", "e2": "p"},  # pawn in front of the king does not attack it
        {"e1": "K", "d2": "P"},  # own pawn
        {"e1": "K", "f4": "n"},  # knight not a knight's jump away
        {"e1": "K"},  # alone on the board
    ],
)
def test_no_check(board_with_pieces: BoardFactory, pieces: dict[str, str]) -> None:
    board = board_with_pieces(pieces)
    assert not board.is_check(Color.WHITE)


def test_white_pawn_attacks_upwards(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e8": "k", "d7": "P"})
    assert board.is_check(Color.BLACK)
    board = board_with_pieces({"e8": "k", "d6": "P"})
    assert not board.is_check(Color.BLACK)


def test_board_without_king_is_not_in_check(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e8": "r"})
    assert not board.is_check(Color.WHITE)


def test_is_under_attack(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"a1": "r"})
    assert board.is_under_attack(Square.from_algebraic("a8"), Color.BLACK)
    assert not board.is_under_attack(Square.from_algebraic("b2"), Color.BLACK)
    assert not board.is_under_attack(Square.from_algebraic("a8"), Color.WHITE)


def test_text_diagram() -> None:
    lines = str(Board.starting_position()).splitlines()
    assert lines[0] == "rnbqkbnr"
    assert lines[3] == "........"
    assert lines[7] == "RNBQKBNR"
