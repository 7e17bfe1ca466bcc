"""
Compact form: the FEN-inspired text encoding of a board position + the color to move.

<board position string> <active color>

* The board is written rank by rank, from rank 8 (row 0) down to rank 1 (row 7), ranks separated by slashes.
* Within a rank, squares are read from the a-file to the h-file. Pieces are written as letters
  (upper case: White, lower case: Black) and consecutive empty squares collapse into a single digit (1-8).
* The active color is either "w" or "b".

ex) The standard starting position is encoded as
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w

Unlike a full FEN string there are no castling rights, en passant square or move counters: the variant played does not use them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.chess.board import Board
from src.chess.pieces import FEN_TO_PIECE, Color, Piece
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidCompactFormError

STARTING_COMPACT_FORM = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w"
EMPTY_SQUARE_DIGITS = "12345678"


def position_to_fen(board: Board) -> str:
    """Ranks are separated by slashes."""
    return "/".join(_rank_to_fen(board, row) for row in range(BOARD_DIMENSIONS[0]))


def _rank_to_fen(board: Board, row: int) -> str:
    """FEN string of a single rank"""
    fen_characters: list[str] = []
    empty_count = 0
    for col in range(BOARD_DIMENSIONS[1]):
        piece = board.piece(Square(row, col))

        if piece is not None:
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        fen_characters.append(str(empty_count))
    return "".join(fen_characters)


def color_to_fen(color: Color) -> str:
    return "w" if color == Color.WHITE else "b"


def color_from_fen(active_color: Optional[str]) -> Color:
    """Anything other than an explicit 'b' (including a missing token) means White is to move"""
    return Color.BLACK if active_color == "b" else Color.WHITE


def is_valid_position(position: str) -> bool:
    """Only check the part of the encoding for the board position."""
    try:
        parse_position(position)
    except InvalidCompactFormError:
        return False
    return True


def parse_position(position: str) -> Board:
    """
    Construct a board from the position part of the compact form.

    NOTE: A rank describing fewer than 8 squares leaves the remaining squares of that rank empty.
    Describing more than 8 squares is an error.
    """
    num_rows, num_cols = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_rows:
        raise InvalidCompactFormError(
            f"Expected {num_rows} ranks separated by '/', found {len(rank_fens)}: {position!r}"
        )

    board = Board()
    for row, rank_fen in enumerate(rank_fens):
        if not rank_fen:
            raise InvalidCompactFormError(f"Rank {num_rows - row} is empty: {position!r}")

        col = 0
        for character in rank_fen:
            if character in EMPTY_SQUARE_DIGITS:
                # A number denotes the amount of empty squares after each other
                col += int(character)
                if col > num_cols:
                    raise InvalidCompactFormError(
                        f"Rank {num_rows - row} describes more than {num_cols} squares: {rank_fen!r}"
                    )
                continue

            piece = Piece.from_fen(character)
            if piece is None:
                raise InvalidCompactFormError(
                    f"Unrecognized character {character!r} in rank {num_rows - row}. Expected a digit or one of {''.join(FEN_TO_PIECE)} (either case)."
                )
            if col >= num_cols:
                raise InvalidCompactFormError(
                    f"Rank {num_rows - row} describes more than {num_cols} squares: {rank_fen!r}"
                )
            board.place_piece(piece, Square(row, col))
            col += 1
    return board


@dataclass
class CompactState:
    """The part of a game that survives being encoded: the position and whose turn it is."""

    board: Board
    color_to_move: Color

    @classmethod
    def from_fen(cls, fen: str) -> CompactState:
        """Parse the compact form into data. Raises InvalidCompactFormError if the text cannot be interpreted."""
        parts = fen.split()
        if not parts:
            raise InvalidCompactFormError(f"Cannot interpret supplied string as compact form: {fen!r}")

        board = parse_position(parts[0])
        color_to_move = color_from_fen(parts[1] if len(parts) > 1 else None)
        return cls(board, color_to_move)

    def to_fen(self) -> str:
        """reverse operation: write the compact form from the given data"""
        return f"{position_to_fen(self.board)} {color_to_fen(self.color_to_move)}"

    @classmethod
    def starting_position(cls) -> CompactState:
        return cls(Board.starting_position(), Color.WHITE)
