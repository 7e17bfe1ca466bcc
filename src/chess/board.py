"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES, AttackSquaresFn, CandidateMovesFn
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square

Grid = list[list[Optional[Piece]]]

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def empty_grid() -> Grid:
    num_rows, num_cols = BOARD_DIMENSIONS
    return [[None] * num_cols for _ in range(num_rows)]


@dataclass
class Board:
    """
    8x8 grid of optional pieces.
    ---

    Row 0 is Black's back rank (rank 8), row 7 is White's back rank (rank 1). Column 0 is the a-file.
    """

    grid: Grid = field(default_factory=empty_grid)

    @classmethod
    def starting_position(cls) -> Board:
        grid = empty_grid()
        grid[0] = [Piece(piece_type, Color.BLACK) for piece_type in BACK_RANK]
        grid[1] = [Piece(PieceType.PAWN, Color.BLACK) for _ in range(BOARD_DIMENSIONS[1])]
        grid[6] = [Piece(PieceType.PAWN, Color.WHITE) for _ in range(BOARD_DIMENSIONS[1])]
        grid[7] = [Piece(piece_type, Color.WHITE) for piece_type in BACK_RANK]
        return cls(grid)

    def copy(self) -> Board:
        """Pieces are immutable values, so copying the rows is enough to get an independent board"""
        return Board([list(row) for row in self.grid])

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> None:
        self.grid[square.row][square.col] = None

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Update the position on the board. Returns whatever stood on the target square (the captured piece, if any)"""
        captured = self.piece(to_square)
        self.place_piece(self.piece(from_square), to_square)
        self.remove_piece(from_square)
        return captured

    def occupied_squares(self) -> Iterator[tuple[Square, Piece]]:
        for row, pieces in enumerate(self.grid):
            for col, piece in enumerate(pieces):
                if piece is not None:
                    yield Square(row, col), piece

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.occupied_squares() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Square]:
        king = Piece(PieceType.KING, color)
        return next(
            (square for square, piece in self.occupied_squares() if piece == king),
            None,
        )

    def candidate_moves(self, square: Square) -> list[Square]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)
        """
        piece = self.piece(square)
        if piece is None:
            return []
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
        return movement_rule(square, self)

    def attack_squares(self, square: Square) -> list[Square]:
        """Raw squares the piece on the square could capture on. Knows nothing about check."""
        piece = self.piece(square)
        if piece is None:
            return []
        attack_rule: AttackSquaresFn = ATTACK_RULES[piece.type]
        return attack_rule(square, self)

    def is_under_attack(self, square: Square, by_color: Color) -> bool:
        return any(
            square in self.attack_squares(attacker_square)
            for attacker_square in self.locate_color(by_color)
        )

    def is_check(self, color: Color) -> bool:
        """Is the king of the specified color attacked by any of the opponent's pieces? (A board without that king is never in check)"""
        king_square = self.find_king(color)
        if king_square is None:
            return False
        return self.is_under_attack(king_square, color.opposite)

    def __str__(self) -> str:
        """Text diagram, rank 8 at the top. Handy in test failure output."""
        return "\n".join(
            "".join(piece.to_fen() if piece else "." for piece in row)
            for row in self.grid
        )
