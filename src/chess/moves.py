"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the move sets for each piece type.

Two families of rules live here:
* MOVEMENT_RULES: candidate (pseudo-legal) destination squares for a piece.
* ATTACK_RULES: squares a piece could capture on. Only used for check detection.

Neither family knows about check. Legality (not leaving your own king in check) is filtered later by GameState.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]

ORTHOGONALS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
KING_DELTAS: list[Vector] = ORTHOGONALS + DIAGONALS


@dataclass(frozen=True)
class Move:
    """Historical record of an executed move. The piece is stored as it was BEFORE the move (so a pawn, even if it promoted)."""

    from_square: Square
    to_square: Square
    piece: Piece
    captured: Optional[Piece] = None

    def describe(self) -> str:
        """Short label for the last move, ex. '♙ e2→e4'"""
        return f"{self.piece.symbol} {self.from_square.to_algebraic()}→{self.to_square.to_algebraic()}"


# --- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def pawn_starting_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The farthest rank from where the pawns start"""
    return 0 if color == Color.WHITE else 7


# --- MOVEMENT RULES ---
def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> list[Square]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece ends the ray but can be captured, a friendly piece just ends it.
    """
    player_color = board.piece(square).color

    targets: list[Square] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if piece_found is not None:
                if piece_found.color != player_color:
                    targets.append(target_square)
                break
            targets.append(target_square)
            target_square = target_square.offset(d_row, d_col)
    return targets


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump by a fixed offset"""
    player_color = board.piece(square).color

    targets: list[Square] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece(target_square)
        if piece_found is None or piece_found.color != player_color:
            targets.append(target_square)
    return targets


def candidate_pawn_moves(square: Square, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (only onto an empty square).
    - can move by two in its first move, when both squares in front are empty
    - takes diagonally, only if an opponent's piece stands there

    NOTE: No en passant in this variant.
    """
    color = board.piece(square).color
    direction = pawn_direction(color)
    targets: list[Square] = []

    one_forward = square.offset(direction, 0)
    if one_forward.is_within_bounds() and board.piece(one_forward) is None:
        targets.append(one_forward)

        two_forward = square.offset(2 * direction, 0)
        if square.row == pawn_starting_row(color) and board.piece(two_forward) is None:
            targets.append(two_forward)

    for target_square in pawn_attack_squares(square, board):
        piece_found = board.piece(target_square)
        if piece_found is not None and piece_found.color != color:
            targets.append(target_square)
    return targets


def candidate_knight_moves(square: Square, board: Board) -> list[Square]:
    """Knights always jump such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, ORTHOGONALS)


def candidate_queen_moves(square: Square, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, ORTHOGONALS + DIAGONALS)


def candidate_king_moves(square: Square, board: Board) -> list[Square]:
    """
    The king can move by a single square at the time. No castling in this variant.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# --- ATTACKING RULES ---
def pawn_attack_squares(square: Square, board: Board) -> list[Square]:
    """
    Pawns take diagonally
    ----

    NOTE: Forward pawn moves can never capture, so they are not attacks.
    The diagonal squares count as attacked whether or not anything stands on them.
    """
    direction = pawn_direction(board.piece(square).color)
    diagonals = [square.offset(direction, -1), square.offset(direction, 1)]
    return [target for target in diagonals if target.is_within_bounds()]


# --- STRATEGY PATTERN: ATTACKING RULES ---
# Apart from the pawn, every piece captures the same way it moves.
AttackSquaresFn = Callable[[Square, Board], list[Square]]
ATTACK_RULES: dict[PieceType, AttackSquaresFn] = {
    PieceType.PAWN: pawn_attack_squares,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}
