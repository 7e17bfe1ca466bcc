"""
GameState is the entrypoint into the domain layer for the service layer.
It owns the board and whose turn it is, and orchestrates the rules needed to play a turn:
legal move generation, executing a move, and deciding the status of the game afterwards.

The module level functions at the bottom form the engine API the host (chat extension, service layer) calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.chess.board import Board
from src.chess.fen import CompactState
from src.chess.moves import Move, promotion_row
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidCompactFormError
from src.core.shared_types import FINISHED_STATUSES, Status

logger = logging.getLogger(__name__)

SquareLike = Square | tuple[int, int]


def as_square(square: SquareLike) -> Square:
    """Hosts may hand in plain (row, col) tuples"""
    return square if isinstance(square, Square) else Square(*square)


def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Does any opposing piece attack the king of the given color?
    ---

    Only uses raw attack squares (the board's ATTACK_RULES), never the check-filtered legal moves,
    so deciding legality and detecting check cannot recurse into each other.
    """
    return board.is_check(color)


def legal_moves_on_board(board: Board, square: Square) -> list[Square]:
    """
    Legal moves of whichever piece stands on the square, regardless of whose turn it is.
    ----

    1. generate candidate moves, using the basic movement rules for the piece (the board does this calculation)
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    """
    piece = board.piece(square)
    if piece is None:
        return []
    return [
        target
        for target in board.candidate_moves(square)
        if not _is_putting_yourself_in_check(board, square, target, piece.color)
    ]


def _is_putting_yourself_in_check(
    board: Board, from_square: Square, to_square: Square, color: Color
) -> bool:
    """Return True if the move puts (or leaves) you in check

    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board (a move that loses your king altogether is never legal)
    """
    simulated = board.copy()
    simulated.move_piece(from_square, to_square)
    if simulated.find_king(color) is None:
        return True
    return simulated.is_check(color)


def has_legal_move(board: Board, color: Color) -> bool:
    return any(legal_moves_on_board(board, square) for square in board.locate_color(color))


def compute_status(board: Board, color: Color) -> Status:
    """Status of the game, seen from the side that is about to move."""
    in_check = is_king_in_check(board, color)
    can_move = has_legal_move(board, color)
    if in_check and not can_move:
        return Status.CHECKMATE
    if in_check:
        return Status.CHECK
    if not can_move:
        return Status.STALEMATE
    return Status.ACTIVE


@dataclass
class GameState:
    board: Board
    current_turn: Color = Color.WHITE
    move_history: list[Move] = field(default_factory=list)
    status: Status = Status.ACTIVE

    # --- transient selection state of the board UI. Never part of the compact form. ---
    selected_square: Optional[Square] = field(default=None, compare=False)
    valid_moves: list[Square] = field(default_factory=list, compare=False)

    @classmethod
    def new_game(cls) -> GameState:
        """Standard starting position, White to move."""
        return cls.from_compact_state(CompactState.starting_position())

    @classmethod
    def from_compact_state(cls, compact: CompactState) -> GameState:
        """History and selection start out empty, the status is derived from the position right away."""
        status = compute_status(compact.board, compact.color_to_move)
        return cls(board=compact.board, current_turn=compact.color_to_move, status=status)

    @classmethod
    def from_compact_form(cls, text: str) -> Optional[GameState]:
        """Returns None (no partial board) when the text cannot be decoded."""
        try:
            compact = CompactState.from_fen(text)
        except InvalidCompactFormError as exc:
            logger.debug("Could not decode compact form: %s", exc)
            return None
        return cls.from_compact_state(compact)

    def to_compact_form(self) -> str:
        return CompactState(self.board, self.current_turn).to_fen()

    # --- GAME INFO ---
    @property
    def is_over(self) -> bool:
        return self.status in FINISHED_STATUSES

    @property
    def winner(self) -> Optional[Color]:
        """
        After a checkmate or a resignation, the side to move lost, so the opponent must be the winner.
        """
        if self.status in (Status.CHECKMATE, Status.RESIGNED):
            return self.current_turn.opposite
        return None

    @property
    def move_number(self) -> int:
        return len(self.move_history) + 1

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    # --- RULES ---
    def legal_moves(self, square: SquareLike) -> list[Square]:
        """
        Legal destinations for the piece on the square.

        Asking for an empty square, an opponent's piece or a square off the board is not an error: there simply are no moves.
        """
        square = as_square(square)
        if not square.is_within_bounds():
            return []
        piece = self.board.piece(square)
        if piece is None or piece.color != self.current_turn:
            return []
        return legal_moves_on_board(self.board, square)

    def execute_move(self, from_square: SquareLike, to_square: SquareLike) -> GameState:
        """
        Attempt to make a move
        -----

        A move that is not in the legal move set (or any move once the game is over) leaves the state untouched.

        1. update the board (capturing whatever stood on the target square)
        2. promote a pawn that reached the last rank to a queen
        3. record the move
        4. clear the selection
        5. hand the turn to the opponent
        6. update game status
        """
        from_square, to_square = as_square(from_square), as_square(to_square)
        if self.is_over:
            logger.debug(
                "Ignoring move %s-%s: game is over (%s)",
                from_square,
                to_square,
                self.status,
            )
            return self
        if to_square not in self.legal_moves(from_square):
            logger.debug("Ignoring illegal move %s-%s", from_square, to_square)
            return self

        piece = self.board.piece(from_square)
        # for the type checker: legal moves only exist for occupied squares
        assert piece is not None

        captured = self.board.move_piece(from_square, to_square)
        if self._is_pawn_push_to_promotion_square(piece, to_square):
            self.board.place_piece(piece.promoted_to(PieceType.QUEEN), to_square)

        move = Move(from_square, to_square, piece, captured)
        self.move_history.append(move)
        self.clear_selection()
        self.current_turn = self.current_turn.opposite
        self._update_game_status()

        logger.info("%s played %s, status: %s", piece.color, move.describe(), self.status)
        return self

    def resign(self) -> GameState:
        """The side to move gives up. No-op once the game is already over."""
        if self.is_over:
            return self
        self.status = Status.RESIGNED
        self.clear_selection()
        logger.info("%s resigned", self.current_turn)
        return self

    # --- SELECTION (tap handling of the board UI) ---
    def select_square(self, square: SquareLike) -> None:
        """Select the square and cache the legal moves of the piece on it."""
        square = as_square(square)
        self.selected_square = square
        self.valid_moves = self.legal_moves(square)

    def clear_selection(self) -> None:
        self.selected_square = None
        self.valid_moves = []

    def tap_square(self, square: SquareLike) -> GameState:
        """
        A tap on the board
        ----

        * Tapping a valid destination of the selected piece makes the move.
        * Tapping the selected square again deselects it.
        * Tapping one of your own pieces selects it.
        * Anything else clears the selection.

        Taps are ignored once the game is over.
        """
        square = as_square(square)
        if self.is_over:
            return self

        if self.selected_square is not None:
            if square in self.valid_moves:
                return self.execute_move(self.selected_square, square)
            if square == self.selected_square:
                self.clear_selection()
                return self

        piece = self.board.piece(square) if square.is_within_bounds() else None
        if piece is not None and piece.color == self.current_turn:
            self.select_square(square)
        else:
            self.clear_selection()
        return self

    # -- PRIVATE HELPERS ---
    def _is_pawn_push_to_promotion_square(self, piece: Piece, to_square: Square) -> bool:
        return piece.type == PieceType.PAWN and to_square.row == promotion_row(piece.color)

    def _update_game_status(self) -> None:
        """NOTE the turn has already been handed over. The status is seen from the side now to move."""
        self.status = compute_status(self.board, self.current_turn)


def status_text(state: GameState) -> str:
    """One line headline for the board, ex. "White's turn (Check!)" """
    side_to_move = state.current_turn.value.capitalize()
    opponent = state.current_turn.opposite.value.capitalize()
    if state.status == Status.CHECKMATE:
        return f"{opponent} wins!"
    if state.status == Status.STALEMATE:
        return "Stalemate - Draw"
    if state.status == Status.CHECK:
        return f"{side_to_move}'s turn (Check!)"
    if state.status == Status.RESIGNED:
        return f"{opponent} wins by resignation"
    return f"{side_to_move}'s turn"


# --- ENGINE API ---
def initial_state() -> GameState:
    return GameState.new_game()


def legal_moves(state: GameState, row: int, col: int) -> list[Square]:
    return state.legal_moves(Square(row, col))


def execute_move(state: GameState, from_square: SquareLike, to_square: SquareLike) -> GameState:
    return state.execute_move(from_square, to_square)


def to_compact_form(state: GameState) -> str:
    return state.to_compact_form()


def from_compact_form(text: str) -> Optional[GameState]:
    return GameState.from_compact_form(text)
