"""GameSession — the rules engine: move generation plus move application.

Owns the board and the only state that lives outside it: the pawn that
double-moved on the previous ply, and a promotion waiting for its choice.
"""

from __future__ import annotations

import logging

from rookery.core.board import Board, Square
from rookery.core.enums import PROMOTION_CHOICES, Color, PieceType
from rookery.core.move import Castle, DoubleMove, EnPassant, Move, Promotion
from rookery.core.move_generator import MoveGenerator
from rookery.core.piece import Piece
from rookery.core.types import Coord, PieceId
from rookery.game.errors import IllegalMoveError, PromotionStateError
from rookery.game.interfaces import AppliedMove, IPromotionChooser, PendingPromotion

_LOGGER = logging.getLogger(__name__)


class GameSession:
    """Single-threaded rules engine for one game.

    Moves are applied in two phases: :meth:`begin_move` either finishes the
    move or, for a promotion without a preselected choice, returns a
    :class:`PendingPromotion` that :meth:`resolve_promotion` completes.
    Nothing else may be applied while a promotion is pending.
    """

    __slots__ = ("_board", "_double_moved_id", "_pending")

    def __init__(self, board: Board | None = None) -> None:
        self._board = board if board is not None else Board.initial()
        self._double_moved_id: PieceId | None = None
        self._pending: PendingPromotion | None = None
        flagged = [p.piece_id for p in self._board.pieces() if p.just_double_moved]
        if len(flagged) > 1:
            raise ValueError(
                f"More than one pawn marked as just double-moved: {flagged}"
            )
        if flagged:
            self._double_moved_id = flagged[0]

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_turn(self) -> Color:
        return self._board.current_turn

    @property
    def last_double_moved(self) -> Piece | None:
        if self._double_moved_id is None:
            return None
        return self._board.piece(self._double_moved_id)

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending

    def piece_at(self, rank: int, file: int) -> Piece | None:
        return self._board.piece_at(rank, file)

    def square_at(self, rank: int, file: int) -> Square | None:
        return self._board.square_at(rank, file)

    def valid_moves(self, piece: Piece, board: Board | None = None) -> list[Move]:
        """Candidate moves for *piece* on the session board or a lookalike.

        A lookalike made with :meth:`Board.copy` shares piece ids, so the
        piece is looked up there by id.
        """
        target = board if board is not None else self._board
        return MoveGenerator(target).generate(target.piece(piece.piece_id))

    def copy(self) -> GameSession:
        """Independent session over a copied board (no pending promotion)."""
        if self._pending is not None:
            raise PromotionStateError("Cannot copy a session mid-promotion")
        return GameSession(self._board.copy())

    # ── Move application ─────────────────────────────────────────────────

    def begin_move(self, move: Move) -> AppliedMove | PendingPromotion:
        """Apply *move*; suspend and return a pending record for promotions
        that still need a choice."""
        if self._pending is not None:
            raise PromotionStateError("A promotion is waiting for its choice")
        piece = self._check_candidate(move)

        self._clear_double_moved()

        origin = piece.coord
        captured = self._board.relocate(piece, *move.destination)
        captured_from: Coord | None = move.destination if captured is not None else None
        _LOGGER.debug("%s %s moves %s", piece.color, piece.piece_type, move)

        if isinstance(move, DoubleMove):
            piece.just_double_moved = True
            self._double_moved_id = piece.piece_id
        elif isinstance(move, EnPassant):
            captured = self._board.piece(move.captured_id)
            captured_from = captured.coord
            self._board.remove(captured)
        elif isinstance(move, Castle):
            rook = self._board.piece(move.rook_id)
            self._board.relocate(rook, *move.rook_destination)
            return self._finish(
                AppliedMove(
                    move,
                    piece,
                    rook_from=move.rook_origin,
                    rook_to=move.rook_destination,
                )
            )
        elif isinstance(move, Promotion):
            if move.choice is None:
                self._pending = PendingPromotion(move, piece, captured, captured_from)
                _LOGGER.debug("Promotion on %s pending (from %s)", move, origin)
                return self._pending
            piece.promote(move.choice)
            return self._finish(
                AppliedMove(move, piece, captured, captured_from, promoted_to=move.choice)
            )

        return self._finish(AppliedMove(move, piece, captured, captured_from))

    def resolve_promotion(self, piece_type: PieceType) -> AppliedMove:
        """Complete the pending promotion with *piece_type*."""
        pending = self._pending
        if pending is None:
            raise PromotionStateError("No promotion is pending")
        # Invalid choices raise here and leave the promotion pending.
        pending.piece.promote(piece_type)
        self._pending = None
        return self._finish(
            AppliedMove(
                pending.move,
                pending.piece,
                pending.captured,
                pending.captured_from,
                promoted_to=piece_type,
            )
        )

    def apply_move(
        self, move: Move, chooser: IPromotionChooser | None = None
    ) -> AppliedMove:
        """Apply *move* in one call, asking *chooser* if it promotes."""
        outcome = self.begin_move(move)
        if isinstance(outcome, AppliedMove):
            return outcome
        if chooser is None:
            raise PromotionStateError(
                f"Move {move} promotes but no promotion chooser was given"
            )
        return self.resolve_promotion(chooser.choose_promotion(outcome.color))

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_candidate(self, move: Move) -> Piece:
        try:
            piece = self._board.piece(move.piece_id)
        except ValueError as exc:
            raise IllegalMoveError(str(exc)) from None
        if piece.coord is None:
            raise IllegalMoveError(f"Piece {move.piece_id} is out of play")
        if piece.color != self.current_turn:
            raise IllegalMoveError(f"It is not {piece.color}'s turn")
        proposed = move
        if isinstance(move, Promotion):
            if move.choice is not None and move.choice not in PROMOTION_CHOICES:
                raise IllegalMoveError(f"Invalid promotion choice: {move.choice!r}")
            proposed = move.without_choice()
        if proposed not in MoveGenerator(self._board).generate(piece):
            raise IllegalMoveError(f"Move {move} is not a current candidate")
        return piece

    def _clear_double_moved(self) -> None:
        if self._double_moved_id is not None:
            self._board.piece(self._double_moved_id).just_double_moved = False
            self._double_moved_id = None

    def _finish(self, applied: AppliedMove) -> AppliedMove:
        self._board.advance_turn()
        return applied
