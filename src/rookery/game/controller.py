"""GameController — the orchestrator a presentation layer talks to.

Coordinates: GameSession, the promotion chooser, phase transitions.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.game.errors import IllegalMoveError
from rookery.game.interfaces import (
    AppliedMove,
    GamePhase,
    IPromotionChooser,
    PendingPromotion,
)
from rookery.game.session import GameSession
from rookery.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[AppliedMove], None]
PromotionCallback = Callable[[PendingPromotion], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_requested: list[PromotionCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates submitted moves, drives the session and notifies listeners.

    With a *chooser* configured, promotions are resolved immediately through
    it.  Without one the controller parks in ``AWAITING_PROMOTION`` until
    :meth:`choose_promotion` is called; the same happens when the chooser
    answers with a type a pawn cannot become.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).
    """

    __slots__ = ("_session", "_phase", "_chooser", "events")

    def __init__(self, chooser: IPromotionChooser | None = None) -> None:
        self._session = GameSession()
        self._phase = GamePhase.NOT_STARTED
        self._chooser = chooser
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def current_turn(self) -> Color:
        return self._session.current_turn

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        settings: GameSettings | None = None,
        board: Board | None = None,
    ) -> None:
        """Start over from *board*, or from the board *settings* describe."""
        if board is None:
            board = (settings or GameSettings()).build_board()
        self._session = GameSession(board)
        self._set_phase(GamePhase.AWAITING_MOVE)

    # ── Interaction ──────────────────────────────────────────────────────

    def interactive_pieces(self) -> list[Piece]:
        """Pieces the player to move may pick up."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        return self._session.board.pieces(self._session.current_turn)

    def moves_for(self, piece: Piece) -> list[Move]:
        """Candidate moves for *piece*, empty unless it may move now."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        if piece.is_captured or piece.color != self._session.current_turn:
            return []
        return self._session.valid_moves(piece)

    def submit_move(self, move: Move) -> bool:
        """Apply *move*. Returns True if it was a candidate and was applied."""
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.warning("Move %s submitted during %s", move, self._phase.name)
            return False

        try:
            outcome = self._session.begin_move(move)
        except IllegalMoveError as exc:
            _LOGGER.warning("Rejected move %s: %s", move, exc)
            return False

        if isinstance(outcome, AppliedMove):
            self._emit_move(outcome)
            return True

        if self._chooser is not None:
            choice = self._chooser.choose_promotion(outcome.color)
            try:
                applied = self._session.resolve_promotion(choice)
            except ValueError as exc:
                # Pawn already moved: wait for choose_promotion instead.
                _LOGGER.warning("Chooser gave an invalid promotion: %s", exc)
            else:
                self._emit_move(applied)
                return True

        self._set_phase(GamePhase.AWAITING_PROMOTION)
        for cb in self.events.on_promotion_requested:
            cb(outcome)
        return True

    def choose_promotion(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion. Returns False if none is pending or
        the choice is not a valid promotion type."""
        if self._phase != GamePhase.AWAITING_PROMOTION:
            return False
        try:
            applied = self._session.resolve_promotion(piece_type)
        except ValueError as exc:
            _LOGGER.warning("Rejected promotion choice: %s", exc)
            return False
        self._set_phase(GamePhase.AWAITING_MOVE)
        self._emit_move(applied)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, applied: AppliedMove) -> None:
        _LOGGER.debug("Applied %s, %s to move", applied.move, self.current_turn)
        for cb in self.events.on_move:
            cb(applied)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
