"""Qt bridge that re-emits game controller events as signals."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.enums import PieceType
from rookery.core.move import Move
from rookery.game.controller import GameController
from rookery.game.interfaces import AppliedMove, GamePhase, PendingPromotion

_LOGGER = logging.getLogger(__name__)


class GameBridge(QObject):
    """Main-thread adapter between a :class:`GameController` and Qt views."""

    move_applied = pyqtSignal(object)  # AppliedMove
    promotion_requested = pyqtSignal(object)  # PendingPromotion
    turn_changed = pyqtSignal(int)  # Color
    phase_changed = pyqtSignal(int)  # GamePhase
    move_rejected = pyqtSignal(object)  # Move
    promotion_rejected = pyqtSignal(int)  # PieceType value

    def __init__(self, controller: GameController | None = None) -> None:
        super().__init__()
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_promotion_requested.append(self._on_promotion_requested)
        events.on_phase_changed.append(self._on_phase_changed)

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot(object)
    def submit_move(self, move_obj: object) -> None:
        """Submit *move_obj*; emits ``move_rejected`` when it is refused."""
        if not isinstance(move_obj, Move) or not self._controller.submit_move(
            move_obj
        ):
            _LOGGER.debug("Bridge rejected %r", move_obj)
            self.move_rejected.emit(move_obj)

    @pyqtSlot(int)
    def choose_promotion(self, piece_type: int) -> None:
        """Finish a pending promotion; emits ``promotion_rejected`` when refused."""
        try:
            choice = PieceType(piece_type)
        except ValueError:
            _LOGGER.warning("Unknown promotion piece type: %r", piece_type)
            self.promotion_rejected.emit(piece_type)
            return
        if not self._controller.choose_promotion(choice):
            self.promotion_rejected.emit(piece_type)

    def _on_move(self, applied: AppliedMove) -> None:
        self.move_applied.emit(applied)
        self.turn_changed.emit(int(self._controller.current_turn))

    def _on_promotion_requested(self, pending: PendingPromotion) -> None:
        self.promotion_requested.emit(pending)

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))
