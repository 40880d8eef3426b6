"""Game management layer — rules-engine session, controller, settings.

Quick start::

    from rookery.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    pawn = ctrl.session.piece_at(1, 4)
    ctrl.submit_move(ctrl.moves_for(pawn)[0])
"""

from rookery.game.controller import GameController, GameEvents
from rookery.game.errors import IllegalMoveError, PromotionStateError
from rookery.game.interfaces import (
    AppliedMove,
    GamePhase,
    IPromotionChooser,
    PendingPromotion,
)
from rookery.game.session import GameSession
from rookery.game.settings import GameSettings

__all__ = [
    # Interfaces / records
    "AppliedMove",
    "GamePhase",
    "IPromotionChooser",
    "PendingPromotion",
    # Errors
    "IllegalMoveError",
    "PromotionStateError",
    # Concrete
    "GameController",
    "GameEvents",
    "GameSession",
    "GameSettings",
]
