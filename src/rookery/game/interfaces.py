"""Abstract interfaces and shared records for the game layer.

The session and controller depend on these, not on concrete prompt or view
implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType

if TYPE_CHECKING:
    from rookery.core.move import Move
    from rookery.core.piece import Piece
    from rookery.core.types import Coord


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()


# ── Move outcomes ────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class AppliedMove:
    """A fully applied move, with everything a view needs to resync."""

    move: Move
    piece: Piece
    captured: Piece | None = None
    captured_from: Coord | None = None
    rook_from: Coord | None = None
    rook_to: Coord | None = None
    promoted_to: PieceType | None = None


@dataclass(slots=True, frozen=True)
class PendingPromotion:
    """A promotion whose pawn has moved but whose new type is not chosen yet."""

    move: Move
    piece: Piece
    captured: Piece | None = None
    captured_from: Coord | None = None

    @property
    def color(self) -> Color:
        return self.piece.color


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPromotionChooser(ABC):
    """Asks a player which piece a pawn becomes."""

    @abstractmethod
    def choose_promotion(self, color: Color) -> PieceType:
        """Return one of knight, bishop, rook or queen.

        Implementations must always resolve to a valid choice; there is no
        timeout or default.
        """
