"""Move value objects, one variant per move kind."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from rookery.core.enums import MoveKind, PieceType
from rookery.core.types import Coord, PieceId, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Common shape of every move: who moves, from where, to where."""

    kind: ClassVar[MoveKind]

    piece_id: PieceId
    origin: Coord
    destination: Coord

    @property
    def partner(self) -> PieceId | None:
        """Second piece of a two-piece move (captured pawn or castling rook)."""
        return None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(*self.origin)}{square_name(*self.destination)}"


@dataclass(frozen=True, slots=True)
class StandardMove(Move):
    """Plain move or capture."""

    kind: ClassVar[MoveKind] = MoveKind.STANDARD


@dataclass(frozen=True, slots=True)
class DoubleMove(Move):
    """Pawn two-square advance from its starting square."""

    kind: ClassVar[MoveKind] = MoveKind.DOUBLE_MOVE


@dataclass(frozen=True, slots=True)
class EnPassant(Move):
    """Pawn capture of a just-double-moved pawn beside it."""

    kind: ClassVar[MoveKind] = MoveKind.EN_PASSANT

    captured_id: PieceId

    @property
    def partner(self) -> PieceId:
        return self.captured_id


@dataclass(frozen=True, slots=True)
class Castle(Move):
    """King moves two files toward a rook, which hops over it."""

    kind: ClassVar[MoveKind] = MoveKind.CASTLE

    rook_id: PieceId
    rook_origin: Coord
    rook_destination: Coord

    @property
    def partner(self) -> PieceId:
        return self.rook_id


@dataclass(frozen=True, slots=True)
class Promotion(Move):
    """Pawn reaching the first or last rank.

    ``choice`` is ``None`` as generated; callers may fill it in up front to
    skip the promotion prompt.
    """

    kind: ClassVar[MoveKind] = MoveKind.PROMOTION

    choice: PieceType | None = None

    def with_choice(self, choice: PieceType) -> Promotion:
        return replace(self, choice=choice)

    def without_choice(self) -> Promotion:
        return replace(self, choice=None)

    def __str__(self) -> str:
        base = f"{square_name(*self.origin)}{square_name(*self.destination)}"
        if self.choice is not None:
            base += _PROMO_CHARS.get(self.choice, "")
        return base
