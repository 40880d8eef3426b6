"""Piece record."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import PROMOTION_CHOICES, Color, PieceType
from rookery.core.types import Coord, PieceId

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


def parse_piece_char(char: str) -> tuple[Color, PieceType]:
    """Decode a FEN character, e.g. 'N' → (white, knight)."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


def piece_symbol(color: Color, piece_type: PieceType) -> str:
    """Unicode chess symbol for a colour and type, e.g. ♞."""
    return _UNICODE[(color, piece_type)]


@dataclass(slots=True, eq=False)
class Piece:
    """A piece in play (or removed from play once ``coord`` is ``None``).

    Identity is the ``piece_id`` handle handed out by the owning board; the
    piece keeps its own coordinate while the board keeps the occupancy map.
    """

    piece_id: PieceId
    color: Color
    piece_type: PieceType
    has_moved: bool = False
    just_double_moved: bool = False
    coord: Coord | None = None

    # ── State ────────────────────────────────────────────────────────────

    @property
    def is_captured(self) -> bool:
        return self.coord is None

    def promote(self, piece_type: PieceType) -> None:
        """Change this pawn's type in place; colour and history are kept."""
        if piece_type not in PROMOTION_CHOICES:
            raise ValueError(f"Invalid promotion choice: {piece_type!r}")
        self.piece_type = piece_type

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return piece_symbol(self.color, self.piece_type)

    @property
    def image_name(self) -> str:
        """Asset file name used by views, e.g. ``w_knight.png``."""
        return f"{str(self.color)[0]}_{self.piece_type}.png"
