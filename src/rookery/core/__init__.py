"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import Board, MoveGenerator

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.generate(board.piece_at(1, 4)):
        print(move)
"""

from rookery.core.board import Board, Square
from rookery.core.enums import PROMOTION_CHOICES, Color, MoveKind, PieceType
from rookery.core.move import (
    Castle,
    DoubleMove,
    EnPassant,
    Move,
    Promotion,
    StandardMove,
)
from rookery.core.move_generator import MoveGenerator
from rookery.core.piece import Piece, parse_piece_char, piece_symbol
from rookery.core.types import Coord, PieceId, parse_square, square_name

__all__ = [
    # Enums
    "PROMOTION_CHOICES",
    "Color",
    "MoveKind",
    "PieceType",
    # Types / helpers
    "Coord",
    "PieceId",
    "parse_piece_char",
    "piece_symbol",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Piece",
    "Square",
    "MoveGenerator",
    # Moves
    "Castle",
    "DoubleMove",
    "EnPassant",
    "Move",
    "Promotion",
    "StandardMove",
]
