"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.board import Board
from rookery.core.enums import Color


@dataclass
class GameSettings:
    """All user-configurable game settings."""

    first_turn: Color = Color.WHITE
    # Optional starting diagram (see Board.from_diagram); None = standard setup
    layout: str | None = None

    def build_board(self) -> Board:
        if self.layout is not None:
            return Board.from_diagram(self.layout, turn=self.first_turn)
        board = Board.initial()
        if self.first_turn != board.current_turn:
            board.advance_turn()
        return board
