"""Candidate move generation per piece type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType
from rookery.core.move import (
    Castle,
    DoubleMove,
    EnPassant,
    Move,
    Promotion,
    StandardMove,
)
from rookery.core.types import Coord

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

# (rank step, file step)
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


class MoveGenerator:
    """Generates candidate moves on a given :class:`Board`.

    Candidates respect blocking, board edges and own-piece occupancy but are
    not filtered for self-check.  The board is only read, never modified.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def generate(self, piece: Piece) -> list[Move]:
        """All candidate moves for *piece* (empty once it is out of play)."""
        if piece.coord is None:
            return []

        moves: list[Move] = []
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(piece, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.BISHOP:
            self._gen_sliding(piece, BISHOP_DIRS, moves)
        elif pt == PieceType.ROOK:
            self._gen_sliding(piece, ROOK_DIRS, moves)
        elif pt == PieceType.QUEEN:
            self._gen_sliding(piece, QUEEN_DIRS, moves)
        elif pt == PieceType.KING:
            self._gen_steps(piece, KING_OFFSETS, moves)
            self._gen_castling(piece, moves)
        return moves

    def generate_for_color(self, color: Color) -> list[Move]:
        """Candidate moves of every *color* piece in play."""
        moves: list[Move] = []
        for piece in self._board.pieces(color):
            moves.extend(self.generate(piece))
        return moves

    # -- Helpers ------------------------------------------------------------

    def _is_open(self, piece: Piece, rank: int, file: int) -> bool:
        """On the board and either empty or holding an enemy piece."""
        if not self._board.on_board(rank, file):
            return False
        target = self._board.piece_at(rank, file)
        return target is None or target.color != piece.color

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        assert piece.coord is not None
        rank, file = piece.coord
        direction = piece.color.pawn_direction
        origin = piece.coord
        pawn_moves: list[Move] = []

        one_rank = rank + direction
        if board.is_empty(one_rank, file):
            pawn_moves.append(StandardMove(piece.piece_id, origin, (one_rank, file)))
            two_rank = rank + 2 * direction
            if not piece.has_moved and board.is_empty(two_rank, file):
                pawn_moves.append(DoubleMove(piece.piece_id, origin, (two_rank, file)))

        for df in (-1, 1):
            cap_file = file + df
            if not board.on_board(one_rank, cap_file):
                continue
            target = board.piece_at(one_rank, cap_file)
            if target is not None:
                if target.color != piece.color:
                    pawn_moves.append(
                        StandardMove(piece.piece_id, origin, (one_rank, cap_file))
                    )
                continue
            beside = board.piece_at(rank, cap_file)
            if (
                beside is not None
                and beside.color != piece.color
                and beside.just_double_moved
            ):
                pawn_moves.append(
                    EnPassant(
                        piece.piece_id, origin, (one_rank, cap_file), beside.piece_id
                    )
                )

        last_rank = board.height - 1
        for move in pawn_moves:
            if isinstance(move, (StandardMove, DoubleMove)) and move.destination[0] in (
                0,
                last_rank,
            ):
                move = Promotion(move.piece_id, move.origin, move.destination)
            moves.append(move)

    def _gen_steps(
        self,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        assert piece.coord is not None
        rank, file = piece.coord
        for dr, df in offsets:
            to_rank, to_file = rank + dr, file + df
            if self._is_open(piece, to_rank, to_file):
                moves.append(StandardMove(piece.piece_id, piece.coord, (to_rank, to_file)))

    def _gen_sliding(
        self,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        assert piece.coord is not None
        rank, file = piece.coord
        for dr, df in directions:
            to_rank, to_file = rank + dr, file + df
            while board.on_board(to_rank, to_file):
                target = board.piece_at(to_rank, to_file)
                if target is None:
                    moves.append(
                        StandardMove(piece.piece_id, piece.coord, (to_rank, to_file))
                    )
                    to_rank += dr
                    to_file += df
                    continue
                if target.color != piece.color:
                    moves.append(
                        StandardMove(piece.piece_id, piece.coord, (to_rank, to_file))
                    )
                break

    def _gen_castling(self, king: Piece, moves: list[Move]) -> None:
        if king.has_moved:
            return

        board = self._board
        assert king.coord is not None
        rank, file = king.coord
        for rook_file in (0, board.width - 1):
            rook = board.piece_at(rank, rook_file)
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
            ):
                continue
            df = 1 if rook_file - file > 0 else -1
            king_to: Coord = (rank, file + 2 * df)
            # The king must land strictly between its origin and the rook.
            if abs(rook_file - file) < 3:
                continue
            if any(
                not board.is_empty(rank, f) for f in range(file + df, rook_file, df)
            ):
                continue
            moves.append(
                Castle(
                    king.piece_id,
                    king.coord,
                    king_to,
                    rook.piece_id,
                    rook.coord,
                    (rank, file + df),
                )
            )
