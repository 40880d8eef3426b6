"""Tests for per-piece candidate move generation."""

import pytest

from rookery.core.board import Board
from rookery.core.enums import Color, MoveKind, PieceType
from rookery.core.move import Castle, DoubleMove, EnPassant, Move, Promotion, StandardMove
from rookery.core.move_generator import MoveGenerator
from rookery.core.types import parse_square, square_name


def _moves(board: Board, name: str) -> list[Move]:
    piece = board[parse_square(name)]
    assert piece is not None, f"no piece on {name}"
    return MoveGenerator(board).generate(piece)


def _dests(moves: list[Move]) -> set[str]:
    return {square_name(*m.destination) for m in moves}


def _by_dest(moves: list[Move], name: str) -> Move:
    found = [m for m in moves if m.destination == parse_square(name)]
    assert len(found) == 1, f"expected one move to {name}, got {found}"
    return found[0]


EMPTY_WITH_KINGS = """
    ....k...
    ........
    ........
    ........
    ........
    ........
    ........
    ....K...
"""


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnForward:
    def test_start_rank_single_and_double(self) -> None:
        moves = _moves(Board.initial(), "e2")
        assert _dests(moves) == {"e3", "e4"}
        assert isinstance(_by_dest(moves, "e3"), StandardMove)
        assert isinstance(_by_dest(moves, "e4"), DoubleMove)
        assert [m.kind for m in moves].count(MoveKind.DOUBLE_MOVE) == 1

    def test_black_moves_down_the_board(self) -> None:
        moves = _moves(Board.initial(), "d7")
        assert _dests(moves) == {"d6", "d5"}
        assert isinstance(_by_dest(moves, "d5"), DoubleMove)

    def test_moved_pawn_has_no_double_move(self) -> None:
        board = Board.initial()
        pawn = board[parse_square("e2")]
        board.relocate(pawn, *parse_square("e3"))
        moves = _moves(board, "e3")
        assert _dests(moves) == {"e4"}
        assert not any(isinstance(m, DoubleMove) for m in moves)

    def test_blocked_pawn_cannot_jump(self) -> None:
        board = Board.initial()
        board.place(Color.BLACK, PieceType.KNIGHT, *parse_square("e3"))
        assert _moves(board, "e2") == []

    def test_blocked_second_square_allows_single_step(self) -> None:
        board = Board.initial()
        board.place(Color.BLACK, PieceType.KNIGHT, *parse_square("e4"))
        assert _dests(_moves(board, "e2")) == {"e3"}


class TestPawnCaptures:
    def test_diagonal_enemies_are_captured(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ...n.r..
            ....P...
            ........
            ........
            ....K...
            """
        )
        moves = _moves(board, "e4")
        assert _dests(moves) == {"e5", "d5", "f5"}
        assert all(isinstance(m, StandardMove) for m in moves)

    def test_own_piece_on_diagonal_is_not_captured(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ...N....
            ....P...
            ........
            ........
            ....K...
            """
        )
        assert _dests(_moves(board, "e4")) == {"e5"}

    def test_edge_pawn_looks_one_way(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            .r......
            P.......
            ........
            ........
            ....K...
            """
        )
        assert _dests(_moves(board, "a4")) == {"a5", "b5"}


class TestEnPassant:
    DIAGRAM = """
        ....k...
        ........
        ........
        ...pP...
        ........
        ........
        ........
        ....K...
    """

    def test_adjacent_double_moved_pawn_can_be_taken(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        victim = board[parse_square("d5")]
        victim.just_double_moved = True
        moves = _moves(board, "e5")
        assert _dests(moves) == {"e6", "d6"}
        ep = _by_dest(moves, "d6")
        assert isinstance(ep, EnPassant)
        assert ep.partner == victim.piece_id

    def test_not_without_double_move_flag(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        assert _dests(_moves(board, "e5")) == {"e6"}

    def test_not_against_own_flagged_pawn(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ...PP...
            ........
            ........
            ........
            ....K...
            """
        )
        board[parse_square("d5")].just_double_moved = True
        assert _dests(_moves(board, "e5")) == {"e6"}

    def test_black_captures_en_passant_toward_rank_one(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ....pP..
            ........
            ........
            ....K...
            """,
            turn=Color.BLACK,
        )
        board[parse_square("f4")].just_double_moved = True
        ep = _by_dest(_moves(board, "e4"), "f3")
        assert isinstance(ep, EnPassant)


class TestPromotion:
    def test_forward_and_capture_are_promotions(self) -> None:
        board = Board.from_diagram(
            """
            .r.....k
            P.......
            ........
            ........
            ........
            ........
            ........
            ....K...
            """
        )
        moves = _moves(board, "a7")
        assert _dests(moves) == {"a8", "b8"}
        assert all(isinstance(m, Promotion) for m in moves)
        assert all(m.choice is None for m in moves)

    def test_black_promotes_on_first_rank(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ........
            ........
            .......p
            K.......
            """,
            turn=Color.BLACK,
        )
        moves = _moves(board, "h2")
        assert _dests(moves) == {"h1"}
        assert isinstance(moves[0], Promotion)

    def test_promotion_overrides_double_move(self) -> None:
        board = Board.from_diagram(
            """
            .
            .
            P
            .
            """
        )
        moves = _moves(board, "a2")
        assert isinstance(_by_dest(moves, "a3"), StandardMove)
        assert isinstance(_by_dest(moves, "a4"), Promotion)


# ── Knights ──────────────────────────────────────────────────────────────────


class TestKnight:
    def test_starting_knight(self) -> None:
        assert _dests(_moves(Board.initial(), "b1")) == {"a3", "c3"}

    def test_center_knight_has_eight_moves(self) -> None:
        board = Board.from_diagram(EMPTY_WITH_KINGS)
        board.place(Color.WHITE, PieceType.KNIGHT, *parse_square("d4"))
        assert _dests(_moves(board, "d4")) == {
            "b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5",
        }

    def test_corner_knight(self) -> None:
        board = Board.from_diagram(EMPTY_WITH_KINGS)
        board.place(Color.BLACK, PieceType.KNIGHT, *parse_square("h8"))
        assert _dests(_moves(board, "h8")) == {"f7", "g6"}

    def test_knight_captures_enemy_not_friend(self) -> None:
        board = Board.from_diagram(EMPTY_WITH_KINGS)
        board.place(Color.WHITE, PieceType.KNIGHT, *parse_square("d4"))
        board.place(Color.WHITE, PieceType.PAWN, *parse_square("c6"))
        board.place(Color.BLACK, PieceType.PAWN, *parse_square("e6"))
        dests = _dests(_moves(board, "d4"))
        assert "c6" not in dests
        assert "e6" in dests


# ── Sliding pieces ───────────────────────────────────────────────────────────


class TestSliding:
    def test_bishop_rays_stop_at_blockers(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            .p...P..
            ........
            ...B....
            ........
            ........
            ....K...
            """
        )
        assert _dests(_moves(board, "d4")) == {
            "e5",
            "c5", "b6",
            "e3", "f2", "g1",
            "c3", "b2", "a1",
        }

    def test_rook_rays_stop_at_blockers(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ...P....
            ........
            ...R..n.
            ........
            ........
            .....K..
            """
        )
        assert _dests(_moves(board, "d4")) == {
            "d5",
            "d3", "d2", "d1",
            "e4", "f4", "g4",
            "c4", "b4", "a4",
        }

    def test_queen_is_union_of_rook_and_bishop(self) -> None:
        board = Board.from_diagram(EMPTY_WITH_KINGS)
        queen = board.place(Color.WHITE, PieceType.QUEEN, *parse_square("d4"))
        queen_dests = _dests(_moves(board, "d4"))
        assert len(queen_dests) == 27

        queen.piece_type = PieceType.ROOK
        rook_dests = _dests(_moves(board, "d4"))
        queen.piece_type = PieceType.BISHOP
        bishop_dests = _dests(_moves(board, "d4"))
        assert queen_dests == rook_dests | bishop_dests

    def test_starting_sliders_are_boxed_in(self) -> None:
        board = Board.initial()
        for name in ("a1", "c1", "d1", "f8", "h8"):
            assert _moves(board, name) == []

    def test_capture_ends_the_ray(self) -> None:
        board = Board.from_diagram(
            """
            r...k...
            p.......
            ........
            ........
            ........
            ........
            ........
            R...K...
            """
        )
        dests = _dests(_moves(board, "a1"))
        assert "a7" in dests
        assert "a8" not in dests


# ── King & castling ──────────────────────────────────────────────────────────

CASTLING = """
    r...k..r
    pppppppp
    ........
    ........
    ........
    ........
    PPPPPPPP
    R...K..R
"""


class TestKing:
    def test_adjacent_squares(self) -> None:
        board = Board.from_diagram(EMPTY_WITH_KINGS)
        board.relocate(board[parse_square("e1")], *parse_square("e4"))
        assert _dests(_moves(board, "e4")) == {
            "d3", "d4", "d5", "e3", "e5", "f3", "f4", "f5",
        }

    def test_starting_king_cannot_move(self) -> None:
        assert _moves(Board.initial(), "e1") == []

    def test_castles_both_ways(self) -> None:
        board = Board.from_diagram(CASTLING)
        moves = _moves(board, "e1")
        king_side = _by_dest(moves, "g1")
        queen_side = _by_dest(moves, "c1")
        assert isinstance(king_side, Castle)
        assert isinstance(queen_side, Castle)
        assert king_side.partner == board[parse_square("h1")].piece_id
        assert king_side.rook_destination == parse_square("f1")
        assert queen_side.partner == board[parse_square("a1")].piece_id
        assert queen_side.rook_destination == parse_square("d1")

    def test_black_castles_on_its_own_rank(self) -> None:
        board = Board.from_diagram(CASTLING, turn=Color.BLACK)
        castles = [m for m in _moves(board, "e8") if isinstance(m, Castle)]
        assert {square_name(*m.destination) for m in castles} == {"c8", "g8"}

    def test_no_castle_after_king_moved(self) -> None:
        board = Board.from_diagram(CASTLING)
        board[parse_square("e1")].has_moved = True
        assert not any(isinstance(m, Castle) for m in _moves(board, "e1"))

    def test_no_castle_toward_moved_rook(self) -> None:
        board = Board.from_diagram(CASTLING)
        board[parse_square("h1")].has_moved = True
        castles = [m for m in _moves(board, "e1") if isinstance(m, Castle)]
        assert _dests(castles) == {"c1"}

    def test_no_castle_through_pieces(self) -> None:
        board = Board.from_diagram(CASTLING)
        board.place(Color.WHITE, PieceType.KNIGHT, *parse_square("b1"))
        castles = [m for m in _moves(board, "e1") if isinstance(m, Castle)]
        assert _dests(castles) == {"g1"}

    def test_no_castle_with_enemy_rook(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ........
            ........
            ........
            r...K..R
            """
        )
        castles = [m for m in _moves(board, "e1") if isinstance(m, Castle)]
        assert _dests(castles) == {"g1"}

    def test_castling_ignores_attacked_squares(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            .....r..
            ........
            ........
            ........
            ........
            ........
            ....K..R
            """
        )
        assert "g1" in _dests(_moves(board, "e1"))


# ── Whole-board properties ───────────────────────────────────────────────────


class TestGeneratorProperties:
    @pytest.mark.parametrize(
        "board",
        [
            Board.initial(),
            Board.from_diagram(CASTLING),
            Board.from_diagram(
                """
                r.bqk..r
                pp..bppp
                ..np.n..
                ..p.p...
                ..B.P...
                ..NP.N..
                PPP..PPP
                R.BQK..R
                """
            ),
        ],
    )
    def test_never_lands_on_own_piece(self, board: Board) -> None:
        gen = MoveGenerator(board)
        for piece in board.pieces():
            for move in gen.generate(piece):
                target = board[move.destination]
                assert target is None or target.color != piece.color, str(move)

    def test_starting_side_has_twenty_moves(self) -> None:
        board = Board.initial()
        assert len(MoveGenerator(board).generate_for_color(Color.WHITE)) == 20
        assert len(MoveGenerator(board).generate_for_color(Color.BLACK)) == 20

    def test_captured_piece_has_no_moves(self) -> None:
        board = Board.initial()
        knight = board[parse_square("g1")]
        board.remove(knight)
        assert MoveGenerator(board).generate(knight) == []

    def test_generation_does_not_mutate_board(self) -> None:
        board = Board.from_diagram(CASTLING)
        before = board.copy()
        MoveGenerator(board).generate_for_color(Color.WHITE)
        assert board == before
