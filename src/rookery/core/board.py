"""Board - a rectangular grid of squares plus the piece arena."""

from __future__ import annotations

from rookery.core.enums import Color, PieceType
from rookery.core.piece import Piece, parse_piece_char
from rookery.core.types import Coord, PieceId

STANDARD_DIMENSION = 8

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Square:
    """One board cell. Holds the id of its occupant, if any."""

    __slots__ = ("_rank", "_file", "occupant")

    def __init__(self, rank: int, file: int, occupant: PieceId | None = None) -> None:
        self._rank = rank
        self._file = file
        self.occupant = occupant

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def file(self) -> int:
        return self._file

    @property
    def coord(self) -> Coord:
        return (self._rank, self._file)

    def is_empty(self) -> bool:
        return self.occupant is None

    def __repr__(self) -> str:
        return f"Square({self._rank}, {self._file}, occupant={self.occupant})"


class Board:
    """Mutable ``width`` x ``height`` board that owns squares and pieces.

    Squares are created once and never replaced.  Pieces live in an arena
    keyed by id; captured pieces stay in the arena with ``coord=None``.
    """

    __slots__ = ("_width", "_height", "_squares", "_pieces", "_next_id", "_turn")

    def __init__(
        self,
        width: int = STANDARD_DIMENSION,
        height: int = STANDARD_DIMENSION,
        turn: Color = Color.WHITE,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Invalid board size: {width}x{height}")
        self._width = width
        self._height = height
        self._squares: list[list[Square]] = [
            [Square(rank, file) for file in range(width)] for rank in range(height)
        ]
        self._pieces: dict[PieceId, Piece] = {}
        self._next_id: PieceId = 0
        self._turn = turn

    # -- Geometry -----------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def on_board(self, rank: int, file: int) -> bool:
        return 0 <= rank < self._height and 0 <= file < self._width

    # -- Element access -----------------------------------------------------

    def square_at(self, rank: int, file: int) -> Square | None:
        """The square at (rank, file), ``None`` when off the board."""
        if not self.on_board(rank, file):
            return None
        return self._squares[rank][file]

    def piece_at(self, rank: int, file: int) -> Piece | None:
        """The occupant at (rank, file), ``None`` when empty or off the board."""
        if not self.on_board(rank, file):
            return None
        occupant = self._squares[rank][file].occupant
        return None if occupant is None else self._pieces[occupant]

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self.piece_at(*coord)

    def is_empty(self, rank: int, file: int) -> bool:
        return self.on_board(rank, file) and self._squares[rank][file].is_empty()

    def piece(self, piece_id: PieceId) -> Piece:
        try:
            return self._pieces[piece_id]
        except KeyError:
            raise ValueError(f"Unknown piece id: {piece_id!r}") from None

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces still in play, optionally restricted to *color*."""
        return [
            p
            for p in self._pieces.values()
            if p.coord is not None and (color is None or p.color == color)
        ]

    # -- Turn ---------------------------------------------------------------

    @property
    def current_turn(self) -> Color:
        return self._turn

    def advance_turn(self) -> None:
        self._turn = self._turn.opposite

    # -- Mutation -----------------------------------------------------------

    def place(self, color: Color, piece_type: PieceType, rank: int, file: int) -> Piece:
        """Create a new piece on an empty square."""
        square = self.square_at(rank, file)
        if square is None:
            raise ValueError(f"Square ({rank}, {file}) is off the board")
        if not square.is_empty():
            raise ValueError(f"Square ({rank}, {file}) is occupied")
        piece = Piece(self._next_id, color, piece_type, coord=(rank, file))
        self._pieces[piece.piece_id] = piece
        self._next_id += 1
        square.occupant = piece.piece_id
        return piece

    def relocate(self, piece: Piece, rank: int, file: int) -> Piece | None:
        """Move *piece* to (rank, file) and mark it moved.

        Returns the piece previously on the destination, which is removed
        from play.
        """
        target = self.square_at(rank, file)
        if target is None:
            raise ValueError(f"Square ({rank}, {file}) is off the board")
        displaced = self.piece_at(rank, file)
        if displaced is not None:
            displaced.coord = None
        self._vacate(piece)
        target.occupant = piece.piece_id
        piece.coord = (rank, file)
        piece.has_moved = True
        return displaced

    def remove(self, piece: Piece) -> None:
        """Take *piece* out of play."""
        self._vacate(piece)
        piece.coord = None

    def _vacate(self, piece: Piece) -> None:
        if piece.coord is None:
            return
        square = self._squares[piece.coord[0]][piece.coord[1]]
        if square.occupant == piece.piece_id:
            square.occupant = None

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        """Independent lookalike; piece ids are preserved."""
        b = Board(self._width, self._height, self._turn)
        for rank, row in enumerate(self._squares):
            for file, square in enumerate(row):
                b._squares[rank][file].occupant = square.occupant
        b._pieces = {
            pid: Piece(
                p.piece_id,
                p.color,
                p.piece_type,
                has_moved=p.has_moved,
                just_double_moved=p.just_double_moved,
                coord=p.coord,
            )
            for pid, p in self._pieces.items()
        }
        b._next_id = self._next_id
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, white to move."""
        b = cls()
        top = b.height - 1
        for f, pt in enumerate(_BACK_RANK):
            b.place(Color.WHITE, pt, 0, f)
        for f in range(b.width):
            b.place(Color.WHITE, PieceType.PAWN, 1, f)
        for f in range(b.width):
            b.place(Color.BLACK, PieceType.PAWN, top - 1, f)
        for f, pt in enumerate(_BACK_RANK):
            b.place(Color.BLACK, pt, top, f)
        return b

    @classmethod
    def from_diagram(cls, diagram: str, turn: Color = Color.WHITE) -> Board:
        """Build a board from rows of piece letters and dots.

        The first non-blank row is the highest rank and whitespace inside a
        row is ignored::

            Board.from_diagram('''
                ....k...
                ........
                ....K...
            ''')

        Every piece starts unmoved except pawns away from their starting
        rank, which are marked as moved.
        """
        rows = [
            "".join(line.split())
            for line in diagram.strip().splitlines()
            if line.strip()
        ]
        if not rows:
            raise ValueError(f"Empty board diagram: {diagram!r}")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError(f"Ragged board diagram: {diagram!r}")

        b = cls(width, len(rows), turn)
        for row_idx, row in enumerate(rows):
            rank = len(rows) - 1 - row_idx
            for file, ch in enumerate(row):
                if ch == ".":
                    continue
                color, pt = parse_piece_char(ch)
                piece = b.place(color, pt, rank, file)
                if pt == PieceType.PAWN:
                    home = 1 if color == Color.WHITE else b.height - 2
                    piece.has_moved = rank != home
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._turn == other._turn
            and self._layout() == other._layout()
        )

    def _layout(self) -> list[str]:
        return [
            "".join(str(self.piece_at(rank, file) or ".") for file in range(self._width))
            for rank in range(self._height)
        ]

    def __repr__(self) -> str:
        layout = self._layout()
        rows: list[str] = []
        for rank in range(self._height - 1, -1, -1):
            rows.append(f"{rank + 1} {' '.join(layout[rank])}")
        files = "abcdefghijklmnopqrstuvwxyz"[: self._width]
        rows.append(f"  {' '.join(files)}")
        return "\n".join(rows)
