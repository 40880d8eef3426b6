"""Coordinate type alias and helpers.

Coordinates are ``(rank, file)`` pairs, both 0-based:
    a1 = (0, 0), h1 = (0, 7), a8 = (7, 0), e4 = (3, 4)
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]  # (rank, file)
PieceId: TypeAlias = int

_FILE_LETTERS = "abcdefghijklmnopqrstuvwxyz"


def square_name(rank: int, file: int) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (3, 4) → 'e4'."""
    if not (0 <= file < len(_FILE_LETTERS)) or rank < 0:
        raise ValueError(f"No name for square ({rank}, {file})")
    return _FILE_LETTERS[file] + str(rank + 1)


def parse_square(name: str) -> Coord:
    """Parse square name, e.g. 'e4' → (3, 4)."""
    if len(name) < 2 or name[0] not in _FILE_LETTERS or not name[1:].isdigit():
        raise ValueError(f"Invalid square name: {name!r}")
    rank = int(name[1:]) - 1
    if rank < 0:
        raise ValueError(f"Invalid square name: {name!r}")
    return (rank, _FILE_LETTERS.index(name[0]))
