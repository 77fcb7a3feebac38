"""Square-name helpers.

Squares travel through this package as algebraic names (``"e4"``), the
same form the server and the UI use.  Conversion to python-chess square
indices happens only at the rules-library boundary.
"""

from __future__ import annotations

from typing import TypeAlias

import chess

SquareName: TypeAlias = str  # "a1" … "h8"

FILES = "abcdefgh"
RANKS = "12345678"


def file_index(square: SquareName) -> int:
    """File index 0–7 (a–h)."""
    return ord(square[0]) - ord("a")


def rank_number(square: SquareName) -> int:
    """Rank number 1–8."""
    return int(square[1])


def make_square(file: int, rank: int) -> SquareName:
    """Create a square name from file index (0–7) and rank number (1–8)."""
    return f"{FILES[file]}{rank}"


def is_square_name(name: str) -> bool:
    return len(name) == 2 and name[0] in FILES and name[1] in RANKS


def to_index(square: SquareName) -> chess.Square:
    """python-chess square index for *square*."""
    return chess.parse_square(square)


def from_index(square: chess.Square) -> SquareName:
    return chess.square_name(square)


def rank_squares(rank: str) -> list[SquareName]:
    """All squares on *rank*, a-file first."""
    return [f"{file}{rank}" for file in FILES]


def squares_between(first: SquareName, second: SquareName) -> list[SquareName]:
    """Squares on the rank of *first* from one file to the other, inclusive."""
    low, high = sorted((file_index(first), file_index(second)))
    return [make_square(f, rank_number(first)) for f in range(low, high + 1)]


def adjacent_squares(square: SquareName) -> list[SquareName]:
    """Squares touching *square*, including diagonals."""
    file, rank = file_index(square), rank_number(square)
    adjacent: list[SquareName] = []
    for df, dr in (
        (0, -1),
        (0, 1),
        (-1, 0),
        (-1, -1),
        (-1, 1),
        (1, 0),
        (1, -1),
        (1, 1),
    ):
        f, r = file + df, rank + dr
        if 0 <= f < 8 and 1 <= r <= 8:
            adjacent.append(make_square(f, r))
    return adjacent
