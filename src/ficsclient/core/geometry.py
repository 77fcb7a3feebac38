"""Empty-board reachability, used as a cheap pre-filter before full legality."""

from __future__ import annotations

from ficsclient.core.enums import Color
from ficsclient.core.types import SquareName, file_index, rank_number


def is_reachable(
    source: SquareName,
    dest: SquareName,
    piece: str,
    color: Color,
    *,
    include_castling: bool = True,
) -> bool:
    """Whether *piece* could travel from *source* to *dest* on an empty board.

    *piece* is a piece letter of either case.  With *include_castling* a king
    may reach any square of its own back rank from that rank, which covers
    every castling seating (Fischer-Random included).
    """
    s_col, s_row = file_index(source), rank_number(source)
    d_col, d_row = file_index(dest), rank_number(dest)
    d_file = abs(s_col - d_col)
    d_rank = abs(s_row - d_row)
    kind = piece.lower()

    if kind == "r":
        return s_row == d_row or s_col == d_col
    if kind == "q":
        return s_row == d_row or s_col == d_col or d_rank == d_file
    if kind == "b":
        return d_rank == d_file
    if kind == "n":
        return (d_rank, d_file) in ((2, 1), (1, 2))
    if kind == "p":
        forward = d_row - s_row if color == Color.WHITE else s_row - d_row
        if forward == 1 and d_file <= 1:
            return True
        start, double = (2, 4) if color == Color.WHITE else (7, 5)
        return d_file == 0 and s_row == start and d_row == double
    if kind == "k":
        if d_file <= 1 and d_rank <= 1:
            return True
        back = int(color.back_rank)
        return include_castling and s_row == back and d_row == back
    return False
