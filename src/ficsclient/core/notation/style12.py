"""Position codec: the server's fixed-width rank strings <-> FEN.

A position-update record describes each rank as exactly eight characters,
``-`` for an empty square, listed from rank 8 down to rank 1.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ficsclient.core.enums import Color
from ficsclient.core.notation.fen import FenFields, normalize_castling
from ficsclient.core.types import FILES

_RANK_RE = re.compile(r"^[rnbqkpRNBQKP-]{8}$")


def rank_to_fen(rank: str) -> str:
    """``--pp-K--`` -> ``2pp1K2``."""
    if not _RANK_RE.match(rank):
        raise ValueError(f"Invalid rank string: {rank!r}")
    return re.sub(r"-+", lambda m: str(len(m.group())), rank)


def fen_to_rank(fen_rank: str) -> str:
    """``2pp1K2`` -> ``--pp-K--``."""
    rank = re.sub(r"[1-8]", lambda m: "-" * int(m.group()), fen_rank)
    if not _RANK_RE.match(rank):
        raise ValueError(f"Invalid FEN rank: {fen_rank!r}")
    return rank


def ranks_to_placement(ranks: Sequence[str]) -> str:
    """Eight rank strings (rank 8 first) -> FEN placement field."""
    if len(ranks) != 8:
        raise ValueError(f"Expected 8 ranks, got {len(ranks)}")
    return "/".join(rank_to_fen(rank) for rank in ranks)


def placement_to_ranks(placement: str) -> list[str]:
    """FEN placement field -> eight rank strings (rank 8 first)."""
    fen_ranks = placement.split()[0].split("/")
    if len(fen_ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")
    return [fen_to_rank(r) for r in fen_ranks]


def style12_to_fen(
    ranks: Sequence[str],
    side: str,
    ep_file: int,
    castling: tuple[bool, bool, bool, bool],
    halfmove_clock: int,
    move_number: int,
) -> str:
    """Build a FEN string from decoded position-update fields.

    *side* is ``W`` or ``B``; *ep_file* is the file (0–7) of a pawn that just
    made a double push, or -1; *castling* holds the white-short, white-long,
    black-short, black-long flags.
    """
    color = Color.WHITE if side.upper() == "W" else Color.BLACK
    rights = "".join(letter for letter, flag in zip("KQkq", castling) if flag)
    if ep_file < 0:
        en_passant = "-"
    else:
        en_passant = f"{FILES[ep_file]}{'6' if color == Color.WHITE else '3'}"
    return FenFields(
        ranks_to_placement(ranks),
        color,
        normalize_castling(rights),
        en_passant,
        halfmove_clock,
        move_number,
    ).join()


def fen_to_style12(fen: str) -> tuple[list[str], str, int, tuple[bool, bool, bool, bool]]:
    """Inverse of :func:`style12_to_fen` for the board-describing fields.

    Returns (ranks, side letter, en-passant file or -1, castling flags).
    """
    fields = FenFields.split(fen)
    ep_file = FILES.index(fields.en_passant[0]) if fields.en_passant != "-" else -1
    flags = tuple(letter in fields.castling for letter in "KQkq")
    side = "W" if fields.side == Color.WHITE else "B"
    return placement_to_ranks(fields.placement), side, ep_file, flags  # type: ignore[return-value]
