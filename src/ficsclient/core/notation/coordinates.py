"""Coordinate move strings as sent to the server: ``e2-e4``, ``e7-e8=q``, ``P@e4``, ``O-O``."""

from __future__ import annotations

import re

from ficsclient.core.move import CandidateMove, NormalizedMove

_COORDINATE_RE = re.compile(r"^([a-h][1-8])[-x]?([a-h][1-8])(?:=?([qrbnkQRBNK]))?$")
_DROP_RE = re.compile(r"^([prbnqkPRBNQK])@([a-h][1-8])$")


def parse_coordinate_move(text: str) -> CandidateMove | None:
    """Decode a coordinate or drop string; ``None`` when *text* is neither.

    Castling strings and SAN are not coordinates and also yield ``None``.
    """
    text = text.strip().rstrip("+#")
    m = _DROP_RE.match(text)
    if m:
        return CandidateMove(to_square=m.group(2), piece=m.group(1).lower())
    m = _COORDINATE_RE.match(text)
    if m:
        promotion = m.group(3).lower() if m.group(3) else None
        return CandidateMove(
            to_square=m.group(2), from_square=m.group(1), promotion=promotion
        )
    return None


def move_to_coordinate_string(move: NormalizedMove | CandidateMove) -> str:
    """Coordinate form of *move* (castling keeps its ``O-O`` spelling)."""
    san = getattr(move, "san", "")
    if san.startswith("O-O"):
        return san.rstrip("+#")
    if move.from_square is None:
        return f"{(move.piece or 'p').upper()}@{move.to_square}"
    suffix = f"={move.promotion}" if move.promotion else ""
    return f"{move.from_square}-{move.to_square}{suffix}"
