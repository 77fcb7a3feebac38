"""FEN field splitting/joining and small FEN utilities."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ficsclient.core.enums import Color
from ficsclient.core.types import FILES, SquareName

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_ORDER = "KQkq"


@dataclass(frozen=True, slots=True)
class FenFields:
    """The six space-separated fields of a FEN string.

    <placement> <side> <castling> <en passant> <half-move clock> <move number>
    """

    placement: str
    side: Color
    castling: str
    en_passant: str
    halfmove_clock: int
    fullmove_number: int

    @classmethod
    def split(cls, fen: str) -> FenFields:
        parts = fen.split()
        if len(parts) != 6:
            raise ValueError(f"Invalid FEN (need 6 fields): {fen!r}")
        placement, side, castling, ep, halfmove, fullmove = parts
        if len(placement.split("/")) != 8:
            raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
        return cls(
            placement,
            Color.from_fen_char(side),
            castling,
            ep,
            int(halfmove),
            int(fullmove),
        )

    def join(self) -> str:
        return (
            f"{self.placement} {self.side.fen_char} {self.castling or '-'} "
            f"{self.en_passant} {self.halfmove_clock} {self.fullmove_number}"
        )

    def with_castling(self, rights: str) -> FenFields:
        return replace(self, castling=normalize_castling(rights))

    def rights_of(self, color: Color) -> str:
        """Castling letters held by *color* (possibly empty)."""
        letters = "KQ" if color == Color.WHITE else "kq"
        return "".join(ch for ch in self.castling if ch in letters)


def normalize_castling(rights: str) -> str:
    """Canonical ``KQkq`` ordering; ``-`` when no right remains."""
    letters = "".join(ch for ch in _CASTLING_ORDER if ch in rights)
    return letters or "-"


def turn_color(fen: str) -> Color:
    return Color.from_fen_char(fen.split()[1])


def set_turn_color(fen: str, color: Color) -> str:
    """Return *fen* with the side to move replaced by *color*."""
    fields = FenFields.split(fen)
    return replace(fields, side=color).join()


def ply_of(fen: str) -> int:
    """Ply number of the move about to be played (1 = white's first move)."""
    fields = FenFields.split(fen)
    return fields.fullmove_number * 2 - (1 if fields.side == Color.WHITE else 0)


def piece_map(placement: str) -> dict[SquareName, str]:
    """Map occupied squares to FEN piece letters for a placement field."""
    pieces: dict[SquareName, str] = {}
    for rank_idx, rank_text in enumerate(placement.split()[0].split("/")):
        rank = 8 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                file += int(ch)
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {placement!r}")
                pieces[f"{FILES[file]}{rank}"] = ch
                file += 1
    return pieces
