"""Castling roster: which king and rooks take part in castling for a game.

Wild seatings and Fischer-Random start the king and rooks on squares other
than e1/a1/h1.  The roster is resolved once from the game's *starting*
position; the live board cannot be used because a moved rook would vanish
from the scan.
"""

from __future__ import annotations

from dataclasses import dataclass

from ficsclient.core.enums import Category, Color
from ficsclient.core.notation.fen import FenFields, normalize_castling, piece_map
from ficsclient.core.types import FILES, SquareName


@dataclass(frozen=True, slots=True)
class CastlingRoster:
    """Starting squares of the castling king and rooks for one color."""

    king: SquareName | None = None
    left_rook: SquareName | None = None
    right_rook: SquareName | None = None


@dataclass(frozen=True, slots=True)
class GameRoster:
    """Both colors' rosters for one game."""

    white: CastlingRoster
    black: CastlingRoster

    @classmethod
    def resolve(cls, start_fen: str, category: Category) -> GameRoster:
        return cls(
            resolve_roster(start_fen, Color.WHITE, category),
            resolve_roster(start_fen, Color.BLACK, category),
        )

    def __getitem__(self, color: Color) -> CastlingRoster:
        return self.white if color == Color.WHITE else self.black


def _king_file_allowed(category: Category, color: Color, file: str) -> bool:
    if category.is_fischer_random or file == "e":
        return True
    if category == Category.WILD_0:
        return (color == Color.WHITE and file == "e") or (
            color == Color.BLACK and file == "d"
        )
    if category == Category.WILD_1:
        return file in "de"
    return False


def resolve_roster(start_fen: str, color: Color, category: Category) -> CastlingRoster:
    """Scan *color*'s back rank of *start_fen* for the castling pieces.

    Classic and wild seatings use the a- and h-file rooks.  For
    Fischer-Random the rook nearest the king on each side is taken, except
    that a rook mirrored by an enemy rook on the same file of the opposite
    back rank (the signature of a genuine symmetric setup) is preferred
    over one that is not.
    """
    pieces = piece_map(start_fen)
    rank = color.back_rank
    opposite_rank = color.opposite.back_rank
    own_rook, own_king = ("R", "K") if color == Color.WHITE else ("r", "k")
    enemy_rook = own_rook.swapcase()

    king: SquareName | None = None
    left: SquareName | None = None
    right: SquareName | None = None
    left_mirrored = right_mirrored = False

    for file in FILES:
        square = f"{file}{rank}"
        piece = pieces.get(square)
        if piece == own_rook:
            if not category.is_fischer_random:
                if file == "a":
                    left = square
                elif file == "h":
                    right = square
                continue
            mirrored = pieces.get(f"{file}{opposite_rank}") == enemy_rook
            if king is None:
                if mirrored or not left_mirrored:
                    left = square
                    left_mirrored = left_mirrored or mirrored
            elif right is None or (mirrored and not right_mirrored):
                right = square
                right_mirrored = right_mirrored or mirrored
        elif piece == own_king and _king_file_allowed(category, color, file):
            king = square

    return CastlingRoster(king, left, right)


def adjust_castling_rights(fen: str, roster: GameRoster) -> str:
    """Drop castling rights whose king or rook has left its starting square."""
    fields = FenFields.split(fen)
    pieces = piece_map(fields.placement)
    rights = fields.castling

    for color in (Color.WHITE, Color.BLACK):
        cp = roster[color]
        short, long = ("K", "Q") if color == Color.WHITE else ("k", "q")
        king, rook = ("K", "R") if color == Color.WHITE else ("k", "r")
        if cp.king is not None and pieces.get(cp.king) != king:
            rights = rights.replace(short, "").replace(long, "")
        if cp.left_rook is not None and pieces.get(cp.left_rook) != rook:
            rights = rights.replace(long, "")
        if cp.right_rook is not None and pieces.get(cp.right_rook) != rook:
            rights = rights.replace(short, "")

    return fields.with_castling(normalize_castling(rights)).join()
