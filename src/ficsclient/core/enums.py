"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, StrEnum, auto

import chess

from ficsclient.errors import UnsupportedCategoryError


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move letter used in FEN: ``w`` or ``b``."""
        return "w" if self == Color.WHITE else "b"

    @property
    def back_rank(self) -> str:
        """Rank digit of this side's back rank."""
        return "1" if self == Color.WHITE else "8"

    def as_chess(self) -> chess.Color:
        """The python-chess boolean color."""
        return self == Color.WHITE

    @classmethod
    def from_fen_char(cls, char: str) -> Color:
        if char == "w":
            return cls.WHITE
        if char == "b":
            return cls.BLACK
        raise ValueError(f"Invalid side-to-move letter: {char!r}")

    @classmethod
    def from_chess(cls, color: chess.Color) -> Color:
        return cls.WHITE if color else cls.BLACK

    @classmethod
    def of_letter(cls, letter: str) -> Color:
        """Color of a FEN piece letter (uppercase = white)."""
        return cls.WHITE if letter.isupper() else cls.BLACK

    def __str__(self) -> str:
        return self.name.lower()


class Category(StrEnum):
    """Game variant selector as named by the server."""

    STANDARD = "standard"
    BLITZ = "blitz"
    LIGHTNING = "lightning"
    UNTIMED = "untimed"
    NONSTANDARD = "nonstandard"
    CRAZYHOUSE = "crazyhouse"
    BUGHOUSE = "bughouse"
    LOSERS = "losers"
    FISCHER_RANDOM = "wild/fr"
    WILD_0 = "wild/0"
    WILD_1 = "wild/1"
    WILD_2 = "wild/2"
    WILD_3 = "wild/3"
    WILD_4 = "wild/4"
    WILD_5 = "wild/5"
    WILD_8 = "wild/8"
    WILD_8A = "wild/8a"

    @classmethod
    def parse(cls, name: str) -> Category:
        """Look up a category by its server name."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnsupportedCategoryError(name) from None

    @property
    def is_standard(self) -> bool:
        """Plain chess: fully delegated to the standard rules library."""
        return self in _STANDARD_CATEGORIES

    @property
    def is_wild(self) -> bool:
        return self.value.startswith("wild")

    @property
    def is_fischer_random(self) -> bool:
        return self == Category.FISCHER_RANDOM

    @property
    def has_holdings(self) -> bool:
        """Captured pieces can be dropped back onto the board."""
        return self in (Category.CRAZYHOUSE, Category.BUGHOUSE)


_STANDARD_CATEGORIES = frozenset(
    {
        Category.STANDARD,
        Category.BLITZ,
        Category.LIGHTNING,
        Category.UNTIMED,
        Category.NONSTANDARD,
    }
)


class MoveFlag(IntFlag):
    """Move classification; several flags may combine (e.g. capture + promotion)."""

    NORMAL = 0
    BIG_PAWN = auto()
    CAPTURE = auto()
    EN_PASSANT = auto()
    PROMOTION = auto()
    KINGSIDE_CASTLE = auto()
    QUEENSIDE_CASTLE = auto()
    DROP = auto()

    CASTLE = KINGSIDE_CASTLE | QUEENSIDE_CASTLE


class RejectionKind(StrEnum):
    """Why a candidate move was not applied."""

    ILLEGAL = "illegal"
    INCONSISTENT = "inconsistent"


class Reason(StrEnum):
    """Why a game ended."""

    UNKNOWN = "unknown"
    RESIGN = "resign"
    DISCONNECT = "disconnect"
    CHECKMATE = "checkmate"
    TIME_FORFEIT = "time_forfeit"
    DRAW = "draw"
    ADJOURN = "adjourn"
    ABORT = "abort"
    PARTNER_WON = "partner_won"
