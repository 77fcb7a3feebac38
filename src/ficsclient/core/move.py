"""Move value objects: candidate input, normalized output and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ficsclient.core.enums import Color, MoveFlag, RejectionKind
from ficsclient.core.types import SquareName

if TYPE_CHECKING:
    from ficsclient.core.holdings import VariantData


@dataclass(frozen=True, slots=True)
class CandidateMove:
    """A move as entered by a user or decoded from coordinates.

    ``from_square`` is ``None`` for drops.  ``piece`` and ``promotion`` are
    lowercase piece letters.
    """

    to_square: SquareName
    from_square: SquareName | None = None
    piece: str | None = None
    promotion: str | None = None

    @property
    def is_drop(self) -> bool:
        return self.from_square is None

    @property
    def uci(self) -> str:
        if self.from_square is None:
            return f"{(self.piece or 'p').upper()}@{self.to_square}"
        return f"{self.from_square}{self.to_square}{self.promotion or ''}"


@dataclass(frozen=True, slots=True)
class NormalizedMove:
    """A resolved move, in the shape the history and UI layers consume."""

    color: Color
    piece: str
    san: str
    from_square: SquareName | None = None
    to_square: SquareName | None = None
    promotion: str | None = None
    captured: str | None = None
    flags: MoveFlag = MoveFlag.NORMAL

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_drop(self) -> bool:
        return bool(self.flags & MoveFlag.DROP)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE)

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & (MoveFlag.CAPTURE | MoveFlag.EN_PASSANT))

    @property
    def is_check(self) -> bool:
        return self.san.endswith(("+", "#"))

    @property
    def is_checkmate(self) -> bool:
        return self.san.endswith("#")


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Accepted move: the resulting position and the normalized move."""

    fen: str
    move: NormalizedMove
    variant_data: VariantData | None = field(default=None)


@dataclass(frozen=True, slots=True)
class MoveRejection:
    """A move that was not applied.

    ``INCONSISTENT`` means the local position has drifted from the server's
    and should be resynchronised rather than reported to the user.
    """

    kind: RejectionKind
    reason: str

    def __bool__(self) -> bool:
        return False

    @property
    def is_inconsistent(self) -> bool:
        return self.kind == RejectionKind.INCONSISTENT

    @classmethod
    def illegal(cls, reason: str) -> MoveRejection:
        return cls(RejectionKind.ILLEGAL, reason)

    @classmethod
    def inconsistent(cls, reason: str) -> MoveRejection:
        return cls(RejectionKind.INCONSISTENT, reason)
