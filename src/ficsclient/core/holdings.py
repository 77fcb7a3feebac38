"""Crazyhouse/Bughouse bookkeeping: pieces in hand and promoted squares."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ficsclient.core.enums import Category, Color, MoveFlag
from ficsclient.core.notation.fen import piece_map, turn_color
from ficsclient.core.types import SquareName

if TYPE_CHECKING:
    from ficsclient.core.move import NormalizedMove

_LOGGER = logging.getLogger(__name__)

PIECE_LETTERS = "PRBNQKprbnqk"


def _empty_counts() -> dict[str, int]:
    return dict.fromkeys(PIECE_LETTERS, 0)


@dataclass(frozen=True, slots=True)
class Holdings:
    """Per-color counts of pieces in hand, keyed by FEN letter.

    Uppercase letters are white's holdings, lowercase black's.
    """

    counts: Mapping[str, int] = field(default_factory=_empty_counts)

    def __getitem__(self, letter: str) -> int:
        return self.counts.get(letter, 0)

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self.counts.items())

    @classmethod
    def from_server(cls, white: str, black: str) -> Holdings:
        """Tally the piece letters of a ``white [...] black [...]`` line."""
        counts = _empty_counts()
        for letter in white:
            counts[letter.upper()] += 1
        for letter in black:
            counts[letter.lower()] += 1
        return cls(counts)

    def adjusted(self, letter: str, delta: int) -> Holdings:
        """Copy with *letter* changed by *delta*; counts never go negative."""
        counts = dict(self.counts)
        value = counts.get(letter, 0) + delta
        if value < 0:
            _LOGGER.debug("Holding %s would drop below zero; clamped", letter)
            value = 0
        counts[letter] = value
        return Holdings(counts)

    def held_by(self, color: Color) -> dict[str, int]:
        """Non-zero holdings of *color*, keyed by its own letters."""
        return {
            letter: count
            for letter, count in self.counts.items()
            if count and Color.of_letter(letter) == color
        }

    def total(self, color: Color) -> int:
        return sum(self.held_by(color).values())


@dataclass(frozen=True, slots=True)
class VariantData:
    """Per-position variant state carried move to move."""

    holdings: Holdings = field(default_factory=Holdings)
    promoted: frozenset[SquareName] = frozenset()


def update_variant_data(
    fen_before: str,
    move: NormalizedMove,
    previous: VariantData | None,
    category: Category,
) -> VariantData | None:
    """Carry holdings and promoted squares across *move*.

    *fen_before* is the position the move was played from.  Only crazyhouse
    credits captures locally: in bughouse the captured piece goes to the
    partner's board and arrives through a server holdings update.
    """
    if not category.has_holdings:
        return None

    previous = previous or VariantData()
    holdings = previous.holdings
    promoted = previous.promoted
    mover = turn_color(fen_before)

    if category == Category.CRAZYHOUSE:
        if move.flags & MoveFlag.EN_PASSANT:
            holdings = holdings.adjusted(_letter("p", mover), 1)
        elif move.flags & MoveFlag.CAPTURE and move.to_square is not None:
            captured = piece_map(fen_before).get(move.to_square)
            if captured is not None:
                kind = "p" if move.to_square in promoted else captured.lower()
                holdings = holdings.adjusted(_letter(kind, mover), 1)
        promoted = _update_promoted(move, promoted)

    if move.flags & MoveFlag.DROP:
        holdings = holdings.adjusted(_letter(move.piece, mover), -1)

    return VariantData(holdings, promoted)


def _letter(kind: str, color: Color) -> str:
    return kind.upper() if color == Color.WHITE else kind.lower()


def _update_promoted(
    move: NormalizedMove, promoted: frozenset[SquareName]
) -> frozenset[SquareName]:
    squares = set(promoted)
    if move.to_square is not None:
        squares.discard(move.to_square)
    if move.from_square is not None and move.from_square in squares:
        squares.discard(move.from_square)
        if move.to_square is not None:
            squares.add(move.to_square)
    if move.promotion and move.to_square is not None:
        squares.add(move.to_square)
    return frozenset(squares)
