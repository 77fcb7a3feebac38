"""GameSync: keeps a locally tracked game in step with the server.

Every position update from the server names the move that produced it.
The move is replayed locally so the client owns a normalized move record
(and crazyhouse bookkeeping) for it; a move that cannot be replayed means
the two sides have drifted apart and the move list must be re-fetched.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from ficsclient.core.chess960 import generate_chess960_fen
from ficsclient.core.engine import MoveInput, VariantContext, legal_destinations, resolve_move
from ficsclient.core.enums import Category, Color, Reason
from ficsclient.core.holdings import VariantData
from ficsclient.core.move import MoveRejection, MoveResult, NormalizedMove
from ficsclient.core.notation.fen import STARTING_FEN, FenFields, set_turn_color
from ficsclient.core.rules import GameOutcome, Rules
from ficsclient.core.types import SquareName
from ficsclient.errors import DesyncError
from ficsclient.protocol.events import HoldingsUpdate, MovelistReceived, PositionUpdate

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One position of the tracked game and the move that led to it."""

    fen: str
    move: NormalizedMove | None = None
    variant_data: VariantData | None = None
    white_time_ms: int | None = None
    black_time_ms: int | None = None

    @property
    def repetition_key(self) -> tuple[str, str, str, str]:
        fields = FenFields.split(self.fen)
        return fields.placement, fields.side.fen_char, fields.castling, fields.en_passant


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[HistoryEntry], None]
ResetCallback = Callable[[str], None]  # start fen


@dataclass
class SyncEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── GameSync ─────────────────────────────────────────────────────────────────


class GameSync:
    """History of one server game, replayed through the variant engine."""

    __slots__ = ("_game_id", "_context", "_history", "_seeded", "_start_known", "events")

    def __init__(
        self,
        game_id: int,
        category: Category | str,
        start_fen: str | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if not isinstance(category, Category):
            category = Category.parse(category)
        self._start_known = start_fen is not None
        if start_fen is None:
            start_fen = (
                generate_chess960_fen(rng=rng) if category.is_fischer_random else STARTING_FEN
            )
        self._game_id = game_id
        self._context = VariantContext.for_game(start_fen, category)
        self._history: list[HistoryEntry] = [self._start_entry(start_fen)]
        self._seeded = False
        self.events = SyncEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game_id(self) -> int:
        return self._game_id

    @property
    def category(self) -> Category:
        return self._context.category

    @property
    def context(self) -> VariantContext:
        return self._context

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def current(self) -> HistoryEntry:
        return self._history[-1]

    @property
    def fen(self) -> str:
        return self.current.fen

    @property
    def variant_data(self) -> VariantData | None:
        return self.current.variant_data

    # ── Server updates ───────────────────────────────────────────────────

    def apply_update(self, update: PositionUpdate) -> HistoryEntry | None:
        """Replay the move carried by *update*.

        Returns the new history entry, or ``None`` when the update only
        seeded the game or repeated the current position.  Raises
        :class:`DesyncError` when the move cannot be replayed or does not
        lead to the server's position.
        """
        if update.game_id != self._game_id:
            raise ValueError(f"Update for game {update.game_id} sent to game {self._game_id}")

        if not self._seeded:
            self._seeded = True
            if len(self._history) == 1:
                if not self._start_known:
                    self._context = VariantContext.for_game(update.fen, self.category)
                self._reset(update.fen)
                return None

        if update.fen == self.fen:
            return None
        if update.san is None:
            raise DesyncError(self._game_id, "none")

        result = resolve_move(self.fen, update.san, self._context, self.variant_data)
        if isinstance(result, MoveRejection):
            _LOGGER.warning("Game %d: cannot replay %s from %s", self._game_id, update.san, self.fen)
            raise DesyncError(self._game_id, update.san, result)

        ours, theirs = FenFields.split(result.fen), FenFields.split(update.fen)
        if (ours.placement, ours.side) != (theirs.placement, theirs.side):
            _LOGGER.warning(
                "Game %d: %s led to %s, server has %s",
                self._game_id,
                update.san,
                result.fen,
                update.fen,
            )
            raise DesyncError(self._game_id, update.san)
        if result.fen != update.fen:
            _LOGGER.debug("Game %d: keeping server FEN %s over %s", self._game_id, update.fen, result.fen)

        entry = HistoryEntry(
            update.fen,
            result.move,
            result.variant_data,
            update.white_time_ms,
            update.black_time_ms,
        )
        self._append(entry)
        return entry

    def apply_holdings(self, update: HoldingsUpdate) -> None:
        """Adopt the server's pieces-in-hand for the current position."""
        if update.game_id != self._game_id or not self.category.has_holdings:
            return
        data = self.variant_data or VariantData()
        self._history[-1] = replace(
            self.current, variant_data=replace(data, holdings=update.holdings)
        )

    def load_movelist(self, movelist: MovelistReceived) -> None:
        """Rebuild the whole history from the server's move list."""
        category = Category.parse(movelist.category)
        start_fen = movelist.start_fen or STARTING_FEN
        self._context = VariantContext.for_game(start_fen, category)
        self._reset(start_fen)
        self._seeded = True
        self._start_known = True
        for entry in movelist.moves:
            result = resolve_move(self.fen, entry.san, self._context, self.variant_data)
            if isinstance(result, MoveRejection):
                _LOGGER.warning(
                    "Game %d: move list breaks at %d. %s", self._game_id, entry.number, entry.san
                )
                raise DesyncError(self._game_id, entry.san, result)
            self._append(HistoryEntry(result.fen, result.move, result.variant_data))

    # ── Local moves ──────────────────────────────────────────────────────

    def play(self, move: MoveInput) -> MoveResult | MoveRejection:
        """Resolve a move of the side to move and record it on success."""
        result = resolve_move(self.fen, move, self._context, self.variant_data)
        if result:
            self._append(HistoryEntry(result.fen, result.move, result.variant_data))
        return result

    def premove(self, move: MoveInput, color: Color) -> MoveResult | MoveRejection:
        """Check a move queued by *color* ahead of its turn; nothing is recorded."""
        fen = set_turn_color(self.fen, color)
        return resolve_move(fen, move, self._context, self.variant_data, premove=True)

    def destinations(self) -> dict[SquareName, list[SquareName]]:
        return legal_destinations(self.fen, self._context, self.variant_data)

    # ── Game-end checks ──────────────────────────────────────────────────

    def is_threefold_repetition(self) -> bool:
        counts = Counter(entry.repetition_key for entry in self._history)
        return counts[self.current.repetition_key] >= 3

    def outcome(self) -> GameOutcome | None:
        """Game end reached by the last move, judged locally."""
        move = self.current.move
        if move is None:
            return None
        holdings = self.variant_data.holdings if self.variant_data else None
        if "#" not in move.san and self.is_threefold_repetition():
            return GameOutcome(Reason.DRAW, None, "Game drawn by repetition")
        return Rules.outcome(self.fen, move.san, holdings)

    # ── Internals ────────────────────────────────────────────────────────

    def _start_entry(self, fen: str) -> HistoryEntry:
        return HistoryEntry(fen, variant_data=VariantData() if self.category.has_holdings else None)

    def _reset(self, fen: str) -> None:
        self._history = [self._start_entry(fen)]
        for cb in self.events.on_reset:
            cb(fen)

    def _append(self, entry: HistoryEntry) -> None:
        self._history.append(entry)
        for cb in self.events.on_move:
            cb(entry)
