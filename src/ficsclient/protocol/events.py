"""Typed records produced by the message parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TypeAlias

from ficsclient.core.enums import Color, Reason
from ficsclient.core.holdings import Holdings

__all__ = [
    "Reason",
    "Relation",
    "OfferDirection",
    "LoginPrompt",
    "LoginResult",
    "VerboseMove",
    "MoveTime",
    "PositionUpdate",
    "GameStarted",
    "GameEnded",
    "HoldingsUpdate",
    "ChannelMessage",
    "PrivateMessage",
    "StoredMessage",
    "StoredMessages",
    "SeekOffer",
    "MatchOffer",
    "PendingOffer",
    "SeeksRemoved",
    "SeeksCleared",
    "OffersRemoved",
    "OfferRecord",
    "Offers",
    "MovelistMove",
    "MovelistReceived",
    "Unclassified",
    "ServerEvent",
]


class Relation(IntEnum):
    """My relation to the game a position update describes."""

    MOVELIST_START = -4
    ISOLATED = -3
    OBSERVING_EXAMINED = -2
    OPPONENT_TO_MOVE = -1
    OBSERVING = 0
    MY_MOVE = 1
    EXAMINING = 2

    @property
    def is_playing(self) -> bool:
        return self in (Relation.MY_MOVE, Relation.OPPONENT_TO_MOVE)


class OfferDirection(StrEnum):
    SENT = "pt"
    RECEIVED = "pf"


# ── Login ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LoginPrompt:
    """The parser answered a login-phase prompt on the caller's behalf."""

    prompt: str
    registered: bool


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Either the name the session started under, or why login failed."""

    display_name: str | None = None
    error_text: str | None = None

    @property
    def ok(self) -> bool:
        return self.display_name is not None


# ── Games ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class VerboseMove:
    """Previous move in the server's ``P/e2-e4`` form."""

    piece: str
    to_square: str
    from_square: str | None = None
    promotion: str | None = None
    san: str | None = None

    @property
    def is_drop(self) -> bool:
        return self.from_square is None


@dataclass(frozen=True, slots=True)
class MoveTime:
    minutes: int
    seconds: int
    milliseconds: int

    @property
    def total_ms(self) -> int:
        return (self.minutes * 60 + self.seconds) * 1000 + self.milliseconds


@dataclass(frozen=True, slots=True)
class PositionUpdate:
    """A decoded position-update record."""

    fen: str
    side: Color
    game_id: int
    white_name: str
    black_name: str
    relation: Relation
    initial_time: int
    increment: int
    white_strength: int
    black_strength: int
    white_time_ms: int
    black_time_ms: int
    move_number: int
    verbose_move: VerboseMove | None
    move_time: MoveTime
    san: str | None
    flip: bool

    @property
    def has_move(self) -> bool:
        return self.san is not None


@dataclass(frozen=True, slots=True)
class GameStarted:
    game_id: int
    white_name: str
    black_name: str
    rated: bool | None = None
    category: str | None = None
    resumed: bool = False


@dataclass(frozen=True, slots=True)
class GameEnded:
    game_id: int
    winner: str
    loser: str
    reason: Reason
    score: str
    message: str

    @property
    def is_draw(self) -> bool:
        return self.score == "1/2-1/2"


@dataclass(frozen=True, slots=True)
class HoldingsUpdate:
    """Pieces in hand for a crazyhouse/bughouse game."""

    game_id: int
    holdings: Holdings
    new_holding: str | None = None


# ── Chat ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ChannelMessage:
    """A channel tell, or a kibitz/whisper (channel ``Game <id>``)."""

    channel: str
    user: str
    message: str
    kind: str = "channel"
    suffix: str | None = None


@dataclass(frozen=True, slots=True)
class PrivateMessage:
    user: str
    message: str


@dataclass(frozen=True, slots=True)
class StoredMessage:
    id: int | None
    user: str
    sent_at: str
    message: str


@dataclass(frozen=True, slots=True)
class StoredMessages:
    """Output of the ``messages`` command or a message notification."""

    kind: str  # all | unread | sender | online
    messages: tuple[StoredMessage, ...]
    raw: str


# ── Offers ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SeekOffer:
    id: int
    name: str
    titles: tuple[str, ...]
    rating: str | None
    initial_time: int
    increment: int
    rated: bool
    category: str
    color: str
    rating_range: str
    automatic: bool
    formula: bool
    new: bool = False


@dataclass(frozen=True, slots=True)
class MatchOffer:
    direction: OfferDirection
    id: int
    to_from: str
    description: str
    player: str
    player_rating: str | None
    opponent: str
    opponent_rating: str | None
    color: str | None
    rated: bool
    category: str
    initial_time: int
    increment: int
    adjourned: bool = False


@dataclass(frozen=True, slots=True)
class PendingOffer:
    """Any pending offer other than a match (draw, abort, partnership, ...)."""

    direction: OfferDirection
    id: int
    to_from: str
    subtype: str
    parameters: str


@dataclass(frozen=True, slots=True)
class SeeksRemoved:
    ids: tuple[int, ...] = ()  # empty: all of my seeks


@dataclass(frozen=True, slots=True)
class SeeksCleared:
    pass


@dataclass(frozen=True, slots=True)
class OffersRemoved:
    ids: tuple[int, ...]


OfferRecord: TypeAlias = (
    SeekOffer | MatchOffer | PendingOffer | SeeksRemoved | SeeksCleared | OffersRemoved
)


@dataclass(frozen=True, slots=True)
class Offers:
    offers: tuple[OfferRecord, ...]


# ── Move lists ───────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MovelistMove:
    number: int
    color: Color
    san: str
    elapsed: MoveTime


@dataclass(frozen=True, slots=True)
class MovelistReceived:
    game_id: int
    white_name: str
    black_name: str
    white_rating: str | None
    black_rating: str | None
    rated: bool
    category: str
    initial_time: int
    increment: int
    start_fen: str | None = None
    moves: tuple[MovelistMove, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class Unclassified:
    """Text no matcher recognised, passed through for display."""

    raw_text: str


ServerEvent: TypeAlias = (
    LoginPrompt
    | LoginResult
    | PositionUpdate
    | GameStarted
    | GameEnded
    | HoldingsUpdate
    | ChannelMessage
    | PrivateMessage
    | StoredMessages
    | Offers
    | MovelistReceived
    | Unclassified
)
