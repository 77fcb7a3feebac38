"""Ordered pattern matchers for post-login server messages.

Each matcher pairs a compiled pattern with a builder.  The parser tries
them in :data:`MATCHERS` order and the first one that produces an event
wins; a message no matcher claims becomes :class:`Unclassified`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from ficsclient.core.holdings import Holdings
from ficsclient.protocol.events import (
    ChannelMessage,
    GameEnded,
    GameStarted,
    HoldingsUpdate,
    Offers,
    PrivateMessage,
    SeeksRemoved,
    ServerEvent,
    StoredMessage,
    StoredMessages,
    Unclassified,
)
from ficsclient.protocol.movelist import MOVELIST_RE, build_movelist
from ficsclient.protocol.offers import OFFER_LINE_RE, parse_offer_block
from ficsclient.protocol.position import POSITION_RE, build_position_update
from ficsclient.protocol.results import game_result


@dataclass(frozen=True, slots=True)
class Matcher:
    """One recognisable message shape.

    ``split_lines``: a multi-line message that matches is parsed line by
    line instead, since one chunk may carry several such records.
    ``split_prefix``: plain text before the match is parsed separately.
    """

    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str], str], ServerEvent | None]
    split_lines: bool = False
    split_prefix: bool = False


# ── Builders ─────────────────────────────────────────────────────────────────


def _help_text(m: re.Match[str], msg: str) -> ServerEvent:
    return Unclassified(msg)


def _position(m: re.Match[str], msg: str) -> ServerEvent:
    return build_position_update(m)


def _holdings(m: re.Match[str], msg: str) -> ServerEvent:
    return HoldingsUpdate(
        game_id=int(m.group(1)),
        holdings=Holdings.from_server(m.group(2), m.group(3)),
        new_holding=m.group(4),
    )


_CREATING_RE = re.compile(r"(rated|unrated) (\S+) match")


def _game_started(m: re.Match[str], msg: str) -> ServerEvent:
    details = _CREATING_RE.search(m.group(5))
    return GameStarted(
        game_id=int(m.group(1)),
        white_name=m.group(2),
        black_name=m.group(3),
        rated=details.group(1) == "rated" if details else None,
        category=details.group(2) if details else None,
        resumed=m.group(4) == "Continuing",
    )


def _game_ended(m: re.Match[str], msg: str) -> ServerEvent:
    p1, p2 = m.group(2), m.group(3)
    winner, loser, reason = game_result(p1, p2, m.group(4), m.group(5))
    return GameEnded(
        game_id=int(m.group(1)),
        winner=winner,
        loser=loser,
        reason=reason,
        score=m.group(6),
        message=msg,
    )


def _channel_tell(m: re.Match[str], msg: str) -> ServerEvent:
    return ChannelMessage(channel=m.group(2), user=m.group(1), message=m.group(3))


def _private_tell(m: re.Match[str], msg: str) -> ServerEvent:
    return PrivateMessage(user=m.group(1), message=m.group(2))


def _kibitz(m: re.Match[str], msg: str) -> ServerEvent:
    return ChannelMessage(
        channel=f"Game {m.group(2)}",
        user=m.group(1),
        message=m.group(4).replace("\n", ""),
        kind="kibitz" if m.group(3) == "kibitzes" else "whisper",
        suffix=m.group(5),
    )


_STORED_LINE_RE = re.compile(
    r"(?:(\d+)\. )?(\w+) at (\w+ \w+\s+\d+, \d{2}:\d{2} [\w?]+ \d+): (.+)"
)

_STORED_KINDS = {
    "Messages:": "all",
    "Unread messages:": "unread",
    "The following message was received": "online",
    "The following message was emailed:": "online",
}


def _stored_messages(m: re.Match[str], msg: str) -> ServerEvent:
    header = m.group(1)
    entries = []
    for line in m.group(0).split("\n")[1:]:
        lm = _STORED_LINE_RE.search(line)
        if lm:
            entries.append(
                StoredMessage(
                    id=int(lm.group(1)) if lm.group(1) else None,
                    user=lm.group(2),
                    sent_at=re.sub(r"\s+", " ", lm.group(3)),
                    message=lm.group(4),
                )
            )
    kind = "sender" if header.startswith("Messages from") else _STORED_KINDS[header]
    return StoredMessages(kind=kind, messages=tuple(entries), raw=msg)


def _offers(m: re.Match[str], msg: str) -> ServerEvent | None:
    return parse_offer_block(msg[m.start() :])


def _seeks_removed(m: re.Match[str], msg: str) -> ServerEvent:
    ids = (int(m.group(1)),) if m.group(1) else ()
    return Offers((SeeksRemoved(ids),))


# ── Table ────────────────────────────────────────────────────────────────────


MATCHERS: tuple[Matcher, ...] = (
    Matcher("help", re.compile(r"^\[?Last Modified", re.M), _help_text),
    Matcher("movelist", MOVELIST_RE, build_movelist),
    Matcher("position", POSITION_RE, _position, split_lines=True),
    Matcher(
        "holdings",
        re.compile(r"^<b1> game (\d+) white \[(\w*)\] black \[(\w*)\](?: <- (\w+))?", re.M),
        _holdings,
    ),
    Matcher(
        "game_started",
        re.compile(
            r"(?:^|\n)\s*\{Game\s([0-9]+)\s\(([a-zA-Z]+)\svs\.\s([a-zA-Z]+)\)"
            r"\s(Creating|Continuing)([^}]*)\}.*",
            re.S,
        ),
        _game_started,
    ),
    Matcher(
        "game_ended",
        re.compile(
            r"(?:^|\n)[^():]*(?:Game\s[0-9]+:.*)?\{Game\s([0-9]+)\s\(([a-zA-Z]+)\svs\.\s"
            r"([a-zA-Z]+)\)\s([a-zA-Z]+)(?:' game|'s)?\s([^}]+)\}\s(\*|[012/]+-[012/]+).*",
            re.S,
        ),
        _game_ended,
        split_lines=True,
    ),
    Matcher(
        "channel_tell",
        re.compile(r"(?:^|\n)([a-zA-Z]+)(?:\([A-Z*]+\))*\(([0-9]+)\):\s+(.*)"),
        _channel_tell,
    ),
    Matcher(
        "private_tell",
        re.compile(
            r"(?:^|\n)([a-zA-Z]+)(?:[(\[][A-Z0-9*\-]+[)\]])* (?:tells you|says):\s+(.*)"
        ),
        _private_tell,
    ),
    Matcher(
        "kibitz",
        re.compile(
            r"(?:^|\n)([a-zA-Z]+)(?:\([A-Z0-9*\-]+\))*\[([0-9]+)\] (kibitzes|whispers):"
            r"\s+(.*)(?:\n(.+))?"
        ),
        _kibitz,
    ),
    Matcher(
        "stored_messages",
        re.compile(
            r"^(Messages:|Messages from \w+:|Unread messages:"
            r"|The following message was received|The following message was emailed:)[\s\S]+",
            re.M,
        ),
        _stored_messages,
    ),
    Matcher("offers", OFFER_LINE_RE, _offers, split_prefix=True),
    Matcher(
        "seeks_removed",
        re.compile(r"^Your seeks? (?:(\d+) )?(?:have|has) been removed\.", re.M),
        _seeks_removed,
    ),
)
