"""Seek and pending-offer lines (``<s>``, ``<sn>``, ``<sc>``, ``<sr>``, ``<pt>``, ``<pf>``, ``<pr>``)."""

from __future__ import annotations

import logging
import re

from ficsclient.protocol.events import (
    MatchOffer,
    OfferDirection,
    OfferRecord,
    Offers,
    OffersRemoved,
    PendingOffer,
    SeekOffer,
    SeeksCleared,
    SeeksRemoved,
)

_LOGGER = logging.getLogger(__name__)

OFFER_LINE_RE = re.compile(r"^<(pt|pf|pr|s|sc|sn|sr)>", re.M)

_PENDING_RE = re.compile(
    r"^<(pt|pf)> (\d+) w=(\S+) t=(\S+) p=((\S+)(?: \(\s*(\S+)\)(?: \[(black|white)\])?"
    r" (\S+) \(\s*(\S+)\) (rated|unrated) (\S+)(?: (\d+) (\d+))?(?: Loaded from (\S+))?"
    r"( \(adjourned\))?)?)"
)
_SEEK_RE = re.compile(
    r"^<(s|sn)> (\d+) w=(\S+) ti=([0-9a-fA-F]+) rt=(\S+)\s+t=(\d+) i=(\d+) r=(\S+)"
    r" tp=(\S+) c=(\S+) rr=(\S+) a=(\S+) f=(\S+)"
)
_REMOVED_RE = re.compile(r"^<(pr|sr)> (.+)")

_TITLE_BITS: tuple[tuple[int, str], ...] = (
    (0x1, "U"),
    (0x2, "C"),
    (0x4, "GM"),
    (0x8, "IM"),
    (0x10, "FM"),
    (0x20, "WGM"),
    (0x40, "WIM"),
    (0x80, "WFM"),
)

_NO_RATING = frozenset({"0", "0P", "----", "++++", "UNR"})


def parse_rating(token: str) -> str | None:
    """Server rating token, or ``None`` for the unrated/unknown markers."""
    token = token.strip()
    return None if token in _NO_RATING else token


def decode_titles(mask: str) -> tuple[str, ...]:
    """Titles encoded in a seek's hexadecimal ``ti=`` field."""
    value = int(mask, 16)
    return tuple(name for bit, name in _TITLE_BITS if value & bit)


def _ids(text: str) -> tuple[int, ...]:
    return tuple(int(token) for token in text.split() if token.isdigit())


def parse_offer_line(line: str) -> OfferRecord | None:
    """Decode one offer line; ``None`` if it has no known shape."""
    line = line.strip()

    m = _PENDING_RE.match(line)
    if m:
        direction = OfferDirection(m.group(1))
        if m.group(4) != "match" or m.group(9) is None:
            return PendingOffer(
                direction=direction,
                id=int(m.group(2)),
                to_from=m.group(3),
                subtype=m.group(4),
                parameters=m.group(5),
            )
        # <pt> lists me first; <pf> lists the challenger first
        first, first_rating = m.group(6), parse_rating(m.group(7))
        second, second_rating = m.group(9), parse_rating(m.group(10))
        sent = direction == OfferDirection.SENT
        return MatchOffer(
            direction=direction,
            id=int(m.group(2)),
            to_from=m.group(3),
            description=m.group(5),
            player=first if sent else second,
            player_rating=first_rating if sent else second_rating,
            opponent=second if sent else first,
            opponent_rating=second_rating if sent else first_rating,
            color=m.group(8),
            rated=m.group(11) == "rated",
            category=m.group(15) or m.group(12),
            initial_time=int(m.group(13) or 0),
            increment=int(m.group(14) or 0),
            adjourned=bool(m.group(16)),
        )

    if line == "<sc>":
        return SeeksCleared()

    m = _SEEK_RE.match(line)
    if m:
        return SeekOffer(
            id=int(m.group(2)),
            name=m.group(3),
            titles=decode_titles(m.group(4)),
            rating=parse_rating(m.group(5)),
            initial_time=int(m.group(6)),
            increment=int(m.group(7)),
            rated=m.group(8) == "r",
            category=m.group(9),
            color=m.group(10),
            rating_range=m.group(11),
            automatic=m.group(12) == "t",
            formula=m.group(13) == "t",
            new=m.group(1) == "sn",
        )

    m = _REMOVED_RE.match(line)
    if m:
        ids = _ids(m.group(2))
        return OffersRemoved(ids) if m.group(1) == "pr" else SeeksRemoved(ids)

    return None


def parse_offer_block(text: str) -> Offers | None:
    """Decode every offer line in *text*; ``None`` if none were recognised."""
    records = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        record = parse_offer_line(line)
        if record is None:
            _LOGGER.debug("Skipping unrecognised offer line: %r", line)
            continue
        records.append(record)
    return Offers(tuple(records)) if records else None
