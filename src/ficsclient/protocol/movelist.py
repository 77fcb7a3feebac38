"""Move-list blocks sent in reply to the ``moves`` command."""

from __future__ import annotations

import re

from ficsclient.core.enums import Color
from ficsclient.protocol.events import MovelistMove, MovelistReceived, MoveTime
from ficsclient.protocol.offers import parse_rating
from ficsclient.protocol.position import parse_position_update

MOVELIST_RE = re.compile(
    r"(?:^|\n)\s*Movelist for game (\d+):\s+(\S+) \((\d+|UNR)\) vs\. (\S+) \((\d+|UNR)\)"
    r"[^\n]+\s+(\w+) (\S+) match, initial time: (\d+) minutes, increment: (\d+) seconds\."
)

_TIME = r"\((\d+):(\d+)\.(\d+)\)"


def _move_line_re(number: int) -> re.Pattern[str]:
    return re.compile(
        rf"^\s*{number}\.\s*(\S*)\s*{_TIME}\s*(?:(\S*)\s*{_TIME})?", re.M
    )


def _elapsed(minutes: str, seconds: str, millis: str) -> MoveTime:
    return MoveTime(int(minutes), int(seconds), int(millis))


def parse_moves(text: str) -> list[MovelistMove]:
    """Numbered move rows of a move list, in playing order.

    A row whose white move is ``...`` starts a game with black to move.
    """
    moves: list[MovelistMove] = []
    number = 1
    while True:
        m = _move_line_re(number).search(text)
        if m is None:
            break
        white = m.group(1).strip()
        if white != "...":
            moves.append(MovelistMove(number, Color.WHITE, white, _elapsed(*m.group(2, 3, 4))))
        if m.group(5):
            moves.append(
                MovelistMove(number, Color.BLACK, m.group(5).strip(), _elapsed(*m.group(6, 7, 8)))
            )
        number += 1
    return moves


def build_movelist(m: re.Match[str], text: str) -> MovelistReceived:
    start = parse_position_update(text, movelist=True)
    return MovelistReceived(
        game_id=int(m.group(1)),
        white_name=m.group(2),
        black_name=m.group(4),
        white_rating=parse_rating(m.group(3)),
        black_rating=parse_rating(m.group(5)),
        rated=m.group(6).lower() == "rated",
        category=m.group(7),
        initial_time=int(m.group(8)),
        increment=int(m.group(9)),
        start_fen=start.fen if start is not None else None,
        moves=tuple(parse_moves(text)),
    )


def parse_movelist(text: str) -> MovelistReceived | None:
    m = MOVELIST_RE.search(text)
    return build_movelist(m, text) if m else None
