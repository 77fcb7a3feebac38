"""Map the server's game-end phrases to a winner, a loser and a Reason."""

from __future__ import annotations

import re

from ficsclient.core.enums import Reason

_LOSER_ACTIONS: dict[str, Reason] = {
    "resigns": Reason.RESIGN,
    "forfeits by disconnection": Reason.DISCONNECT,
    "checkmated": Reason.CHECKMATE,
    "forfeits on time": Reason.TIME_FORFEIT,
}

_ABORT_PHRASES = frozenset(
    {
        "aborted on move 1",
        "aborted by mutual agreement",
        "aborted",
        "lost connection and too few moves; game aborted",
    }
)

_DRAW_PHRASES = frozenset(
    {
        "drawn by mutual agreement",
        "drawn because both players ran out of time",
        "drawn by repetition",
        "drawn by the 50 move rule",
        "drawn due to length",
        "was drawn",
        "player has mating material",
        "drawn by adjudication",
        "drawn by stalemate",
        "drawn",
    }
)

_ADJOURN_PHRASES = frozenset(
    {
        "adjourned",
        "adjourned by mutual agreement",
        "lost connection; game adjourned",
    }
)

_NO_MATERIAL_RE = re.compile(r"ran out of time and ([a-zA-Z]+) has no material to mate")


def game_result(p1: str, p2: str, who: str, action: str) -> tuple[str, str, Reason]:
    """Return ``(winner, loser, reason)`` for a game between *p1* (white) and *p2*.

    *who* is the player the phrase is about (``White``/``Black`` are
    accepted); for draws, aborts and unknown phrases the order is simply
    ``(p1, p2)``.
    """
    if who == "White":
        who = p1
    elif who == "Black":
        who = p2
    action = action.strip()

    if who in (p1, p2):
        other = p2 if who == p1 else p1
        if action in _LOSER_ACTIONS:
            return other, who, _LOSER_ACTIONS[action]
        if action == "partner won":
            return who, other, Reason.PARTNER_WON

    if action in _ABORT_PHRASES:
        return p1, p2, Reason.ABORT
    if action in _DRAW_PHRASES:
        return p1, p2, Reason.DRAW
    if action in _ADJOURN_PHRASES or action in (
        f"courtesyadjourned by {p1}",
        f"courtesyadjourned by {p2}",
    ):
        return p1, p2, Reason.ADJOURN
    if _NO_MATERIAL_RE.search(action):
        return p1, p2, Reason.DRAW
    return p1, p2, Reason.UNKNOWN
