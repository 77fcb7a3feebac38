"""Position-update (``<12>``) record parsing."""

from __future__ import annotations

import re

from ficsclient.core.enums import Color
from ficsclient.core.notation.style12 import style12_to_fen
from ficsclient.protocol.events import MoveTime, PositionUpdate, Relation, VerboseMove

_RANK = r"([rnbqkpRNBQKP\-]{8})"


def _record_pattern(relation: str) -> re.Pattern[str]:
    return re.compile(
        r"(?:^|\n)<12>\s"
        + r"\s".join([_RANK] * 8)
        + r"\s([BW\-])\s(\-?[0-7])\s([01])\s([01])\s([01])\s([01])\s([0-9]+)"
        r"\s([0-9]+)\s(\S+)\s(\S+)\s(" + relation + r")\s([0-9]+)\s([0-9]+)"
        r"\s([0-9]+)\s([0-9]+)\s(\-?[0-9]+)\s(\-?[0-9]+)\s([0-9]+)\s(\S+)"
        r"\s\(([0-9]+):([0-9]+)\.([0-9]+)\)\s(\S+)\s([01])\s([0-9]+)\s([0-9]+)\s*"
    )


POSITION_RE = _record_pattern(r"-[1-3]|[0-2]")
# Move lists embed the start position with relation -4.
MOVELIST_POSITION_RE = _record_pattern(r"-[1-4]|[0-2]")

_VERBOSE_RE = re.compile(r"(\S+)/(\S{2})-(\S{2})=?(\S?)")


def _verbose_move(text: str, san: str, side: str) -> VerboseMove | None:
    m = _VERBOSE_RE.match(text)
    if m:
        return VerboseMove(
            piece=m.group(1).lower(),
            from_square=None if m.group(2) == "@@" else m.group(2),
            to_square=m.group(3),
            promotion=m.group(4).lower() or None,
            san=san,
        )
    if san in ("O-O", "O-O-O"):
        # the side that castled is the one not to move now
        rank = "8" if side == "W" else "1"
        return VerboseMove(
            piece="k",
            from_square=f"e{rank}",
            to_square=f"{'g' if san == 'O-O' else 'c'}{rank}",
            san=san,
        )
    return None


def build_position_update(m: re.Match[str]) -> PositionUpdate:
    """Decode a match of :data:`POSITION_RE` or :data:`MOVELIST_POSITION_RE`."""
    g = m.groups()
    ranks = g[0:8]
    side = g[8]
    san = g[30]
    # the server sometimes reports a clock of 1 before black's first move
    halfmove = 0 if san == "none" else int(g[14])
    fen = style12_to_fen(
        ranks,
        side,
        int(g[9]),
        (g[10] == "1", g[11] == "1", g[12] == "1", g[13] == "1"),
        halfmove,
        int(g[25]),
    )
    return PositionUpdate(
        fen=fen,
        side=Color.WHITE if side == "W" else Color.BLACK,
        game_id=int(g[15]),
        white_name=g[16],
        black_name=g[17],
        relation=Relation(int(g[18])),
        initial_time=int(g[19]),
        increment=int(g[20]),
        white_strength=int(g[21]),
        black_strength=int(g[22]),
        white_time_ms=int(g[23]),
        black_time_ms=int(g[24]),
        move_number=int(g[25]),
        verbose_move=_verbose_move(g[26], san, side),
        move_time=MoveTime(int(g[27]), int(g[28]), int(g[29])),
        san=None if san == "none" else san,
        flip=g[31] == "1",
    )


def parse_position_update(text: str, *, movelist: bool = False) -> PositionUpdate | None:
    """Decode the first position-update record in *text*, if any."""
    m = (MOVELIST_POSITION_RE if movelist else POSITION_RE).search(text)
    return build_position_update(m) if m else None
