"""Notation package: FEN fields, the server's rank encoding and coordinate moves."""

from ficsclient.core.notation.coordinates import (
    move_to_coordinate_string,
    parse_coordinate_move,
)
from ficsclient.core.notation.fen import (
    STARTING_FEN,
    FenFields,
    normalize_castling,
    piece_map,
    ply_of,
    set_turn_color,
    turn_color,
)
from ficsclient.core.notation.style12 import (
    fen_to_style12,
    placement_to_ranks,
    ranks_to_placement,
    style12_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "FenFields",
    "normalize_castling",
    "piece_map",
    "ply_of",
    "set_turn_color",
    "turn_color",
    "style12_to_fen",
    "fen_to_style12",
    "ranks_to_placement",
    "placement_to_ranks",
    "parse_coordinate_move",
    "move_to_coordinate_string",
]
