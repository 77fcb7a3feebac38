"""Core domain layer: variant-aware chess logic with no I/O.

Quick start::

    from ficsclient.core import STARTING_FEN, Category, VariantContext, resolve_move

    ctx = VariantContext.for_game(STARTING_FEN, Category.CRAZYHOUSE)
    result = resolve_move(STARTING_FEN, "e4", ctx)
    if result:
        print(result.fen, result.move.san)
"""

from ficsclient.core.chess960 import generate_chess960_fen
from ficsclient.core.engine import (
    VariantContext,
    adjust_king_destinations,
    legal_destinations,
    resolve_move,
)
from ficsclient.core.enums import Category, Color, MoveFlag, Reason, RejectionKind
from ficsclient.core.holdings import Holdings, VariantData, update_variant_data
from ficsclient.core.move import CandidateMove, MoveRejection, MoveResult, NormalizedMove
from ficsclient.core.notation import (
    STARTING_FEN,
    FenFields,
    move_to_coordinate_string,
    parse_coordinate_move,
    style12_to_fen,
)
from ficsclient.core.roster import (
    CastlingRoster,
    GameRoster,
    adjust_castling_rights,
    resolve_roster,
)
from ficsclient.core.rules import GameOutcome, Rules

__all__ = [
    # Enums / flags
    "Category",
    "Color",
    "MoveFlag",
    "Reason",
    "RejectionKind",
    # Notation
    "STARTING_FEN",
    "FenFields",
    "style12_to_fen",
    "parse_coordinate_move",
    "move_to_coordinate_string",
    # Moves
    "CandidateMove",
    "NormalizedMove",
    "MoveResult",
    "MoveRejection",
    # Variant state
    "Holdings",
    "VariantData",
    "update_variant_data",
    "CastlingRoster",
    "GameRoster",
    "resolve_roster",
    "adjust_castling_rights",
    "generate_chess960_fen",
    # Engine / rules
    "VariantContext",
    "resolve_move",
    "legal_destinations",
    "adjust_king_destinations",
    "GameOutcome",
    "Rules",
]
