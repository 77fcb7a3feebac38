"""High-level rules: game-end detection and position validation.

Unlike python-chess's own helpers these take crazyhouse/bughouse holdings
into account (a side holding pieces is never stalemated, and held pieces
count as mating material).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import chess

from ficsclient.core.enums import Category, Color, Reason
from ficsclient.core.holdings import Holdings
from ficsclient.core.notation.fen import FenFields, piece_map, set_turn_color
from ficsclient.core.roster import resolve_roster
from ficsclient.core.types import file_index, rank_number

_MINOR_WEIGHT = 0.5


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """A locally detected game end."""

    reason: Reason
    winner: Color | None
    description: str

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class Rules:
    """Static rule-checker over FEN strings."""

    @staticmethod
    def is_stalemate(fen: str, holdings: Holdings | None = None) -> bool:
        if holdings is not None and holdings.total(Color.from_fen_char(fen.split()[1])):
            return False
        return chess.Board(fen).is_stalemate()

    @staticmethod
    def is_fifty_move_rule(fen: str) -> bool:
        return FenFields.split(fen).halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_insufficient_material(
        fen: str, holdings: Holdings | None = None, color: Color | None = None
    ) -> bool:
        """Weighted material count below two for *color*, or for both sides.

        Kings, pawns, rooks and queens weigh 1, knights 0.5.  Bishops weigh
        0.5 per square colour they stand on, so same-coloured bishops never
        add up.
        """
        weights = {Color.WHITE: 0.0, Color.BLACK: 0.0}

        if holdings is not None:
            for letter, count in holdings:
                minor = letter.lower() in "nb"
                weights[Color.of_letter(letter)] += count * (_MINOR_WEIGHT if minor else 1)

        bishop_colors: set[tuple[Color, int]] = set()
        for square, letter in piece_map(fen).items():
            owner = Color.of_letter(letter)
            if color is not None and owner != color:
                continue
            kind = letter.lower()
            if kind == "b":
                bishop_colors.add((owner, (file_index(square) + rank_number(square)) % 2))
            elif kind == "n":
                weights[owner] += _MINOR_WEIGHT
            else:
                weights[owner] += 1
        for owner, _ in bishop_colors:
            weights[owner] += _MINOR_WEIGHT

        if color is not None:
            return weights[color] < 2
        return weights[Color.WHITE] < 2 and weights[Color.BLACK] < 2

    @staticmethod
    def outcome(fen: str, san: str, holdings: Holdings | None = None) -> GameOutcome | None:
        """Game end reached by the move *san* that produced *fen*, if any."""
        to_move = Color.from_fen_char(fen.split()[1])
        if "#" in san:
            return GameOutcome(Reason.CHECKMATE, to_move.opposite, f"{to_move} checkmated")
        if Rules.is_insufficient_material(fen, holdings):
            return GameOutcome(Reason.DRAW, None, "Neither player has mating material")
        if Rules.is_stalemate(fen, holdings):
            return GameOutcome(Reason.DRAW, None, "Game drawn by stalemate")
        if Rules.is_fifty_move_rule(fen):
            return GameOutcome(Reason.DRAW, None, "Game drawn by the 50 move rule")
        return None

    @staticmethod
    def time_forfeit(fen: str, flagged: Color, holdings: Holdings | None = None) -> GameOutcome:
        """Outcome when *flagged* runs out of time.

        The game is drawn when the opponent could not mate anyway.
        """
        winner = flagged.opposite
        if Rules.is_insufficient_material(fen, holdings, winner):
            return GameOutcome(
                Reason.DRAW,
                None,
                f"{flagged} ran out of time and {winner} has no material to mate",
            )
        return GameOutcome(Reason.TIME_FORFEIT, winner, f"{flagged} forfeits on time")

    @staticmethod
    def validate_fen(fen: str, category: Category = Category.STANDARD) -> str | None:
        """Return an error message for an unplayable position, ``None`` if valid."""
        try:
            fields = FenFields.split(fen)
            board = chess.Board(set_turn_color(fen, fields.side.opposite))
        except ValueError:
            return "Invalid FEN format."

        if board.is_check():
            if fields.side == Color.WHITE:
                return "White's turn but black is in check."
            return "Black's turn but white is in check."

        placement = fields.placement
        if "K" not in placement or "k" not in placement:
            return "Missing king."
        if re.search(r"K.*K|k.*k", placement):
            return "Too many kings."

        ranks = placement.split("/")
        if re.search(r"[pP]", ranks[0] + ranks[7]):
            return "Pawn on 1st or 8th rank."

        for color, short, long, name in (
            (Color.WHITE, "K", "Q", "White"),
            (Color.BLACK, "k", "q", "Black"),
        ):
            if short not in fields.castling and long not in fields.castling:
                continue
            roster = resolve_roster(fen, color, category)
            if (
                roster.king is None
                or (roster.left_rook is None and long in fields.castling)
                or (roster.right_rook is None and short in fields.castling)
            ):
                return f"{name}'s king or rooks aren't in valid locations for castling."
        return None
