"""Variant move engine.

Resolves a candidate move against a position the way the server does.
Ordinary chess is delegated to python-chess; drops, wild/Fischer-Random
castling and premoves are resolved here, and the resulting FEN is
post-processed to match the server byte for byte (half-move clock in
crazyhouse, castling rights in wild, unblockable-mate demotion).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TypeAlias

import chess

from ficsclient.core.enums import Category, Color, MoveFlag
from ficsclient.core.geometry import is_reachable
from ficsclient.core.holdings import VariantData, update_variant_data
from ficsclient.core.move import CandidateMove, MoveRejection, MoveResult, NormalizedMove
from ficsclient.core.notation.coordinates import move_to_coordinate_string, parse_coordinate_move
from ficsclient.core.notation.fen import FenFields, normalize_castling, piece_map, turn_color
from ficsclient.core.roster import GameRoster, adjust_castling_rights
from ficsclient.core.types import (
    SquareName,
    adjacent_squares,
    file_index,
    from_index,
    is_square_name,
    squares_between,
    to_index,
)

_LOGGER = logging.getLogger(__name__)

MoveInput: TypeAlias = str | CandidateMove

_CASTLE_SHORT = "O-O"
_CASTLE_LONG = "O-O-O"


@dataclass(frozen=True, slots=True)
class VariantContext:
    """Per-game inputs that never change while the game is played."""

    start_fen: str
    category: Category
    roster: GameRoster

    @classmethod
    def for_game(cls, start_fen: str, category: Category | str) -> VariantContext:
        """Resolve the castling roster once for a game.

        Raises :class:`~ficsclient.errors.UnsupportedCategoryError` for an
        unknown category name.
        """
        if not isinstance(category, Category):
            category = Category.parse(category)
        return cls(start_fen, category, GameRoster.resolve(start_fen, category))


# ── Public API ───────────────────────────────────────────────────────────────


def resolve_move(
    fen: str,
    move: MoveInput,
    context: VariantContext,
    variant_data: VariantData | None = None,
    *,
    premove: bool = False,
) -> MoveResult | MoveRejection:
    """Apply *move* to *fen*.

    *move* is SAN, a coordinate string (``e2-e4``, ``P@e4``) or a
    :class:`CandidateMove`.  Premoves are only checked for piece ownership
    and king geometry; the caller must resolve them again when they become
    playable.
    """
    try:
        fields = FenFields.split(fen)
    except ValueError as exc:
        return _rejected(move, MoveRejection.inconsistent(str(exc)))

    candidate = move if isinstance(move, CandidateMove) else parse_coordinate_move(move)
    if (
        candidate is not None
        and candidate.from_square is not None
        and candidate.piece is not None
        and not is_reachable(
            candidate.from_square, candidate.to_square, candidate.piece, fields.side
        )
    ):
        return _rejected(move, MoveRejection.illegal("piece cannot reach target square"))

    if context.category.is_standard and not premove:
        outcome = _resolve_standard(fields, candidate or move)
    else:
        outcome = _resolve_variant(fields, move, candidate, context, variant_data, premove)

    if isinstance(outcome, MoveRejection):
        return _rejected(move, outcome)

    out_fen, normalized = outcome
    data = update_variant_data(fen, normalized, variant_data, context.category)
    return MoveResult(out_fen, normalized, data)


def legal_destinations(
    fen: str,
    context: VariantContext,
    variant_data: VariantData | None = None,
) -> dict[SquareName, list[SquareName]]:
    """Map each movable square to its legal target squares.

    In losers only captures are offered when one exists; in wild categories
    the king's castling targets are replaced by the variant's own.
    """
    board = chess.Board(fen)
    moves = list(board.legal_moves)
    if context.category == Category.LOSERS:
        captures = [m for m in moves if board.is_capture(m)]
        if captures:
            moves = captures

    dests: dict[SquareName, list[SquareName]] = {}
    for m in moves:
        targets = dests.setdefault(from_index(m.from_square), [])
        target = from_index(m.to_square)
        if target not in targets:
            targets.append(target)

    if context.category.is_wild:
        color = turn_color(fen)
        king = context.roster[color].king
        if king is not None and board.piece_at(to_index(king)) == chess.Piece(
            chess.KING, color.as_chess()
        ):
            king_dests = adjust_king_destinations(
                dests.get(king, []), fen, context, variant_data
            )
            if king_dests:
                dests[king] = king_dests
            else:
                dests.pop(king, None)
    return dests


def adjust_king_destinations(
    dests: list[SquareName],
    fen: str,
    context: VariantContext,
    variant_data: VariantData | None = None,
    *,
    premove: bool = False,
) -> list[SquareName]:
    """Swap the library's castling targets for the variant's castling targets."""
    king = context.roster[turn_color(fen)].king
    kept = [
        d for d in dests if king is None or abs(file_index(d) - file_index(king)) <= 1
    ]
    for notation in (_CASTLE_SHORT, _CASTLE_LONG):
        result = resolve_move(fen, notation, context, variant_data, premove=premove)
        if result and result.move.to_square not in kept:
            kept.append(result.move.to_square)
    return kept


# ── Standard categories ──────────────────────────────────────────────────────


def _resolve_standard(
    fields: FenFields, move: MoveInput
) -> tuple[str, NormalizedMove] | MoveRejection:
    board = chess.Board(fields.join())
    played = _play_standard(board, move)
    if played is None:
        return MoveRejection.illegal("not a legal move")
    normalized = _normalize(board, played)
    board.push(played)
    return board.fen(en_passant="fen"), normalized


def _play_standard(board: chess.Board, move: MoveInput) -> chess.Move | None:
    """Parse *move* with python-chess; ``None`` when the library refuses it."""
    try:
        if isinstance(move, CandidateMove):
            if move.is_drop:
                return None
            parsed = board.parse_uci(move.uci)
        else:
            parsed = board.parse_san(move)
    except ValueError:
        return None
    # parse_san accepts "--"/"0000" as a null move
    return parsed if parsed else None


def _normalize(board: chess.Board, move: chess.Move) -> NormalizedMove:
    """Describe *move* (not yet pushed) in the package's own move type."""
    piece = board.piece_at(move.from_square)
    assert piece is not None
    flags = MoveFlag.NORMAL
    captured: str | None = None

    if board.is_en_passant(move):
        flags |= MoveFlag.EN_PASSANT
        captured = "p"
    elif board.is_capture(move):
        flags |= MoveFlag.CAPTURE
        target = board.piece_at(move.to_square)
        captured = target.symbol().lower() if target else None

    if board.is_kingside_castling(move):
        flags |= MoveFlag.KINGSIDE_CASTLE
    elif board.is_queenside_castling(move):
        flags |= MoveFlag.QUEENSIDE_CASTLE

    if move.promotion:
        flags |= MoveFlag.PROMOTION
    if piece.piece_type == chess.PAWN and (
        abs(chess.square_rank(move.to_square) - chess.square_rank(move.from_square)) == 2
    ):
        flags |= MoveFlag.BIG_PAWN

    return NormalizedMove(
        color=Color.from_chess(piece.color),
        piece=piece.symbol().lower(),
        san=board.san(move),
        from_square=from_index(move.from_square),
        to_square=from_index(move.to_square),
        promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
        captured=captured,
        flags=flags,
    )


# ── Variant categories and premoves ──────────────────────────────────────────


def _resolve_variant(
    fields: FenFields,
    move: MoveInput,
    candidate: CandidateMove | None,
    context: VariantContext,
    variant_data: VariantData | None,
    premove: bool,
) -> tuple[str, NormalizedMove] | MoveRejection:
    category = context.category
    if premove:
        # a queued move can never capture en passant
        fields = replace(fields, en_passant="-")

    notation = ""
    if candidate is not None:
        if candidate.is_drop:
            notation = f"{(candidate.piece or 'p').upper()}@{candidate.to_square}"
        else:
            notation = _castle_notation(fields, candidate, category) or ""
    elif isinstance(move, str):
        notation = move.strip()
        if notation.startswith("0-0"):
            notation = notation.replace("0", "O")
    library_move: MoveInput = notation or candidate or move

    # python-chess would drop rights it cannot map onto classic squares
    pre = fields
    opponent_rights = ""
    if category.is_wild:
        opponent_rights = fields.rights_of(fields.side.opposite)
        pre = fields.with_castling(fields.rights_of(fields.side))

    board = chess.Board(pre.join())
    played = _play_standard(board, library_move)
    castling = notation.rstrip("+#").upper() in (_CASTLE_SHORT, _CASTLE_LONG)

    if played is None or premove or (category.is_wild and castling):
        if candidate is None and played is not None:
            candidate = CandidateMove(
                to_square=from_index(played.to_square),
                from_square=from_index(played.from_square),
                promotion=chess.piece_symbol(played.promotion) if played.promotion else None,
            )
        manual = _resolve_manually(pre, notation, candidate, context, premove)
        if isinstance(manual, MoveRejection):
            return manual
        out_fen, normalized = manual
    else:
        normalized = _normalize(board, played)
        board.push(played)
        out_fen = board.fen(en_passant="fen")

    post = FenFields.split(out_fen)

    if category.has_holdings:
        post = replace(post, halfmove_clock=0)
        normalized = _review_checkmate(post, normalized, category, variant_data)

    if category.is_wild or premove:
        if normalized.is_castle:
            post = post.with_castling(post.castling.strip("-") + opponent_rights)
        else:
            post = post.with_castling(pre.castling.strip("-") + opponent_rights)
            post = FenFields.split(adjust_castling_rights(post.join(), context.roster))

    if post.placement == pre.placement:
        _LOGGER.warning(
            "Move %r resolved without changing the board (%s)", move, fields.join()
        )
        return MoveRejection.inconsistent("board unchanged after move")

    return post.join(), normalized


def _castle_notation(
    fields: FenFields, candidate: CandidateMove, category: Category
) -> str | None:
    """``O-O``/``O-O-O`` for a king move onto its own rook or across two files."""
    assert candidate.from_square is not None
    pieces = piece_map(fields.placement)
    own_king, own_rook = ("K", "R") if fields.side == Color.WHITE else ("k", "r")
    if pieces.get(candidate.from_square) != own_king:
        return None
    distance = file_index(candidate.to_square) - file_index(candidate.from_square)
    if pieces.get(candidate.to_square) != own_rook and abs(distance) <= 1:
        return None
    classic = category.is_fischer_random or candidate.from_square[0] == "e"
    if distance > 0:
        return _CASTLE_SHORT if classic else _CASTLE_LONG
    return _CASTLE_LONG if classic else _CASTLE_SHORT


def _resolve_manually(
    pre: FenFields,
    notation: str,
    candidate: CandidateMove | None,
    context: VariantContext,
    premove: bool,
) -> tuple[str, NormalizedMove] | MoveRejection:
    """Build the resulting FEN by hand for moves python-chess cannot play."""
    color = pre.side
    board = chess.Board(pre.join())
    notation = notation.rstrip("+#")
    rights_after = pre.castling
    halfmove_after = pre.halfmove_clock + 1

    if "@" in notation:
        placed = _place_drop(board, notation, color)
        if isinstance(placed, MoveRejection):
            return placed
        normalized = placed
        halfmove_after = 0
    elif notation.upper() in (_CASTLE_SHORT, _CASTLE_LONG):
        castled = _castle(board, notation.upper(), pre, context, premove)
        if isinstance(castled, MoveRejection):
            return castled
        normalized, rights_after = castled
    elif premove:
        relocated = _relocate(board, candidate, color)
        if isinstance(relocated, MoveRejection):
            return relocated
        normalized = relocated
    else:
        return MoveRejection.illegal("not a legal move")

    side_after = color.opposite
    out = FenFields(
        board.board_fen(),
        side_after,
        normalize_castling(rights_after),
        "-",
        halfmove_after,
        pre.fullmove_number + (1 if side_after == Color.WHITE else 0),
    )
    after = chess.Board(out.join())
    if after.is_checkmate():
        normalized = replace(normalized, san=normalized.san + "#")
    elif after.is_check():
        normalized = replace(normalized, san=normalized.san + "+")
    return out.join(), normalized


def _place_drop(
    board: chess.Board, notation: str, color: Color
) -> NormalizedMove | MoveRejection:
    kind, _, target = notation.partition("@")
    kind = kind.lower()
    if len(kind) != 1 or kind not in "pnbrqk" or not is_square_name(target):
        return MoveRejection.illegal(f"malformed drop {notation!r}")
    if kind == "p" and target[1] in "18":
        return MoveRejection.illegal("pawns cannot be dropped on the first or last rank")
    square = to_index(target)
    if board.piece_at(square) is not None:
        return MoveRejection.illegal("drop target is occupied")

    board.set_piece_at(square, chess.Piece.from_symbol(kind.upper() if color == Color.WHITE else kind))
    if board.is_check():
        return MoveRejection.illegal("drop leaves the king in check")

    return NormalizedMove(
        color=color,
        piece=kind,
        san=f"{kind.upper()}@{target}",
        to_square=target,
        flags=MoveFlag.DROP,
    )


def _castle(
    board: chess.Board,
    notation: str,
    pre: FenFields,
    context: VariantContext,
    premove: bool,
) -> tuple[NormalizedMove, str] | MoveRejection:
    """Castle with the roster's king and rook.

    Returns the move and the castling rights left afterwards.
    """
    color = pre.side
    rank = color.back_rank
    roster = context.roster[color]
    king_from = roster.king
    kingside = notation == _CASTLE_SHORT

    if context.category.is_fischer_random or (king_from is not None and king_from[0] == "e"):
        uses_left = not kingside
        king_to = f"{'g' if kingside else 'c'}{rank}"
        rook_to = f"{'f' if kingside else 'd'}{rank}"
    else:
        # wild seatings with the king on d castle mirrored
        uses_left = kingside
        king_to = f"{'b' if kingside else 'f'}{rank}"
        rook_to = f"{'c' if kingside else 'e'}{rank}"
    rook_from = roster.left_rook if uses_left else roster.right_rook

    short, long = ("K", "Q") if color == Color.WHITE else ("k", "q")
    used, other = (long, short) if uses_left else (short, long)
    if used not in pre.castling:
        return MoveRejection.illegal("no castling right on that side")

    if king_from is None or rook_from is None:
        _LOGGER.warning("Castling right %s held without roster pieces", used)
        return MoveRejection.inconsistent("castling pieces missing from roster")

    king_piece = chess.Piece(chess.KING, color.as_chess())
    rook_piece = chess.Piece(chess.ROOK, color.as_chess())
    if board.piece_at(to_index(king_from)) != king_piece or (
        board.piece_at(to_index(rook_from)) != rook_piece
    ):
        _LOGGER.warning("Castling right %s held but king or rook has moved", used)
        return MoveRejection.inconsistent("castling king or rook not on its start square")

    if not premove:
        enemy = color.opposite.as_chess()
        for square in squares_between(king_from, king_to):
            if square not in (king_from, rook_from) and board.piece_at(to_index(square)):
                return MoveRejection.illegal("king's castling path is blocked")
            if board.is_attacked_by(enemy, to_index(square)):
                return MoveRejection.illegal("king castles through an attacked square")
        for square in squares_between(rook_from, rook_to):
            if square not in (rook_from, king_from) and board.piece_at(to_index(square)):
                return MoveRejection.illegal("rook's castling path is blocked")

    board.remove_piece_at(to_index(king_from))
    board.remove_piece_at(to_index(rook_from))
    board.set_piece_at(to_index(king_to), king_piece)
    board.set_piece_at(to_index(rook_to), rook_piece)

    rights = pre.castling.replace(used, "")
    # the server lets an unmoved king castle again on the other side
    if king_from != king_to:
        rights = rights.replace(other, "")

    normalized = NormalizedMove(
        color=color,
        piece="k",
        san=notation,
        from_square=king_from,
        to_square=rook_from if context.category.is_fischer_random else king_to,
        flags=MoveFlag.QUEENSIDE_CASTLE if uses_left else MoveFlag.KINGSIDE_CASTLE,
    )
    return normalized, normalize_castling(rights)


def _relocate(
    board: chess.Board, candidate: CandidateMove | None, color: Color
) -> NormalizedMove | MoveRejection:
    """Premove: move the piece without any legality check beyond ownership."""
    if candidate is None or candidate.from_square is None:
        return MoveRejection.illegal("premove needs a source square")
    source, target = candidate.from_square, candidate.to_square
    piece = board.piece_at(to_index(source))
    if piece is None or piece.color != color.as_chess():
        return MoveRejection.illegal("no piece of the mover's color on the source square")

    kind = piece.symbol().lower()
    if kind == "k" and not is_reachable(source, target, kind, color, include_castling=False):
        return MoveRejection.illegal("king cannot reach target square")

    occupant = board.piece_at(to_index(target))
    flags = MoveFlag.NORMAL
    captured = None
    if occupant is not None and occupant.color != piece.color:
        flags |= MoveFlag.CAPTURE
        captured = occupant.symbol().lower()
    if candidate.promotion:
        flags |= MoveFlag.PROMOTION
        piece = chess.Piece(chess.PIECE_SYMBOLS.index(candidate.promotion), piece.color)

    board.remove_piece_at(to_index(source))
    board.set_piece_at(to_index(target), piece)
    return NormalizedMove(
        color=color,
        piece=kind,
        san=move_to_coordinate_string(candidate),
        from_square=source,
        to_square=target,
        promotion=candidate.promotion,
        captured=captured,
        flags=flags,
    )


# ── Post-processing ──────────────────────────────────────────────────────────


def _review_checkmate(
    post: FenFields,
    move: NormalizedMove,
    category: Category,
    variant_data: VariantData | None,
) -> NormalizedMove:
    """Demote ``#`` to ``+`` when a dropped piece could still block the mate.

    A pawn is tried on each empty square around the mated king.  In
    bughouse any such square demotes the mate (the partner may yet deliver
    a piece); in crazyhouse the defender must already hold a piece that may
    be dropped there.
    """
    board = chess.Board(post.join())
    if not board.is_checkmate():
        return move

    defender = board.turn
    king = board.king(defender)
    assert king is not None
    blocking: SquareName | None = None
    for square in adjacent_squares(from_index(king)):
        index = to_index(square)
        if board.piece_at(index) is not None:
            continue
        board.set_piece_at(index, chess.Piece(chess.PAWN, defender))
        escaped = not board.is_check()
        board.remove_piece_at(index)
        if escaped:
            blocking = square
            break
    if blocking is None:
        return move

    can_block = False
    if category == Category.CRAZYHOUSE and variant_data is not None:
        held = variant_data.holdings.held_by(Color.from_chess(defender))
        can_block = any(
            letter.lower() != "p" or blocking[1] not in "18" for letter in held
        )
    if category == Category.BUGHOUSE or can_block:
        return replace(move, san=move.san.replace("#", "+"))
    return move


def _rejected(move: MoveInput, rejection: MoveRejection) -> MoveRejection:
    _LOGGER.debug("Rejected %r: %s (%s)", move, rejection.reason, rejection.kind)
    return rejection
