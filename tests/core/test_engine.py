"""Tests for move resolution in standard categories and premoves."""

import pytest

from ficsclient.core.engine import VariantContext, legal_destinations, resolve_move
from ficsclient.core.enums import Category, MoveFlag, RejectionKind
from ficsclient.core.move import CandidateMove, MoveRejection, MoveResult
from ficsclient.core.notation import STARTING_FEN
from ficsclient.errors import UnsupportedCategoryError

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


@pytest.fixture
def standard() -> VariantContext:
    return VariantContext.for_game(STARTING_FEN, Category.STANDARD)


def _ok(result: MoveResult | MoveRejection) -> MoveResult:
    assert isinstance(result, MoveResult), result
    return result


class TestVariantContext:
    def test_category_by_name(self) -> None:
        ctx = VariantContext.for_game(STARTING_FEN, "Crazyhouse")
        assert ctx.category == Category.CRAZYHOUSE

    def test_unknown_category(self) -> None:
        with pytest.raises(UnsupportedCategoryError):
            VariantContext.for_game(STARTING_FEN, "suicide")


class TestStandardMoves:
    def test_san(self, standard: VariantContext) -> None:
        result = _ok(resolve_move(STARTING_FEN, "e4", standard))
        assert result.fen == AFTER_E4
        assert result.move.san == "e4"
        assert result.move.piece == "p"
        assert result.move.flags & MoveFlag.BIG_PAWN
        assert result.variant_data is None

    def test_coordinates(self, standard: VariantContext) -> None:
        result = _ok(resolve_move(STARTING_FEN, "e2-e4", standard))
        assert result.fen == AFTER_E4
        assert result.move.san == "e4"

    def test_candidate_move(self, standard: VariantContext) -> None:
        result = _ok(resolve_move(STARTING_FEN, CandidateMove("f3", "g1"), standard))
        assert result.move.san == "Nf3"

    def test_illegal(self, standard: VariantContext) -> None:
        result = resolve_move(STARTING_FEN, "e5", standard)
        assert isinstance(result, MoveRejection)
        assert not result
        assert result.kind == RejectionKind.ILLEGAL

    def test_null_move_rejected(self, standard: VariantContext) -> None:
        assert not resolve_move(STARTING_FEN, "--", standard)

    def test_geometry_prefilter(self, standard: VariantContext) -> None:
        result = resolve_move(STARTING_FEN, CandidateMove("g3", "g1", piece="n"), standard)
        assert isinstance(result, MoveRejection)
        assert "reach" in result.reason

    def test_bad_fen_is_inconsistent(self, standard: VariantContext) -> None:
        result = resolve_move("not a fen", "e4", standard)
        assert isinstance(result, MoveRejection)
        assert result.is_inconsistent

    def test_capture(self, standard: VariantContext) -> None:
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        result = _ok(resolve_move(fen, "exd5", standard))
        assert result.move.is_capture
        assert result.move.captured == "p"

    def test_en_passant(self, standard: VariantContext) -> None:
        fen = "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3"
        result = _ok(resolve_move(fen, "exf6", standard))
        assert result.move.flags & MoveFlag.EN_PASSANT
        assert result.fen.split()[0] == "rnbqkbnr/ppp1p1pp/5P2/3p4/8/8/PPPP1PPP/RNBQKBNR"

    def test_promotion_required(self, standard: VariantContext) -> None:
        fen = "8/4P3/8/8/8/8/k7/7K w - - 0 1"
        assert not resolve_move(fen, "e7-e8", standard)
        result = _ok(resolve_move(fen, "e7-e8=q", standard))
        assert result.move.promotion == "q"
        assert result.fen.startswith("4Q3/")

    def test_castling(self, standard: VariantContext) -> None:
        fen = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"
        result = _ok(resolve_move(fen, "O-O", standard))
        assert result.move.flags & MoveFlag.KINGSIDE_CASTLE
        assert result.fen == "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R4RK1 b kq - 1 1"

    def test_check_suffix(self, standard: VariantContext) -> None:
        fen = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"
        result = _ok(resolve_move(fen, "Qh4", standard))
        assert result.move.san == "Qh4#"
        assert result.move.is_checkmate


class TestPremoves:
    def test_relocates_without_legality(self, standard: VariantContext) -> None:
        fen = AFTER_E4.replace(" b ", " w ")
        result = _ok(resolve_move(fen, "d2-d4", standard, premove=True))
        assert result.fen.split()[0] == "rnbqkbnr/pppppppp/8/8/3PP3/8/PPP2PPP/RNBQKBNR"
        assert result.fen.split()[3] == "-"
        assert result.move.san == "d2-d4"

    def test_through_pieces(self, standard: VariantContext) -> None:
        result = _ok(resolve_move(STARTING_FEN, "f1-b5", standard, premove=True))
        assert result.fen.split()[0] == "rnbqkbnr/pppppppp/8/1B6/8/8/PPPPPPPP/RNBQK1NR"

    def test_opponent_piece_rejected(self, standard: VariantContext) -> None:
        assert not resolve_move(STARTING_FEN, "e7-e5", standard, premove=True)

    def test_king_geometry(self, standard: VariantContext) -> None:
        assert not resolve_move(STARTING_FEN, "e1-e3", standard, premove=True)

    def test_san_premove(self, standard: VariantContext) -> None:
        result = _ok(resolve_move(STARTING_FEN, "Nf3", standard, premove=True))
        assert result.move.from_square == "g1"
        assert result.move.to_square == "f3"

    def test_king_move_drops_castling_rights(self, standard: VariantContext) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPP1PPP/RNBQKBNR w KQkq - 0 1"
        result = _ok(resolve_move(fen, "e1-e2", standard, premove=True))
        assert result.fen.split()[2] == "kq"


class TestLegalDestinations:
    def test_starting_position(self, standard: VariantContext) -> None:
        dests = legal_destinations(STARTING_FEN, standard)
        assert len(dests) == 10
        assert sorted(dests["g1"]) == ["f3", "h3"]
        assert sorted(dests["e2"]) == ["e3", "e4"]

    def test_losers_forces_captures(self) -> None:
        ctx = VariantContext.for_game(STARTING_FEN, Category.LOSERS)
        fen = "rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2"
        assert legal_destinations(fen, ctx) == {"e4": ["d5"]}

    def test_losers_without_capture(self) -> None:
        ctx = VariantContext.for_game(STARTING_FEN, Category.LOSERS)
        assert len(legal_destinations(STARTING_FEN, ctx)) == 10
