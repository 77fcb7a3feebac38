"""Tests for the fixed-width rank codec."""

import pytest

from ficsclient.core.notation import STARTING_FEN
from ficsclient.core.notation.style12 import (
    fen_to_rank,
    fen_to_style12,
    placement_to_ranks,
    rank_to_fen,
    style12_to_fen,
)

START_RANKS = [
    "rnbqkbnr",
    "pppppppp",
    "--------",
    "--------",
    "--------",
    "--------",
    "PPPPPPPP",
    "RNBQKBNR",
]


class TestRanks:
    def test_rank_to_fen(self) -> None:
        assert rank_to_fen("--pp-K--") == "2pp1K2"
        assert rank_to_fen("--------") == "8"

    def test_fen_to_rank(self) -> None:
        assert fen_to_rank("2pp1K2") == "--pp-K--"

    def test_invalid_rank(self) -> None:
        with pytest.raises(ValueError):
            rank_to_fen("---x----")
        with pytest.raises(ValueError):
            rank_to_fen("-------")

    def test_placement_to_ranks(self) -> None:
        assert placement_to_ranks(STARTING_FEN) == START_RANKS


class TestStyle12ToFen:
    def test_starting_position(self) -> None:
        fen = style12_to_fen(START_RANKS, "W", -1, (True, True, True, True), 0, 1)
        assert fen == STARTING_FEN

    def test_en_passant_for_black_to_move(self) -> None:
        ranks = list(START_RANKS)
        ranks[4] = "----P---"
        ranks[6] = "PPPP-PPP"
        fen = style12_to_fen(ranks, "B", 4, (True, True, True, True), 0, 1)
        assert fen == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    def test_en_passant_for_white_to_move(self) -> None:
        ranks = list(START_RANKS)
        ranks[1] = "ppp-pppp"
        ranks[3] = "---p----"
        fen = style12_to_fen(ranks, "W", 3, (True, False, False, True), 0, 2)
        assert fen.split()[2:4] == ["Kq", "d6"]

    def test_no_castling(self) -> None:
        fen = style12_to_fen(START_RANKS, "W", -1, (False,) * 4, 3, 10)
        assert fen.endswith(" w - - 3 10")

    def test_inverse(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b Kq e3 0 1"
        ranks, side, ep_file, flags = fen_to_style12(fen)
        assert side == "B"
        assert ep_file == 4
        assert flags == (True, False, False, True)
        assert style12_to_fen(ranks, side, ep_file, flags, 0, 1) == fen
