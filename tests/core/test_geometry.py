"""Tests for the empty-board reachability filter."""

import pytest

from ficsclient.core.enums import Color
from ficsclient.core.geometry import is_reachable


class TestIsReachable:
    @pytest.mark.parametrize(
        ("source", "dest", "piece"),
        [
            ("a1", "a8", "R"),
            ("a1", "h1", "r"),
            ("c1", "h6", "B"),
            ("d1", "d8", "Q"),
            ("d1", "h5", "Q"),
            ("g1", "f3", "N"),
            ("e1", "f2", "K"),
        ],
    )
    def test_reachable(self, source: str, dest: str, piece: str) -> None:
        assert is_reachable(source, dest, piece, Color.WHITE)

    @pytest.mark.parametrize(
        ("source", "dest", "piece"),
        [
            ("a1", "b3", "R"),
            ("c1", "c3", "B"),
            ("g1", "g3", "N"),
            ("d1", "e3", "Q"),
            ("e1", "e3", "K"),
        ],
    )
    def test_unreachable(self, source: str, dest: str, piece: str) -> None:
        assert not is_reachable(source, dest, piece, Color.WHITE)

    def test_pawn_single_and_double(self) -> None:
        assert is_reachable("e2", "e3", "P", Color.WHITE)
        assert is_reachable("e2", "e4", "P", Color.WHITE)
        assert not is_reachable("e3", "e5", "P", Color.WHITE)

    def test_pawn_captures_diagonally(self) -> None:
        assert is_reachable("e4", "d5", "P", Color.WHITE)
        assert not is_reachable("e4", "c5", "P", Color.WHITE)

    def test_black_pawn_moves_down(self) -> None:
        assert is_reachable("e7", "e5", "p", Color.BLACK)
        assert not is_reachable("e7", "e8", "p", Color.BLACK)

    def test_king_back_rank_castling(self) -> None:
        assert is_reachable("e1", "g1", "K", Color.WHITE)
        assert is_reachable("b8", "h8", "k", Color.BLACK)
        assert not is_reachable("e1", "g1", "K", Color.WHITE, include_castling=False)
        assert not is_reachable("e8", "g8", "k", Color.WHITE)
