"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from ficsclient.protocol.parser import Parser
from ficsclient.protocol.settings import SessionSettings

# Opening position after 1. e4 as the server sends it, game 7.
E4_RECORD = (
    "<12> rnbqkbnr pppppppp -------- -------- ----P--- -------- PPPP-PPP RNBQKBNR"
    " B 4 1 1 1 1 0 7 Newton Einstein 1 2 12 39 39 119 122 1 P/e2-e4 (0:06.000) e4 1 0 0"
)


@pytest.fixture
def sent() -> list[str]:
    """Commands the parser wrote back to the server."""
    return []


@pytest.fixture
def parser(sent: list[str]) -> Parser:
    """A parser that has already completed the guest login."""
    p = Parser(send=sent.append)
    p.parse("**** Starting FICS session as GuestABCD(U) ****")
    sent.clear()
    return p


@pytest.fixture
def registered_settings() -> SessionSettings:
    return SessionSettings(username="Newton", password="apple")


@pytest.fixture
def e4_record() -> str:
    return E4_RECORD
