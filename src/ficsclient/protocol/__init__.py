"""Server protocol: timeseal framing, message parsing and event records.

Quick start::

    from ficsclient.protocol import Parser, SessionSettings

    parser = Parser(send=transport.write_command, settings=SessionSettings())
    for event in parser.parse(chunk):
        handle(event)
"""

from ficsclient.protocol.events import (
    ChannelMessage,
    GameEnded,
    GameStarted,
    HoldingsUpdate,
    LoginPrompt,
    LoginResult,
    MovelistReceived,
    Offers,
    PositionUpdate,
    PrivateMessage,
    Reason,
    Relation,
    ServerEvent,
    StoredMessages,
    Unclassified,
)
from ficsclient.protocol.parser import LoginPhase, Parser
from ficsclient.protocol.settings import SessionSettings
from ficsclient.protocol.timeseal import TIMESEAL_HELLO, decode, encode, hello_frame

__all__ = [
    # Parser / config
    "Parser",
    "LoginPhase",
    "SessionSettings",
    # Framing
    "TIMESEAL_HELLO",
    "encode",
    "decode",
    "hello_frame",
    # Events
    "ServerEvent",
    "Reason",
    "Relation",
    "LoginPrompt",
    "LoginResult",
    "PositionUpdate",
    "GameStarted",
    "GameEnded",
    "HoldingsUpdate",
    "ChannelMessage",
    "PrivateMessage",
    "StoredMessages",
    "Offers",
    "MovelistReceived",
    "Unclassified",
]
