"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ficsclient.protocol.timeseal import TIMESEAL_HELLO

GUEST_USERNAME = "guest"


@dataclass
class SessionSettings:
    """Everything a session needs to log in.

    The parser only consumes the credentials; host, port and the timeseal
    greeting are carried for the transport layer.
    """

    # Credentials
    username: str = GUEST_USERNAME
    password: str = ""

    # Transport
    host: str = "www.freechess.org"
    port: int = 5001
    timeseal_hello: str = TIMESEAL_HELLO

    @property
    def is_guest(self) -> bool:
        return not self.password or self.username.lower() == GUEST_USERNAME
