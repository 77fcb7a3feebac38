"""Stateful classifier for the server's text stream."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from enum import Enum, auto

from ficsclient.protocol import timeseal
from ficsclient.protocol.events import LoginPrompt, LoginResult, ServerEvent, Unclassified
from ficsclient.protocol.matchers import MATCHERS
from ficsclient.protocol.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

MESSAGE_DELIMITER = "fics%"
PING_REPLY = "\x029"

_PING_RE = re.compile(r"\[G\]\x00")
_NOISE_RE = re.compile(r"[\x07\x00\x01\r]|\\   ")

_NAME_ERROR_RES = (
    re.compile(r"Sorry, names may be at most 17 characters long\.\s+Try again\.", re.M),
    re.compile(
        r"Sorry, names can only consist of lower and upper case letters\.\s+Try again\.",
        re.M,
    ),
)
_SESSION_START_RE = re.compile(
    r"\*\*\*\* Starting FICS session as ([a-zA-Z]+)(?:\(.*\))? \*\*\*\*"
)
_INVALID_PASSWORD_RE = re.compile(r"\*\*\*\* Invalid password! \*\*\*\*.*")


class LoginPhase(Enum):
    AWAITING_LOGIN = auto()
    AWAITING_PASSWORD = auto()
    LOGGED_IN = auto()


class Parser:
    """Turns raw server text into :mod:`~ficsclient.protocol.events` records.

    Until the session banner is seen the parser answers the login and
    password prompts itself through *send*; afterwards every message is
    run through the ordered matchers.  Chunks must be fed in arrival
    order.
    """

    __slots__ = ("_send", "_username", "_password", "_phase")

    def __init__(
        self,
        send: Callable[[str], None],
        settings: SessionSettings | None = None,
    ) -> None:
        settings = settings or SessionSettings()
        self._send = send
        self._username = settings.username
        self._password = settings.password
        self._phase = LoginPhase.AWAITING_LOGIN

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def phase(self) -> LoginPhase:
        return self._phase

    @property
    def logged_in(self) -> bool:
        return self._phase == LoginPhase.LOGGED_IN

    # ── Parsing ──────────────────────────────────────────────────────────

    def parse(self, data: str | bytes) -> list[ServerEvent]:
        """Classify one inbound chunk; may yield zero or several events."""
        if isinstance(data, bytes):
            data = timeseal.decode(data)
        return self._parse(data)

    def _parse(self, msg: str) -> list[ServerEvent]:
        if not msg:
            return []

        msg = _PING_RE.sub(self._answer_ping, msg)
        msg = _NOISE_RE.sub("", msg).strip()

        parts = [part for part in msg.split(MESSAGE_DELIMITER) if part]
        if len(parts) > 1:
            return self._parse_all(parts)

        msg = msg.replace(MESSAGE_DELIMITER, "").strip()
        if not msg:
            return []

        if not self.logged_in:
            return self._login(msg)
        return self._classify(msg)

    def _parse_all(self, parts: list[str]) -> list[ServerEvent]:
        events: list[ServerEvent] = []
        for part in parts:
            events.extend(self._parse(part))
        return events

    def _answer_ping(self, _match: re.Match[str]) -> str:
        self._send(PING_REPLY)
        return ""

    def _classify(self, msg: str) -> list[ServerEvent]:
        for matcher in MATCHERS:
            m = matcher.pattern.search(msg)
            if m is None:
                continue
            if matcher.split_lines:
                lines = [line for line in msg.split("\n") if line]
                if len(lines) > 1:
                    return self._parse_all(lines)
            if matcher.split_prefix:
                prefix = msg[: m.start()].strip()
                if prefix:
                    return self._parse(prefix) + self._parse(msg[m.start() :])
            event = matcher.build(m, msg)
            if event is not None:
                return [event]

        _LOGGER.debug("Unclassified server text: %r", msg[:80])
        return [Unclassified(msg)]

    # ── Login phase ──────────────────────────────────────────────────────

    def _set_phase(self, phase: LoginPhase) -> None:
        if phase != self._phase:
            _LOGGER.debug("Login phase %s -> %s", self._phase.name, phase.name)
            self._phase = phase

    def _login(self, msg: str) -> list[ServerEvent]:
        msg = msg.replace("\ufffd", "")

        for pattern in _NAME_ERROR_RES:
            m = pattern.search(msg)
            if m:
                return [LoginResult(error_text=m.group(0))]

        if "login:" in msg:
            self._send(self._username)
            return [LoginPrompt("login", registered=False)]

        if "Press return to enter the server as" in msg:
            self._password = ""
            self._send("")
            return [LoginPrompt("guest", registered=False)]

        if "password:" in msg:
            if not self._password:
                return [LoginResult(error_text=msg.replace("password:", "").strip())]
            self._send(self._password)
            self._set_phase(LoginPhase.AWAITING_PASSWORD)
            return [LoginPrompt("password", registered=True)]

        m = _SESSION_START_RE.search(msg)
        if m:
            self._set_phase(LoginPhase.LOGGED_IN)
            return [LoginResult(display_name=m.group(1)), *self._classify(msg)]

        if _INVALID_PASSWORD_RE.search(msg):
            self._set_phase(LoginPhase.AWAITING_PASSWORD)
            return [LoginResult(error_text=msg)]

        return [Unclassified(msg)]
