"""Tests for the login state machine and message classification."""

from ficsclient.core.enums import Color, Reason
from ficsclient.core.holdings import Holdings
from ficsclient.protocol.events import (
    ChannelMessage,
    GameEnded,
    GameStarted,
    HoldingsUpdate,
    LoginPrompt,
    LoginResult,
    MatchOffer,
    MoveTime,
    Offers,
    PositionUpdate,
    PrivateMessage,
    Relation,
    SeeksRemoved,
    StoredMessages,
    Unclassified,
    VerboseMove,
)
from ficsclient.protocol.parser import PING_REPLY, LoginPhase, Parser
from ficsclient.protocol.settings import SessionSettings

E5_RECORD = (
    "<12> rnbqkbnr pppp-ppp -------- ----p--- ----P--- -------- PPPP-PPP RNBQKBNR"
    " W 4 1 1 1 1 0 7 Newton Einstein -1 2 12 39 39 119 120 2 P/e7-e5 (0:02.000) e5 1 0 0"
)


class TestLogin:
    def test_guest_login(self, sent: list[str]) -> None:
        parser = Parser(send=sent.append)
        assert parser.phase == LoginPhase.AWAITING_LOGIN

        assert parser.parse("login: ") == [LoginPrompt("login", registered=False)]
        assert sent == ["guest"]
        assert parser.phase == LoginPhase.AWAITING_LOGIN

        events = parser.parse('Press return to enter the server as "GuestABCD":')
        assert events == [LoginPrompt("guest", registered=False)]
        assert sent == ["guest", ""]

        banner = "**** Starting FICS session as GuestABCD(U) ****"
        events = parser.parse(banner)
        assert events[0] == LoginResult(display_name="GuestABCD")
        assert events[0].ok
        assert parser.logged_in

    def test_registered_login(self, sent: list[str], registered_settings: SessionSettings) -> None:
        parser = Parser(send=sent.append, settings=registered_settings)
        parser.parse("login: ")
        assert parser.phase == LoginPhase.AWAITING_LOGIN
        assert parser.parse("password: ") == [LoginPrompt("password", registered=True)]
        assert sent == ["Newton", "apple"]
        assert parser.phase == LoginPhase.AWAITING_PASSWORD

    def test_password_requested_without_password(self, sent: list[str]) -> None:
        parser = Parser(send=sent.append)
        events = parser.parse(
            "Newton is a registered name.  If it is yours, type the password.\npassword: "
        )
        assert len(events) == 1
        assert isinstance(events[0], LoginResult)
        assert not events[0].ok
        assert events[0].error_text is not None
        assert events[0].error_text.startswith("Newton is a registered name.")
        assert sent == []
        assert parser.phase == LoginPhase.AWAITING_LOGIN

    def test_invalid_password(self, sent: list[str], registered_settings: SessionSettings) -> None:
        parser = Parser(send=sent.append, settings=registered_settings)
        events = parser.parse("**** Invalid password! ****")
        assert events == [LoginResult(error_text="**** Invalid password! ****")]
        assert parser.phase == LoginPhase.AWAITING_PASSWORD

    def test_name_too_long(self, sent: list[str]) -> None:
        parser = Parser(send=sent.append)
        text = "Sorry, names may be at most 17 characters long.  Try again."
        assert parser.parse(text) == [LoginResult(error_text=text)]

    def test_unknown_text_before_login(self, sent: list[str]) -> None:
        parser = Parser(send=sent.append)
        assert parser.parse("Welcome to the Free Internet Chess Server") == [
            Unclassified("Welcome to the Free Internet Chess Server")
        ]

    def test_bytes_input(self, sent: list[str]) -> None:
        parser = Parser(send=sent.append)
        assert parser.parse(b"login: ") == [LoginPrompt("login", registered=False)]


class TestCleaning:
    def test_ping_is_answered(self, parser: Parser, sent: list[str]) -> None:
        assert parser.parse("[G]\x00") == []
        assert sent == [PING_REPLY]

    def test_empty(self, parser: Parser) -> None:
        assert parser.parse("") == []
        assert parser.parse("\r\n\x07fics% ") == []

    def test_prompt_delimited_messages(self, parser: Parser) -> None:
        events = parser.parse("Newton(50): hi\nfics% Einstein tells you: hello\nfics% ")
        assert events == [
            ChannelMessage(channel="50", user="Newton", message="hi"),
            PrivateMessage(user="Einstein", message="hello"),
        ]


class TestPositionUpdates:
    def test_decoded_fields(self, parser: Parser, e4_record: str) -> None:
        (event,) = parser.parse(e4_record)
        assert isinstance(event, PositionUpdate)
        assert event.fen == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert event.side == Color.BLACK
        assert event.game_id == 7
        assert (event.white_name, event.black_name) == ("Newton", "Einstein")
        assert event.relation == Relation.MY_MOVE
        assert event.relation.is_playing
        assert (event.initial_time, event.increment) == (2, 12)
        assert (event.white_time_ms, event.black_time_ms) == (119, 122)
        assert event.verbose_move == VerboseMove("p", "e4", "e2", None, "e4")
        assert event.move_time == MoveTime(0, 6, 0)
        assert event.move_time.total_ms == 6000
        assert event.san == "e4"
        assert event.flip

    def test_initial_position_has_no_move(self, parser: Parser) -> None:
        record = (
            "<12> rnbqkbnr pppppppp -------- -------- -------- -------- PPPPPPPP RNBQKBNR"
            " W -1 1 1 1 1 1 7 Newton Einstein 1 2 12 39 39 120 120 1 none (0:00.000) none 0 0 0"
        )
        (event,) = parser.parse(record)
        assert isinstance(event, PositionUpdate)
        assert not event.has_move
        assert event.verbose_move is None
        assert event.fen.endswith(" w KQkq - 0 1")

    def test_castling_verbose_move(self, parser: Parser) -> None:
        record = (
            "<12> r---k--r pppppppp -------- -------- -------- -------- PPPPPPPP R----RK-"
            " B -1 0 0 1 1 1 7 Newton Einstein -1 2 12 39 39 119 120 5 o-o (0:01.000) O-O 0 0 0"
        )
        (event,) = parser.parse(record)
        assert isinstance(event, PositionUpdate)
        assert event.verbose_move == VerboseMove("k", "g1", "e1", san="O-O")

    def test_several_records_in_one_chunk(self, parser: Parser, e4_record: str) -> None:
        events = parser.parse(f"{e4_record}\n{E5_RECORD}")
        assert [type(e) for e in events] == [PositionUpdate, PositionUpdate]
        assert isinstance(events[1], PositionUpdate)
        assert events[1].relation == Relation.OPPONENT_TO_MOVE


class TestGameMessages:
    def test_game_started(self, parser: Parser) -> None:
        events = parser.parse("{Game 7 (Newton vs. Einstein) Creating rated blitz match.}")
        assert events == [GameStarted(7, "Newton", "Einstein", True, "blitz", False)]

    def test_game_resumed(self, parser: Parser) -> None:
        (event,) = parser.parse("{Game 7 (Newton vs. Einstein) Continuing unrated crazyhouse match.}")
        assert isinstance(event, GameStarted)
        assert event.resumed
        assert event.rated is False
        assert event.category == "crazyhouse"

    def test_game_ended(self, parser: Parser) -> None:
        text = "{Game 7 (Newton vs. Einstein) Einstein resigns} 1-0"
        (event,) = parser.parse(text)
        assert event == GameEnded(7, "Newton", "Einstein", Reason.RESIGN, "1-0", text)

    def test_game_drawn(self, parser: Parser) -> None:
        (event,) = parser.parse("{Game 7 (Newton vs. Einstein) Game drawn by repetition} 1/2-1/2")
        assert isinstance(event, GameEnded)
        assert event.reason == Reason.DRAW
        assert event.is_draw

    def test_holdings(self, parser: Parser) -> None:
        (event,) = parser.parse("<b1> game 7 white [PN] black [q] <- P")
        assert event == HoldingsUpdate(7, Holdings.from_server("PN", "q"), "P")


class TestChat:
    def test_channel_tell_with_titles(self, parser: Parser) -> None:
        (event,) = parser.parse("Newton(TD)(50): tournament starts soon")
        assert event == ChannelMessage(channel="50", user="Newton", message="tournament starts soon")

    def test_private_tell(self, parser: Parser) -> None:
        (event,) = parser.parse("Einstein(C) tells you: good game")
        assert event == PrivateMessage(user="Einstein", message="good game")

    def test_kibitz(self, parser: Parser) -> None:
        (event,) = parser.parse("Newton(1850)[7] kibitzes: nice move")
        assert event == ChannelMessage(
            channel="Game 7", user="Newton", message="nice move", kind="kibitz"
        )

    def test_whisper(self, parser: Parser) -> None:
        (event,) = parser.parse("Newton(1850)[7] whispers: hmm")
        assert isinstance(event, ChannelMessage)
        assert event.kind == "whisper"

    def test_stored_messages(self, parser: Parser) -> None:
        text = (
            "Messages:\n"
            "1. Einstein at Sun Oct 18, 12:00 PDT 2026: rematch?\n"
            "2. Newton at Sun Oct 18, 12:05 PDT 2026: sure"
        )
        (event,) = parser.parse(text)
        assert isinstance(event, StoredMessages)
        assert event.kind == "all"
        assert [m.user for m in event.messages] == ["Einstein", "Newton"]
        assert event.messages[0].id == 1
        assert event.messages[1].message == "sure"


class TestOffers:
    def test_match_offer(self, parser: Parser) -> None:
        (event,) = parser.parse(
            "<pt> 12 w=GuestABCD t=match p=GuestXYZ (----) GuestABCD (----) unrated blitz 5 0"
        )
        assert isinstance(event, Offers)
        (offer,) = event.offers
        assert isinstance(offer, MatchOffer)
        assert offer.opponent == "GuestABCD"
        assert offer.player_rating is None

    def test_text_before_offers(self, parser: Parser) -> None:
        events = parser.parse("Challenge withdrawn.\n<sr> 8")
        assert events == [Unclassified("Challenge withdrawn."), Offers((SeeksRemoved((8,)),))]

    def test_own_seeks_removed(self, parser: Parser) -> None:
        assert parser.parse("Your seek has been removed.") == [Offers((SeeksRemoved(),))]
        assert parser.parse("Your seek 8 has been removed.") == [Offers((SeeksRemoved((8,)),))]


class TestUnclassified:
    def test_passthrough(self, parser: Parser) -> None:
        assert parser.parse("You are now observing game 7.") == [
            Unclassified("You are now observing game 7.")
        ]

    def test_help_text(self, parser: Parser) -> None:
        text = "[Last Modified: 2026-01-01]\nSome help about blitz."
        assert parser.parse(text) == [Unclassified(text)]
