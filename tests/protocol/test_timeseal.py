"""Tests for timeseal command framing."""

from ficsclient.protocol.timeseal import BLOCK_SIZE, TIMESEAL_HELLO, decode, encode, hello_frame


class TestEncode:
    def test_known_frame(self) -> None:
        frame = encode("hello", timestamp_ms=1234)
        assert frame == bytes(
            [0xC5, 0x6C, 0xB9, 0x69, 0xA1, 0xCC, 0xB0, 0x62, 0xA3, 0xAC, 0x91, 0x8E, 0x80, 0x0A]
        )

    def test_padded_to_blocks(self) -> None:
        for command in ("", "finger", "tell 50 a somewhat longer line of chat"):
            frame = encode(command, timestamp_ms=987_654_321)
            assert frame.endswith(b"\x80\n")
            assert (len(frame) - 2) % BLOCK_SIZE == 0

    def test_every_body_byte_has_high_bit_range(self) -> None:
        frame = encode("moves 7", timestamp_ms=0)
        assert all(0x40 <= byte <= 0xFF for byte in frame[:-2])

    def test_timestamp_changes_frame(self) -> None:
        assert encode("who", timestamp_ms=1000) != encode("who", timestamp_ms=2000)

    def test_current_time_used_by_default(self) -> None:
        assert encode("who").endswith(b"\x80\n")

    def test_hello_frame(self) -> None:
        assert hello_frame(timestamp_ms=55) == encode(TIMESEAL_HELLO, timestamp_ms=55)


class TestDecode:
    def test_latin1(self) -> None:
        assert decode(b"caf\xe9") == "café"
