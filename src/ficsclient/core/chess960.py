"""Chess960 starting positions by Scharnagl's numbering (0–959)."""

from __future__ import annotations

import random

CLASSIC_IDN = 518

# Non-bishop piece order, keyed by idn rounded down to a multiple of 16.
_KINGS_TABLE: dict[int, str] = {
    0: "QNNRKR", 192: "QNRKNR", 384: "QRNNKR", 576: "QRNKRN", 768: "QRKNRN",
    16: "NQNRKR", 208: "NQRKNR", 400: "RQNNKR", 592: "RQNKRN", 784: "RQKNRN",
    32: "NNQRKR", 224: "NRQKNR", 416: "RNQNKR", 608: "RNQKRN", 800: "RKQNRN",
    48: "NNRQKR", 240: "NRKQNR", 432: "RNNQKR", 624: "RNKQRN", 816: "RKNQRN",
    64: "NNRKQR", 256: "NRKNQR", 448: "RNNKQR", 640: "RNKRQN", 832: "RKNRQN",
    80: "NNRKRQ", 272: "NRKNRQ", 464: "RNNKRQ", 656: "RNKRNQ", 848: "RKNRNQ",
    96: "QNRNKR", 288: "QNRKRN", 480: "QRNKNR", 672: "QRKNNR", 864: "QRKRNN",
    112: "NQRNKR", 304: "NQRKRN", 496: "RQNKNR", 688: "RQKNNR", 880: "RQKRNN",
    128: "NRQNKR", 320: "NRQKRN", 512: "RNQKNR", 704: "RKQNNR", 896: "RKQRNN",
    144: "NRNQKR", 336: "NRKQRN", 528: "RNKQNR", 720: "RKNQNR", 912: "RKRQNN",
    160: "NRNKQR", 352: "NRKRQN", 544: "RNKNQR", 736: "RKNNQR", 928: "RKRNQN",
    176: "NRNKRQ", 368: "NRKRNQ", 560: "RNKNRQ", 752: "RKNNRQ", 944: "RKRNNQ",
}  # fmt: skip

# Bishop placements, keyed by idn mod 16; "-" marks a square left for the kings table.
_BISHOPS_TABLE: tuple[str, ...] = (
    "BB------",
    "B--B----",
    "B----B--",
    "B------B",
    "-BB-----",
    "--BB----",
    "--B--B--",
    "--B----B",
    "-B--B---",
    "---BB---",
    "----BB--",
    "----B--B",
    "-B----B-",
    "---B--B-",
    "-----BB-",
    "------BB",
)


def back_rank(idn: int) -> str:
    """White's back rank for position *idn*, a-file first."""
    if not 0 <= idn <= 959:
        raise ValueError(f"Chess960 index out of range: {idn}")
    bishops = _BISHOPS_TABLE[idn % 16]
    others = iter(_KINGS_TABLE[idn - idn % 16])
    return "".join(next(others) if slot == "-" else slot for slot in bishops)


def generate_chess960_fen(idn: int | None = None, rng: random.Random | None = None) -> str:
    """Starting FEN for Chess960 position *idn*.

    A missing or out-of-range *idn* is drawn uniformly from 0–959.
    """
    if idn is None or not 0 <= idn <= 959:
        idn = (rng or random).randrange(960)
    white = back_rank(idn)
    return f"{white.lower()}/pppppppp/8/8/8/8/PPPPPPPP/{white} w KQkq - 0 1"
