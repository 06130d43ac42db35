"""
core/constants.py — All cipher constants for the Chuck Norris encoder.

Single frozen dataclass with typed constant groups: decode pipeline states
(Enum), character width, marker literals and token separator. None of these
are configurable — the scheme is fixed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


# ──────────────────────────────────────────────────────────────
# Decode pipeline states
# ──────────────────────────────────────────────────────────────

class DecodeState(Enum):
    """All valid states of the validate-then-decode pipeline."""

    START = "START"
    SPLIT = "SPLIT"
    BLOCK_CHECK = "BLOCK_CHECK"
    LENGTH_CHECK = "LENGTH_CHECK"
    DECODE = "DECODE"
    INVALID = "INVALID"
    DONE = "DONE"


# ──────────────────────────────────────────────────────────────
# Frozen constants dataclass
# ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CipherConstants:
    """
    Frozen dataclass holding the fixed parameters of the encoding.

    Use the class attributes directly — do not instantiate this class.

    Example::

        from core.constants import CipherConstants as C, DecodeState

        print(C.BITS_PER_CHAR)        # 7
        print(C.MARKER_ONES)          # '0'
        print(DecodeState.DONE)       # DecodeState.DONE
    """

    # ── Character width ───────────────────────────────────────
    BITS_PER_CHAR: ClassVar[int] = 7
    """Every character is rendered as exactly this many bits."""

    MAX_CHAR_CODE: ClassVar[int] = 127
    """Largest character code that fits in BITS_PER_CHAR bits."""

    # ── Token literals ────────────────────────────────────────
    MARKER_ONES: ClassVar[str] = "0"
    """Marker that introduces a run of 1-bits."""

    MARKER_ZEROS: ClassVar[str] = "00"
    """Marker that introduces a run of 0-bits."""

    COUNT_CHAR: ClassVar[str] = "0"
    """The only character allowed in a count field."""

    SEPARATOR: ClassVar[str] = " "
    """Separator between markers and count fields in the encoded line."""


# ──────────────────────────────────────────────────────────────
# Module-level convenience aliases
# ──────────────────────────────────────────────────────────────

#: Convenience alias — ``from core.constants import C``
C = CipherConstants

#: Marker → bit value it stands for.
MARKER_TO_BIT: dict[str, str] = {
    C.MARKER_ONES: "1",
    C.MARKER_ZEROS: "0",
}

#: Bit value → marker that introduces a run of it.
BIT_TO_MARKER: dict[str, str] = {bit: marker for marker, bit in MARKER_TO_BIT.items()}

#: The two legal markers.
VALID_MARKERS: frozenset[str] = frozenset(MARKER_TO_BIT)
