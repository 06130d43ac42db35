"""
encoder/chuck_encoder.py — Run-length encoder producing the Chuck Norris token stream.

Each run of identical bits becomes one token: marker ``0`` for a run of 1s,
``00`` for a run of 0s, followed by as many ``0`` characters as the run is
long. Tokens and their two halves are joined by single spaces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.constants import BIT_TO_MARKER, CipherConstants as C
from encoder.bits import text_to_bits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Run:
    """
    A maximal stretch of identical bits.

    Attributes:
        bit: ``'0'`` or ``'1'``.
        length: Number of consecutive bits, at least 1.
    """

    bit: str
    length: int

    def to_token(self) -> str:
        """Serialise as ``<marker> <count-field>``."""
        return f"{BIT_TO_MARKER[self.bit]}{C.SEPARATOR}{C.COUNT_CHAR * self.length}"


def find_runs(bits: str) -> list[Run]:
    """
    Partition ``bits`` into maximal runs, left to right.

    The first run is seeded from the first bit and scanning continues from
    the second one. An empty bit string has no runs.

    >>> find_runs("1000011")
    [Run(bit='1', length=1), Run(bit='0', length=4), Run(bit='1', length=2)]
    """
    if not bits:
        return []

    runs: list[Run] = []
    current = bits[0]
    length = 1
    for bit in bits[1:]:
        if bit == current:
            length += 1
        else:
            runs.append(Run(current, length))
            current = bit
            length = 1
    runs.append(Run(current, length))
    return runs


def encode(text: str) -> str:
    """
    Return the Chuck Norris encoding of ``text``.

    >>> encode("C")
    '0 0 00 0000 0 00'

    Empty text encodes to the empty string.

    Raises:
        UnsupportedCharacterError: If any character's code exceeds 127.
    """
    bits = text_to_bits(text)
    runs = find_runs(bits)
    encoded = C.SEPARATOR.join(run.to_token() for run in runs)
    logger.debug("encoded %d chars → %d runs", len(text), len(runs))
    return encoded
