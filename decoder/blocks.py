"""
decoder/blocks.py — Grouping of the flat token stream into (marker, count-field) blocks.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import MARKER_TO_BIT


@dataclass(frozen=True)
class Block:
    """
    One (marker, count-field) pair reconstructed from the encoded line.

    Attributes:
        marker: Expected to be ``'0'`` or ``'00'``.
        count: Expected to be a non-empty run of ``'0'``; ``''`` when the
            line had an odd number of substrings and this is the last block.
    """

    marker: str
    count: str

    @property
    def bit(self) -> str:
        """Bit value the marker stands for. Only meaningful on a valid block."""
        return MARKER_TO_BIT[self.marker]

    def to_bits(self) -> str:
        """Expand the block to its run of bits."""
        return self.bit * len(self.count)


def split_blocks(line: str) -> list[Block]:
    """
    Split ``line`` on whitespace and pair the pieces two at a time.

    If the number of pieces is odd, the final block gets an empty count
    field so the validator can reject it.

    >>> split_blocks("0 0 00 0000")
    [Block(marker='0', count='0'), Block(marker='00', count='0000')]
    >>> split_blocks("0 0 00")
    [Block(marker='0', count='0'), Block(marker='00', count='')]
    """
    pieces = line.split()
    blocks: list[Block] = []
    for i in range(0, len(pieces), 2):
        count = pieces[i + 1] if i + 1 < len(pieces) else ""
        blocks.append(Block(pieces[i], count))
    return blocks
