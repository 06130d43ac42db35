"""
decoder/chuck_decoder.py — Validate-then-decode pipeline.

Drives a :class:`~core.fsm.DecodeFSM` through::

    START ─► SPLIT ─► BLOCK_CHECK ─► LENGTH_CHECK ─► DECODE ─► DONE
                          │               │
                          └──► INVALID ◄──┘

and returns a :class:`DecodeResult` — either the decoded text or an
:class:`~decoder.validator.InvalidEncoding`. Partial output is never
returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from core.constants import DecodeState
from core.fsm import DecodeFSM
from decoder.blocks import Block, split_blocks
from decoder.validator import (
    InvalidEncoding,
    InvalidEncodingError,
    check_bit_length,
    check_blocks,
)
from encoder.bits import bits_to_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    """
    Outcome of :func:`decode`: exactly one of ``text`` / ``error`` is set.

    Attributes:
        text: Decoded text on success.
        error: Failure value on rejection.
        history: FSM transition records of the run, oldest first.
    """

    text: Optional[str] = None
    error: Optional[InvalidEncoding] = None
    history: list[dict] = field(default_factory=list, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        """True when the line decoded successfully."""
        return self.error is None

    def unwrap(self) -> str:
        """
        Return the decoded text.

        Raises:
            InvalidEncodingError: If the line was rejected.
        """
        if self.error is not None:
            raise InvalidEncodingError(self.error)
        return self.text or ""


def blocks_to_bits(blocks: Sequence[Block]) -> str:
    """Expand validated blocks into the bit string they encode."""
    return "".join(block.to_bits() for block in blocks)


def decode(line: str) -> DecodeResult:
    """
    Decode a Chuck Norris encoded line.

    >>> decode("0 0 00 0000 0 00").text
    'C'
    >>> decode("0 00").error.reason
    <InvalidReason.BAD_LENGTH: 'BAD_LENGTH'>

    Args:
        line: Space-separated marker/count-field stream.

    Returns:
        A :class:`DecodeResult` holding the text, or the failure value.
    """
    fsm = DecodeFSM()

    fsm.transition(DecodeState.SPLIT)
    blocks = split_blocks(line)

    fsm.transition(DecodeState.BLOCK_CHECK, reason=f"{len(blocks)} blocks")
    try:
        check_blocks(blocks)
        fsm.transition(DecodeState.LENGTH_CHECK)
        check_bit_length(blocks)
    except InvalidEncodingError as exc:
        fsm.transition(DecodeState.INVALID, reason=exc.reason.value)
        logger.debug("rejected at %s: %s", fsm.failed_stage, exc)
        return DecodeResult(error=exc.failure, history=fsm.get_history())

    fsm.transition(DecodeState.DECODE)
    text = bits_to_text(blocks_to_bits(blocks))
    fsm.transition(DecodeState.DONE, reason=f"{len(text)} chars")
    return DecodeResult(text=text, history=fsm.get_history())
