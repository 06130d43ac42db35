"""
decoder/validator.py — Structural checks on a split Chuck Norris line.

Three independent rules, each its own function so every failure mode can be
exercised on its own:

a. every block's marker is exactly ``0`` or ``00``;
b. every block's count field is non-empty and made only of ``0``;
c. the total number of encoded bits is a multiple of 7.

A check that fails raises :class:`InvalidEncodingError` carrying an
:class:`InvalidEncoding` value that names the rule, the pipeline stage and
the offending block. The first violation wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from core.constants import VALID_MARKERS, CipherConstants as C, DecodeState
from decoder.blocks import Block, split_blocks


class InvalidReason(Enum):
    """Why a line was rejected."""

    EMPTY_INPUT = "EMPTY_INPUT"
    BAD_MARKER = "BAD_MARKER"
    BAD_COUNT_FIELD = "BAD_COUNT_FIELD"
    BAD_LENGTH = "BAD_LENGTH"


@dataclass(frozen=True)
class InvalidEncoding:
    """
    Typed failure value for a rejected line.

    Attributes:
        reason: Which rule failed.
        stage: Pipeline stage that rejected the line
            (``BLOCK_CHECK`` or ``LENGTH_CHECK``).
        message: Human-readable description.
        block_index: Zero-based index of the offending block, or ``None``
            when the failure concerns the line as a whole.
    """

    reason: InvalidReason
    stage: DecodeState
    message: str
    block_index: Optional[int] = None

    def to_dict(self) -> dict:
        """Serialise to a JSON-safe dict for structured logging."""
        return {
            "reason": self.reason.value,
            "stage": self.stage.value,
            "message": self.message,
            "block_index": self.block_index,
        }


class InvalidEncodingError(ValueError):
    """
    Raised when a line is not a well-formed Chuck Norris encoding.

    Args:
        failure: The :class:`InvalidEncoding` describing the violation.
    """

    def __init__(self, failure: InvalidEncoding) -> None:
        self.failure = failure
        super().__init__(failure.message)

    @property
    def reason(self) -> InvalidReason:
        return self.failure.reason


def _reject(
    reason: InvalidReason,
    stage: DecodeState,
    message: str,
    block_index: Optional[int] = None,
) -> InvalidEncodingError:
    return InvalidEncodingError(InvalidEncoding(reason, stage, message, block_index))


# ──────────────────────────────────────────────────────────────
# Individual rules
# ──────────────────────────────────────────────────────────────

def check_not_empty(blocks: Sequence[Block]) -> None:
    """Reject a line that contained nothing but whitespace."""
    if not blocks:
        raise _reject(
            InvalidReason.EMPTY_INPUT,
            DecodeState.BLOCK_CHECK,
            "encoded string is empty",
        )


def check_markers(blocks: Sequence[Block]) -> None:
    """Rule a: every marker is exactly ``'0'`` or ``'00'``."""
    for i, block in enumerate(blocks):
        if block.marker not in VALID_MARKERS:
            raise _reject(
                InvalidReason.BAD_MARKER,
                DecodeState.BLOCK_CHECK,
                f"block {i}: marker {block.marker!r} is not "
                f"{C.MARKER_ONES!r} or {C.MARKER_ZEROS!r}",
                block_index=i,
            )


def check_count_fields(blocks: Sequence[Block]) -> None:
    """Rule b: every count field is non-empty and contains only ``'0'``."""
    for i, block in enumerate(blocks):
        if not block.count:
            raise _reject(
                InvalidReason.BAD_COUNT_FIELD,
                DecodeState.BLOCK_CHECK,
                f"block {i}: count field is missing",
                block_index=i,
            )
        if block.count.strip(C.COUNT_CHAR):
            raise _reject(
                InvalidReason.BAD_COUNT_FIELD,
                DecodeState.BLOCK_CHECK,
                f"block {i}: count field {block.count!r} must contain only "
                f"{C.COUNT_CHAR!r}",
                block_index=i,
            )


def check_bit_length(blocks: Sequence[Block]) -> None:
    """Rule c: the encoded bits add up to a whole number of characters."""
    total = sum(len(block.count) for block in blocks)
    if total % C.BITS_PER_CHAR != 0:
        raise _reject(
            InvalidReason.BAD_LENGTH,
            DecodeState.LENGTH_CHECK,
            f"encoded bit length {total} is not a multiple of {C.BITS_PER_CHAR}",
        )


# ──────────────────────────────────────────────────────────────
# Grouped entry points
# ──────────────────────────────────────────────────────────────
# decode() calls check_blocks and check_bit_length one FSM stage at a time.
# validate and is_valid run the same rules in one go for callers that only
# need a verdict, not the text.

def check_blocks(blocks: Sequence[Block]) -> None:
    """Run the per-block rules (empty line, a, b) in order."""
    check_not_empty(blocks)
    check_markers(blocks)
    check_count_fields(blocks)


def validate(line: str) -> list[Block]:
    """
    Split ``line`` and run every rule.

    Returns:
        The validated blocks, ready to be expanded into bits.

    Raises:
        InvalidEncodingError: On the first violated rule.
    """
    blocks = split_blocks(line)
    check_blocks(blocks)
    check_bit_length(blocks)
    return blocks


def is_valid(line: str) -> bool:
    """Return True when ``line`` is a well-formed encoding."""
    try:
        validate(line)
    except InvalidEncodingError:
        return False
    return True
