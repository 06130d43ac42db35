"""
encoder/bits.py — Character ↔ 7-bit binary conversion shared by both directions.

The encoder turns text into a bit string here; the decoder turns a
length-checked bit string back into text.
"""

from __future__ import annotations

from typing import Iterator

from core.constants import CipherConstants as C


class UnsupportedCharacterError(ValueError):
    """
    Raised when a character's code does not fit in 7 bits.

    Args:
        char: The offending character.
        position: Zero-based index of ``char`` in the input text.
    """

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        self.code = ord(char)
        super().__init__(
            f"Unsupported character {char!r} (code {self.code}) at position {position}: "
            f"only codes 0..{C.MAX_CHAR_CODE} can be encoded"
        )


def char_to_bits(char: str, position: int = 0) -> str:
    """
    Render one character as a zero-padded 7-character binary string.

    >>> char_to_bits("C")
    '1000011'

    Raises:
        UnsupportedCharacterError: If ``ord(char)`` exceeds 127.
    """
    code = ord(char)
    if code > C.MAX_CHAR_CODE:
        raise UnsupportedCharacterError(char, position)
    return format(code, f"0{C.BITS_PER_CHAR}b")


def text_to_bits(text: str) -> str:
    """Concatenate the 7-bit renderings of every character in ``text``."""
    return "".join(char_to_bits(char, i) for i, char in enumerate(text))


def iter_chunks(bits: str, size: int = C.BITS_PER_CHAR) -> Iterator[str]:
    """Yield consecutive ``size``-long slices of ``bits``."""
    for start in range(0, len(bits), size):
        yield bits[start:start + size]


def bits_to_text(bits: str) -> str:
    """
    Convert a bit string back into text, 7 bits per character.

    >>> bits_to_text("1000011")
    'C'

    Raises:
        ValueError: If the length is not a multiple of 7 or a non-binary
            character is present. Callers are expected to validate first;
            this never truncates or pads.
    """
    if len(bits) % C.BITS_PER_CHAR != 0:
        raise ValueError(
            f"Bit string length {len(bits)} is not a multiple of {C.BITS_PER_CHAR}"
        )
    return "".join(chr(int(chunk, 2)) for chunk in iter_chunks(bits))
