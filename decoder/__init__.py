"""
decoder — Chuck Norris token stream back to text.

Splits a line into (marker, count-field) blocks, runs three independent
structural checks, and only then rebuilds the bit string and the text.
"""

from decoder.chuck_decoder import DecodeResult, decode
from decoder.validator import (
    InvalidEncoding,
    InvalidEncodingError,
    InvalidReason,
    is_valid,
    validate,
)

__all__ = [
    "DecodeResult",
    "InvalidEncoding",
    "InvalidEncodingError",
    "InvalidReason",
    "decode",
    "is_valid",
    "validate",
]
