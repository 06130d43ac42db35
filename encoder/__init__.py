"""
encoder — Text to Chuck Norris token stream.

Renders each character as 7 bits, partitions the bit string into runs and
serialises every run as a (marker, count-field) token.
"""

from encoder.bits import UnsupportedCharacterError
from encoder.chuck_encoder import encode

__all__ = ["UnsupportedCharacterError", "encode"]
