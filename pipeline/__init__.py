"""
pipeline — Interactive command loop.

The controller reads an operation word, dispatches to the encoder or the
decoder, and prints the result.
"""
