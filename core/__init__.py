"""
core — Cipher constants, decode state machine, configuration and logging.
"""
