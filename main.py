"""
main.py — Chuck Norris cipher entry point.

Parses CLI args, loads configuration, and either runs a one-shot
encode/decode or the interactive command loop on stdin/stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from typing import Optional, Sequence

# ──────────────────────────────────────────────────────────────
# Argument parsing
# ──────────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chuck-norris",
        description="Chuck Norris unary cipher — encode text, decode token streams",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--encode",
        metavar="TEXT",
        default=None,
        help="Encode TEXT, print the token stream and exit",
    )
    mode.add_argument(
        "--decode",
        metavar="LINE",
        default=None,
        help="Decode LINE, print the text and exit",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to a cipher.yaml file (overrides CIPHER_CONFIG)",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default=None,
        help="Minimum level for stderr logging (defaults to the config value)",
    )
    return p


# ──────────────────────────────────────────────────────────────
# One-shot modes
# ──────────────────────────────────────────────────────────────

def _run_encode(text: str) -> int:
    from core.logger import get_logger
    from encoder import UnsupportedCharacterError, encode

    try:
        encoded = encode(text)
    except UnsupportedCharacterError as exc:
        get_logger().warn("cli", "unsupported_character", {"position": exc.position, "code": exc.code})
        print(str(exc), file=sys.stderr)
        return 1
    get_logger().info("cli", "encode_done", {"chars": len(text)})
    print(encoded)
    return 0


def _run_decode(line: str, invalid_message: str) -> int:
    from core.logger import get_logger
    from decoder import decode

    result = decode(line)
    if result.error is not None:
        get_logger().warn("cli", "decode_invalid", result.error.to_dict())
        print(invalid_message, file=sys.stderr)
        return 1
    get_logger().info("cli", "decode_done", {"chars": len(result.text or "")})
    print(result.text)
    return 0


# ──────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Application entry point. Returns process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from core.config import load_config
    from core.logger import configure_logger, get_logger
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        get_logger().error("cli", "config_invalid", {"config": args.config, "error": str(exc)})
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    level_name = args.log_level or config.logging.level
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level_name, logging.INFO))

    log = configure_logger(
        config.logging.resolved_log_dir,
        enabled=config.logging.jsonl_enabled,
    )
    log.info("cli", "args_parsed", {
        "encode": args.encode is not None,
        "decode": args.decode is not None,
        "config": args.config,
        "log_level": level_name,
    })

    try:
        if args.encode is not None:
            return _run_encode(args.encode)
        if args.decode is not None:
            return _run_decode(args.decode, config.console.invalid_message)

        from pipeline.controller import CipherController
        CipherController(config).run()
        return 0
    except KeyboardInterrupt:
        log.info("cli", "interrupted", {})
        return 130
    except Exception:                              # noqa: BLE001
        tb = traceback.format_exc()
        print(tb, file=sys.stderr)
        log.critical("cli", "unhandled_exception", {"traceback": tb})
        return 1
    finally:
        log.flush()


if __name__ == "__main__":
    sys.exit(main())
