"""
core/config.py — Typed configuration loader for the Chuck Norris cipher.

Loads config/cipher.yaml and validates all values into typed dataclasses.
Only the console adapter and logging are configurable; the encoding itself
is fixed in :mod:`core.constants`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARN", "ERROR"})


# ──────────────────────────────────────────────
# Dataclass hierarchy — mirrors cipher.yaml
# ──────────────────────────────────────────────


@dataclass(frozen=True)
class ConsoleConfig:
    """Prompts and keywords of the interactive command loop."""

    operation_prompt: str = "Please input operation (encode/decode/exit):"
    encode_prompt: str = "Input string:"
    decode_prompt: str = "Input encoded string:"
    encoded_header: str = "Encoded string:"
    decoded_header: str = "Decoded string:"
    invalid_message: str = "Encoded string is not valid"
    exit_word: str = "exit"
    bye_message: str = "Bye"


@dataclass(frozen=True)
class LoggingConfig:
    """Structured JSONL logging configuration."""

    level: str = "INFO"
    log_dir: str = "logs"
    jsonl_enabled: bool = True

    @property
    def resolved_log_dir(self) -> Path:
        """Return the log directory as a Path, expanding ~ if needed."""
        return Path(os.path.expanduser(self.log_dir))


@dataclass(frozen=True)
class CipherConfig:
    """Root configuration object — single source of truth for all settings."""

    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ──────────────────────────────────────────────
# Loader
# ──────────────────────────────────────────────


def load_config(config_path: Path | str | None = None) -> CipherConfig:
    """
    Load, validate, and return a CipherConfig from a YAML file.

    The search order for the config file is:
    1. *config_path* argument (if provided)
    2. CIPHER_CONFIG environment variable
    3. ``config/cipher.yaml`` at the project root
    4. Built-in defaults (no file required)

    Args:
        config_path: Optional path to a ``cipher.yaml`` file.

    Returns:
        A fully populated and frozen :class:`CipherConfig` instance.

    Raises:
        ValueError: If a YAML field is unknown or has an invalid value.
        FileNotFoundError: If *config_path* is explicitly given but does not exist.
    """
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = Path(config_path)
        if not resolved_path.exists():
            raise FileNotFoundError(f"Config file not found: {resolved_path}")
    elif "CIPHER_CONFIG" in os.environ:
        resolved_path = Path(os.environ["CIPHER_CONFIG"])
        if not resolved_path.exists():
            raise FileNotFoundError(
                f"CIPHER_CONFIG points to missing file: {resolved_path}"
            )
    else:
        candidate = Path(__file__).resolve().parent.parent / "config" / "cipher.yaml"
        if candidate.exists():
            resolved_path = candidate

    raw: dict = {}
    if resolved_path is not None:
        logger.info("Loading config from: %s", resolved_path)
        with resolved_path.open("r", encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must be a YAML mapping, got: {type(loaded)}")
        raw = loaded
    else:
        logger.info("No config file found — using built-in defaults")

    unknown = set(raw) - {"console", "logging"}
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")

    try:
        console_cfg = ConsoleConfig(**(raw.get("console") or {}))
        log_cfg = LoggingConfig(**(raw.get("logging") or {}))
    except TypeError as exc:
        raise ValueError(f"Invalid config value: {exc}") from exc

    _validate_config(console_cfg, log_cfg)

    config = CipherConfig(console=console_cfg, logging=log_cfg)
    logger.debug("Config loaded: %s", config)
    return config


def _validate_config(console: ConsoleConfig, log: LoggingConfig) -> None:
    """
    Validate cross-field constraints on the loaded configuration.

    Raises:
        ValueError: If any configured value violates a hard constraint.
    """
    for section, cfg in (("console", console), ("logging", log)):
        for f in fields(cfg):
            value = getattr(cfg, f.name)
            if f.type in ("str", str) and not isinstance(value, str):
                raise ValueError(
                    f"{section}.{f.name} must be a string, got {value!r}"
                )
    if not isinstance(console.exit_word, str) or not console.exit_word.strip():
        raise ValueError("console.exit_word must be a non-empty string")
    if console.exit_word in {"encode", "decode"}:
        raise ValueError(
            f"console.exit_word must not shadow an operation, got '{console.exit_word}'"
        )
    if log.level not in _LOG_LEVELS:
        raise ValueError(
            f"logging.level must be one of {sorted(_LOG_LEVELS)}, got '{log.level}'"
        )
    if not isinstance(log.jsonl_enabled, bool):
        raise ValueError(
            f"logging.jsonl_enabled must be a boolean, got {log.jsonl_enabled!r}"
        )
