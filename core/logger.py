"""
core/logger.py — JSONL structured logger for the Chuck Norris cipher.

CipherLogger writes one JSON object per line to <log_dir>/cipher_{date}.jsonl,
rotating automatically each day. WARN/ERROR/CRITICAL are also mirrored
to Python stdlib logging (stderr). Thread-safe via threading.Lock.

Usage::

    from core.logger import get_logger
    log = get_logger()
    log.info("controller", "operation_received", {"operation": "encode"})
    log.perf("encoder", "encode_done", latency_ms=0.12, data={"tokens": 6})
"""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

# ── stdlib mirror logger (stderr for WARN+) ──────────────────
_stdlib = logging.getLogger("cipher")
if not _stdlib.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s — %(message)s"))
    _stdlib.addHandler(_handler)
_stdlib.setLevel(logging.WARNING)
_stdlib.propagate = False

# ── Default log directory (relative to the working directory) ─
_DEFAULT_LOG_DIR = "logs"

# ── Singleton storage ─────────────────────────────────────────
_instance: Optional["CipherLogger"] = None
_instance_lock = threading.Lock()


class CipherLogger:
    """
    JSONL structured logger for the cipher adapters.

    Each call to a log method appends a single JSON line to
    ``<log_dir>/cipher_{YYYY-MM-DD}.jsonl``. A new file is opened
    automatically when the calendar date changes.

    Fields written per entry:

    .. code-block:: json

        {
          "timestamp_iso": "2026-10-19T09:12:01.123456+00:00",
          "level": "INFO",
          "phase": "controller",
          "event": "decode_done",
          "data": {"chars": 1},
          "latency_ms": 0.084
        }

    ``latency_ms`` is omitted when ``None``. With ``enabled=False`` nothing
    is written to disk; stderr mirroring still happens.

    Use :func:`get_logger` rather than instantiating directly.

    Args:
        log_dir: Directory receiving the daily JSONL files.
        enabled: Whether to write JSONL files at all.
    """

    def __init__(self, log_dir: Path | str = _DEFAULT_LOG_DIR, enabled: bool = True) -> None:
        self._lock = threading.Lock()
        self._log_dir = Path(log_dir)
        self._enabled = enabled
        self._file: Optional[Any] = None
        self._current_date: str = ""
        self._write_startup()

    @property
    def log_dir(self) -> Path:
        """Directory the JSONL files are written to."""
        return self._log_dir

    @property
    def enabled(self) -> bool:
        """True when entries are persisted to JSONL files."""
        return self._enabled

    # ──────────────────────────────────────────
    # Public logging methods
    # ──────────────────────────────────────────

    def info(self, phase: str, event: str, data: Optional[dict] = None) -> None:
        """
        Write an INFO-level structured log entry.

        Args:
            phase: Subsystem (e.g. ``'controller'``, ``'cli'``).
            event: Short event identifier (e.g. ``'encode_done'``).
            data: Optional dict of additional key-value context.
        """
        self._write("INFO", phase, event, data)

    def warn(self, phase: str, event: str, data: Optional[dict] = None) -> None:
        """Write a WARN-level entry and mirror to stderr via stdlib logging."""
        self._write("WARN", phase, event, data)
        _stdlib.warning("[%s] %s | %s", phase, event, data or {})

    def error(self, phase: str, event: str, data: Optional[dict] = None) -> None:
        """Write an ERROR-level entry and mirror to stderr via stdlib logging."""
        self._write("ERROR", phase, event, data)
        _stdlib.error("[%s] %s | %s", phase, event, data or {})

    def critical(self, phase: str, event: str, data: Optional[dict] = None) -> None:
        """Write a CRITICAL-level entry and mirror to stderr via stdlib logging."""
        self._write("CRITICAL", phase, event, data)
        _stdlib.critical("[%s] %s | %s", phase, event, data or {})

    def perf(
        self,
        phase: str,
        event: str,
        latency_ms: float,
        data: Optional[dict] = None,
    ) -> None:
        """
        Write a PERF-level entry for latency tracking.

        Args:
            phase: Subsystem the measurement belongs to.
            event: What was measured (e.g. ``'decode_done'``).
            latency_ms: Measured latency in milliseconds.
            data: Optional additional context dict.
        """
        self._write("PERF", phase, event, data, latency_ms=latency_ms)

    def flush(self) -> None:
        """Flush the underlying file buffer immediately."""
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()

    def close(self) -> None:
        """Close the current JSONL file; a later write reopens it."""
        with self._lock:
            if self._file and not self._file.closed:
                self._file.close()
            self._file = None
            self._current_date = ""

    # ──────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────

    def _write(
        self,
        level: str,
        phase: str,
        event: str,
        data: Optional[dict],
        latency_ms: Optional[float] = None,
    ) -> None:
        """Serialise and append one JSON line to the log file."""
        if not self._enabled:
            return

        now = datetime.now(tz=timezone.utc)
        record: dict[str, Any] = {
            "timestamp_iso": now.isoformat(),
            "level": level,
            "phase": phase,
            "event": event,
            "data": data or {},
        }
        if latency_ms is not None:
            record["latency_ms"] = round(latency_ms, 3)

        line = json.dumps(record, ensure_ascii=False, separators=(",", ":"))

        with self._lock:
            self._rotate_if_needed(now)
            if self._file and not self._file.closed:
                self._file.write(line + "\n")
                self._file.flush()

    def _rotate_if_needed(self, now: datetime) -> None:
        """
        Open a new log file if the calendar date has changed.

        Called inside ``self._lock`` — do not call from outside.
        """
        today = now.strftime("%Y-%m-%d")
        if today != self._current_date or self._file is None:
            if self._file and not self._file.closed:
                self._file.close()
            self._current_date = today
            self._log_dir.mkdir(parents=True, exist_ok=True)
            log_path = self._log_dir / f"cipher_{today}.jsonl"
            self._file = open(log_path, "a", encoding="utf-8", buffering=1)  # noqa: WPS515

    def _write_startup(self) -> None:
        """Write a startup entry with Python version and platform."""
        self.info(
            phase="system",
            event="startup",
            data={
                "python_version": sys.version,
                "platform": platform.platform(),
                "timestamp_local": datetime.now().isoformat(),
            },
        )


# ──────────────────────────────────────────────────────────────
# Singleton accessors
# ──────────────────────────────────────────────────────────────

def get_logger() -> CipherLogger:
    """
    Return the process-wide :class:`CipherLogger`, creating it on first use.

    The first instance writes to ``$CIPHER_LOG_DIR`` (default ``logs``).
    Call :func:`configure_logger` to point it somewhere else.
    """
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = CipherLogger(os.environ.get("CIPHER_LOG_DIR", _DEFAULT_LOG_DIR))
    return _instance


def configure_logger(log_dir: Path | str, enabled: bool = True) -> CipherLogger:
    """
    Replace the singleton with a logger writing to ``log_dir``.

    The previous instance (if any) is closed first.

    Args:
        log_dir: Directory for the daily JSONL files.
        enabled: Set ``False`` to suppress all file output.

    Returns:
        The new singleton :class:`CipherLogger`.
    """
    global _instance
    with _instance_lock:
        if _instance is not None:
            _instance.close()
        _instance = CipherLogger(log_dir, enabled=enabled)
    return _instance
