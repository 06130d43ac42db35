"""
tests/test_logger.py — pytest tests for core.logger.CipherLogger.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from core.logger import CipherLogger, configure_logger, get_logger


def _records(log_dir: Path) -> list[dict]:
    lines: list[str] = []
    for path in sorted(log_dir.glob("cipher_*.jsonl")):
        lines.extend(path.read_text(encoding="utf-8").splitlines())
    return [json.loads(line) for line in lines]


class TestCipherLogger:

    def test_startup_entry(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path)
        log.close()
        records = _records(tmp_path)
        assert records[0]["event"] == "startup"
        assert records[0]["phase"] == "system"
        assert "python_version" in records[0]["data"]

    def test_levels_and_fields(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path)
        log.info("controller", "operation_received", {"operation": "encode"})
        log.warn("controller", "decode_invalid", {"reason": "BAD_LENGTH"})
        log.perf("controller", "decode_done", latency_ms=1.23456, data={"chars": 3})
        log.close()

        records = _records(tmp_path)[1:]
        assert [r["level"] for r in records] == ["INFO", "WARN", "PERF"]
        assert records[0]["data"] == {"operation": "encode"}
        assert "latency_ms" not in records[0]
        assert records[2]["latency_ms"] == 1.235
        assert all(r["timestamp_iso"].endswith("+00:00") for r in records)

    def test_warn_mirrors_to_stdlib(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path)
        with patch("core.logger._stdlib") as stdlib:
            log.warn("cli", "unsupported_character", {"position": 0})
            log.info("cli", "encode_done")
        log.close()
        stdlib.warning.assert_called_once()
        assert "unsupported_character" in stdlib.warning.call_args.args

    def test_error_and_critical_levels(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path)
        with patch("core.logger._stdlib") as stdlib:
            log.error("cli", "config_invalid", {"error": "bad"})
            log.critical("cli", "unhandled_exception", {"traceback": "tb"})
        log.close()

        records = _records(tmp_path)[1:]
        assert [(r["level"], r["event"]) for r in records] == [
            ("ERROR", "config_invalid"),
            ("CRITICAL", "unhandled_exception"),
        ]
        assert records[0]["data"] == {"error": "bad"}
        stdlib.error.assert_called_once()
        stdlib.critical.assert_called_once()
        stdlib.warning.assert_not_called()

    def test_disabled_writes_nothing(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path / "off", enabled=False)
        log.info("controller", "noop")
        log.flush()
        assert not (tmp_path / "off").exists()
        assert log.enabled is False

    def test_reopens_after_close(self, tmp_path: Path) -> None:
        log = CipherLogger(tmp_path)
        log.close()
        log.info("controller", "after_close")
        log.close()
        assert _records(tmp_path)[-1]["event"] == "after_close"


class TestSingleton:

    def test_get_logger_returns_same_instance(self) -> None:
        assert get_logger() is get_logger()

    def test_configure_replaces_instance(self, tmp_path: Path) -> None:
        first = get_logger()
        second = configure_logger(tmp_path / "other")
        assert second is not first
        assert get_logger() is second
        assert second.log_dir == tmp_path / "other"
