"""
tests/conftest.py — Shared pytest fixtures.

Every test gets its own JSONL log directory so no run writes into ./logs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from core.logger import CipherLogger, configure_logger


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[CipherLogger]:
    """Point the structured logger singleton at a per-test temp directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("CIPHER_LOG_DIR", str(log_dir))
    monkeypatch.delenv("CIPHER_CONFIG", raising=False)
    logger = configure_logger(log_dir)
    yield logger
    logger.close()
