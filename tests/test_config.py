"""
tests/test_config.py — pytest tests for core.config.load_config.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import CipherConfig, ConsoleConfig, LoggingConfig, load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "cipher.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:

    def test_bundled_file_matches_defaults(self) -> None:
        assert load_config() == CipherConfig()

    def test_partial_override(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "console:\n  exit_word: quit\nlogging:\n  level: DEBUG\n")
        config = load_config(path)
        assert config.console.exit_word == "quit"
        assert config.console.bye_message == ConsoleConfig().bye_message
        assert config.logging.level == "DEBUG"
        assert config.logging.jsonl_enabled is True

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, "")) == CipherConfig()

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write(tmp_path, "logging:\n  jsonl_enabled: false\n")
        monkeypatch.setenv("CIPHER_CONFIG", str(path))
        assert load_config().logging.jsonl_enabled is False

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CIPHER_CONFIG", str(tmp_path / "nope.yaml"))
        with pytest.raises(FileNotFoundError):
            load_config()

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "- just\n- a list\n",
            "encoding:\n  bits: 8\n",
            "console:\n  colour: red\n",
            "console:\n  exit_word: ''\n",
            "console:\n  exit_word: decode\n",
            "logging:\n  level: LOUD\n",
            "logging:\n  jsonl_enabled: maybe\n",
            "console:\n  invalid_message: 5\n",
            "console:\n  operation_prompt: [a, b]\n",
            "console: just-a-string\n",
            "logging:\n  log_dir: 5\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, text: str) -> None:
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, text))

    def test_resolved_log_dir_expands_home(self) -> None:
        resolved = LoggingConfig(log_dir="~/cipher-logs").resolved_log_dir
        assert "~" not in str(resolved)
        assert resolved.name == "cipher-logs"
