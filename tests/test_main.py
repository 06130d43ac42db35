"""
tests/test_main.py — CLI smoke tests for main.main().

Runs from a temporary working directory so JSONL logs land in tmp_path.
"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

import main as cli


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _records(log_dir: Path) -> list[dict]:
    lines: list[str] = []
    for path in sorted(log_dir.glob("cipher_*.jsonl")):
        lines.extend(path.read_text(encoding="utf-8").splitlines())
    return [json.loads(line) for line in lines]


class TestOneShot:

    def test_encode(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--encode", "C"]) == 0
        assert capsys.readouterr().out == "0 0 00 0000 0 00\n"

    def test_encode_unsupported(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--encode", "ü"]) == 1
        assert "Unsupported character" in capsys.readouterr().err

    def test_decode(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--decode", "0 0 00 0000 0 000 00 0000 0 00"]) == 0
        assert capsys.readouterr().out == "CC\n"

    def test_decode_invalid(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--decode", "0 00"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Encoded string is not valid" in captured.err

    def test_encode_and_decode_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            cli.main(["--encode", "a", "--decode", "0 0"])

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["--config", str(tmp_path / "nope.yaml"), "--encode", "a"]) == 2
        assert "Config file not found" in capsys.readouterr().err

    def test_missing_config_logged_as_error(self, tmp_path: Path) -> None:
        cli.main(["--config", str(tmp_path / "nope.yaml"), "--encode", "a"])
        errors = [r for r in _records(tmp_path / "logs") if r["level"] == "ERROR"]
        assert [r["event"] for r in errors] == ["config_invalid"]
        assert "Config file not found" in errors[0]["data"]["error"]

    @pytest.mark.parametrize(
        "body",
        ["logging:\n  log_dir: 5\n", "console:\n  invalid_message: [a]\n"],
    )
    def test_wrongly_typed_config_value(
        self,
        tmp_path: Path,
        body: str,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "typed.yaml"
        cfg.write_text(body, encoding="utf-8")
        assert cli.main(["--config", str(cfg), "--decode", "0 00"]) == 2
        assert "must be a string" in capsys.readouterr().err

    def test_jsonl_written_under_cwd(self, tmp_path: Path) -> None:
        cli.main(["--encode", "hi"])
        assert list((tmp_path / "logs").glob("cipher_*.jsonl"))

    def test_jsonl_disabled_by_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "quiet.yaml"
        cfg.write_text("logging:\n  jsonl_enabled: false\n  log_dir: quiet-logs\n", encoding="utf-8")
        assert cli.main(["--config", str(cfg), "--encode", "hi"]) == 0
        assert not (tmp_path / "quiet-logs").exists()


class TestInteractive:

    def test_session_on_stdin(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("encode\nC\nfoo\nexit\n"))
        assert cli.main([]) == 0
        out = capsys.readouterr().out
        assert "Encoded string:\n0 0 00 0000 0 00\n" in out
        assert "There is no 'foo' operation" in out
        assert out.rstrip().endswith("Bye")

    def test_unhandled_exception_exits_one(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _boom(self: object) -> None:
            raise RuntimeError("loop crashed")

        monkeypatch.setattr("pipeline.controller.CipherController.run", _boom)
        assert cli.main([]) == 1
        assert "RuntimeError: loop crashed" in capsys.readouterr().err
        critical = [r for r in _records(tmp_path / "logs") if r["level"] == "CRITICAL"]
        assert [r["event"] for r in critical] == ["unhandled_exception"]
        assert "loop crashed" in critical[0]["data"]["traceback"]

    def test_keyboard_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _interrupt(self: object) -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr("pipeline.controller.CipherController.run", _interrupt)
        assert cli.main([]) == 130
