from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from byteshift import cli


def test_cli_encrypt_then_decrypt(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "notes.txt"
    source.write_bytes(b"hello")

    assert cli.main(["-q", "encrypt", str(source)]) == 0
    encrypted = tmp_path / "notes.txt.encrypted"
    assert encrypted.read_bytes() == b"ifmmp"
    assert str(encrypted) in capsys.readouterr().out

    source.unlink()
    assert cli.main(["-q", "decrypt", str(encrypted)]) == 0
    assert source.read_bytes() == b"hello"


def test_cli_continues_after_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = tmp_path / "good.bin"
    good.write_bytes(b"\x00")
    missing = tmp_path / "missing.bin"

    exit_code = cli.main(["-q", "encrypt", str(missing), str(good)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert "Failed to open file for reading" in captured.err
    assert (tmp_path / "good.bin.encrypted").read_bytes() == b"\x01"


def test_cli_decrypt_requires_suffix_unless_forced(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "plain.txt"
    source.write_bytes(b"b")

    assert cli.main(["-q", "decrypt", str(source)]) == 1
    assert "does not end with '.encrypted'" in capsys.readouterr().err

    assert cli.main(["-q", "decrypt", "--force", str(source)]) == 0
    assert (tmp_path / "plain.txt.decrypted").read_bytes() == b"a"


def test_cli_out_dir_and_progress(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "data.bin"
    source.write_bytes(b"\x10\x20")
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    assert cli.main(["encrypt", "--out-dir", str(out_dir), str(source)]) == 0

    assert (out_dir / "data.bin.encrypted").read_bytes() == b"\x11\x21"
    assert "data.bin: 100%" in capsys.readouterr().err


def test_cli_gui_command_launches_app(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, bool] = {}

    def fake_run_gui() -> int:
        called["gui"] = True
        return 0

    monkeypatch.setattr(cli, "run_gui", fake_run_gui)
    assert cli.main(["gui"]) == 0
    assert called.get("gui") is True


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
