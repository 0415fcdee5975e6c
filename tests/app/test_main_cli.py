from __future__ import annotations

import os
from pathlib import Path

import pytest

from app import main as app_main
from sankeysync.io.config import SankeySettings


def test_main_renders_inline(monkeypatch, tmp_path) -> None:
    called = {}

    def fake_streamlit_app(*, settings=None):
        called["settings"] = settings

    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "1")
    monkeypatch.chdir(tmp_path)
    # Patch the imported symbol used inside app.main (not the package attribute)
    monkeypatch.setattr(app_main, "streamlit_app", fake_streamlit_app, raising=True)

    app_main.main(["--data", str(tmp_path / "h.csv"), "--width", "1000"])

    s = called["settings"]
    assert isinstance(s, SankeySettings)
    assert s.data_path == str(tmp_path / "h.csv")
    assert s.width == 1000
    assert s.height == SankeySettings().height


def test_main_execs_streamlit(monkeypatch, tmp_path) -> None:
    # Ensure not in Streamlit context
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)

    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["exe"] = exe
        captured["cmd"] = cmd
        # Prevent process handoff
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    with pytest.raises(SystemExit):
        app_main.main(["--data", str(tmp_path), "--height", "500"])

    assert captured["cmd"][0] == captured["exe"]
    # Assert we launch `python -m streamlit run <path>`
    assert captured["cmd"][1:4] == ["-m", "streamlit", "run"]
    expected_main_path = str(Path(app_main.__file__).resolve())
    assert captured["cmd"][4] == expected_main_path
    dashdash_idx = captured["cmd"].index("--")
    passthrough = captured["cmd"][dashdash_idx + 1 :]
    assert passthrough == ["--data", str(tmp_path), "--height", "500"]


def test_resolve_settings_rejects_tiny_canvas(monkeypatch, tmp_path) -> None:
    from sankeysync.io.errors import IoConfigError

    monkeypatch.chdir(tmp_path)
    ns = app_main._parser().parse_args(["--width", "100"])
    with pytest.raises(IoConfigError):
        app_main.resolve_settings(ns)
