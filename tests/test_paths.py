"""Tests for mastonotify.paths."""

from pathlib import Path

from mastonotify.paths import get_log_path


def test_log_path_under_state_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    path = get_log_path("mastonotify")

    assert path == tmp_path / ".local" / "state" / "mastonotify" / "logs" / "mastonotify.log"
    assert path.parent.is_dir()
