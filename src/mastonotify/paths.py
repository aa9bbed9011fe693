"""Path utilities for mastonotify."""

from pathlib import Path


def get_state_dir() -> Path:
    """Get the mastonotify state directory: ~/.local/state/mastonotify/"""
    state_dir = Path.home() / ".local" / "state" / "mastonotify"
    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def get_log_dir() -> Path:
    log_dir = get_state_dir() / "logs"
    log_dir.mkdir(exist_ok=True)
    return log_dir


def get_log_path(name: str) -> Path:
    """Path to ~/.local/state/mastonotify/logs/{name}.log"""
    return get_log_dir() / f"{name}.log"
