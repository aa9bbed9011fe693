"""Shared logging for mastonotify.

All components log to ~/.local/state/mastonotify/logs/mastonotify.log.
Filter with grep: grep 'mastonotify.desktop' ~/.local/state/mastonotify/logs/mastonotify.log
"""

import logging
import sys

from .paths import get_log_path

_FORMAT = "%(asctime)s %(name)s %(message)s"

_handler = logging.FileHandler(get_log_path("mastonotify"))
_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))

_root = logging.getLogger("mastonotify")
_root.addHandler(_handler)
_root.setLevel(logging.INFO)
# don't propagate to root logger (avoids duplicate output if someone
# configures the root logger elsewhere)
_root.propagate = False

_console: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)


def enable_console(verbose: bool = False) -> None:
    """Echo log records to stderr, for running the daemon in the foreground."""
    global _console

    if verbose:
        _root.setLevel(logging.DEBUG)

    if _console is not None:
        return

    _console = logging.StreamHandler(sys.stderr)
    _console.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    _root.addHandler(_console)
