"""Reactions to clicked notifications."""

import os
import shlex
import subprocess

from .log import get_logger

_log = get_logger("handlers")


def _browser_command(browser: str | None) -> list[str]:
    """Resolve the browser command: explicit setting, then $BROWSER, then xdg-open."""
    command = browser or os.environ.get("BROWSER") or "xdg-open"
    return shlex.split(command)


def open_link(url: str, browser: str | None = None) -> bool:
    """Open a url in the browser.

    Blocks until the browser command exits, which for some browsers is when
    the window closes; callers on the event loop run this in a thread.

    Returns:
        True if the browser command ran successfully, False otherwise
    """
    try:
        cmd = [*_browser_command(browser), url]
    except ValueError as e:
        _log.warning("could not open %s: bad browser command: %s", url, e)
        return False

    try:
        subprocess.run(cmd, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, OSError) as e:
        _log.warning("could not open %s with %s: %s", url, cmd[0], e)
        return False

    _log.info("opened %s", url)
    return True
