"""Configuration management for mastonotify."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import APP_NAME
from .log import get_logger

_log = get_logger("config")


def get_config_path() -> Path:
    """Get the path to the mastonotify config file."""
    xdg_config = Path.home() / ".config"
    return xdg_config / "mastonotify" / "config.toml"


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# mastonotify configuration

[mastodon]
# Instance host, e.g. "hachyderm.io", and your user name on it.
# Both can also be given on the command line with --host/--user.
host = ""
user = ""

[notifications]
# How long a desktop notification stays up, in milliseconds
timeout = 5000
# freedesktop.org icon name, e.g. "dialog-information"
icon = ""
# Extra milliseconds a notification is remembered after its timeout,
# since notification daemons may keep it on screen a little longer
grace = 200

[links]
# Command used to open a clicked notification's status.
# Empty means $BROWSER, falling back to xdg-open.
browser = ""
"""


@dataclass
class MastodonConfig:
    """Which account to follow."""

    host: str = ""
    user: str = ""

    @property
    def account(self) -> str:
        """Keyring key for this account, e.g. "alice@hachyderm.io"."""
        return f"{self.user}@{self.host}"


@dataclass
class NotificationsConfig:
    """How notifications are displayed and how long they are remembered."""

    timeout: int = 5000  # milliseconds
    icon: str = ""
    grace: int = 200  # milliseconds
    app_name: str = APP_NAME


@dataclass
class LinksConfig:
    """Configuration for opening a clicked notification's link."""

    browser: str = ""  # empty: $BROWSER, then xdg-open


@dataclass
class Config:
    """mastonotify configuration."""

    mastodon: MastodonConfig = field(default_factory=MastodonConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    links: LinksConfig = field(default_factory=LinksConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        _log.warning("could not load config from %s: %s", config_path, e)
        return Config()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse config dict into Config object."""
    mastodon_data = data.get("mastodon", {})
    mastodon = MastodonConfig(
        host=mastodon_data.get("host", ""),
        user=mastodon_data.get("user", ""),
    )

    # Use dataclass defaults for anything unspecified
    defaults = NotificationsConfig()
    notifications_data = data.get("notifications", {})
    notifications = NotificationsConfig(
        **{
            name: notifications_data.get(name, getattr(defaults, name))
            for name in defaults.__dataclass_fields__
        }
    )

    links_data = data.get("links", {})
    links = LinksConfig(browser=links_data.get("browser", ""))

    return Config(mastodon=mastodon, notifications=notifications, links=links)


def ensure_config_exists() -> Path:
    """Ensure the config file exists, creating with defaults if needed."""
    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(get_default_config())

    return config_path
