"""CLI entry point for mastonotify.

mastonotify shows Mastodon notifications on the desktop:
- daemon: stream notifications and show them, opening the status on click
- setup: authorize an account and store its token in the keyring
- config: manage the config file
"""

import argparse
import asyncio
import sys

import aiohttp

from .config import Config, ensure_config_exists, get_config_path, load_config
from .errors import BridgeError
from .log import enable_console, get_logger

_log = get_logger("cli")


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def _resolve_config(args: argparse.Namespace) -> Config:
    """Load the config file and apply command-line overrides."""
    config = load_config()

    if args.host:
        config.mastodon.host = args.host
    if args.user:
        config.mastodon.user = args.user
    if getattr(args, "timeout", None):
        config.notifications.timeout = args.timeout
    if getattr(args, "icon", None) is not None:
        config.notifications.icon = args.icon

    if not config.mastodon.host or not config.mastodon.user:
        print(
            "Error: no Mastodon account configured. Pass --host and --user, "
            f"or set them in {get_config_path()}",
            file=sys.stderr,
        )
        sys.exit(2)

    return config


def cmd_daemon(args: argparse.Namespace) -> None:
    """Run the notification daemon."""
    from . import daemon

    enable_console(verbose=args.verbose)
    config = _resolve_config(args)

    try:
        asyncio.run(daemon.run(config))
    except BridgeError as e:
        _log.error("daemon stopped: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        _log.info("shutting down")


def cmd_setup(args: argparse.Namespace) -> None:
    """Authorize an account and store its token."""
    from .mastodon.wizard import wizard

    config = _resolve_config(args)

    try:
        asyncio.run(
            wizard(
                config.mastodon.host,
                config.mastodon.account,
                browser=config.links.browser or None,
            )
        )
    except (aiohttp.ClientError, KeyError) as e:
        print(f"Error: could not fetch a token: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_config_init(args: argparse.Namespace) -> None:
    """Initialize config file with defaults."""
    config_path = ensure_config_exists()
    print(f"Config file at: {config_path}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(get_config_path())


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show current config."""
    config_path = get_config_path()
    if config_path.exists():
        print(config_path.read_text())
    else:
        print(f"No config file at {config_path}")
        print("Run 'mastonotify config init' to create one.")


def _add_account_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", help="Mastodon instance host, e.g. hachyderm.io")
    parser.add_argument("--user", help="Your user name on that instance")


def setup_daemon_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the daemon subcommand."""
    daemon_parser = subparsers.add_parser(
        "daemon",
        help="Show Mastodon notifications on the desktop",
    )
    _add_account_arguments(daemon_parser)
    daemon_parser.add_argument(
        "--timeout",
        type=_positive_int,
        help="Expiration timeout of the notification in milliseconds (default: 5000)",
    )
    daemon_parser.add_argument(
        "--icon",
        help="Icon to display, freedesktop.org compliant (e.g. dialog-information)",
    )
    daemon_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    daemon_parser.set_defaults(func=cmd_daemon)


def setup_setup_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the setup subcommand."""
    setup_parser = subparsers.add_parser(
        "setup",
        help="Authorize an account and store its token in the keyring",
    )
    _add_account_arguments(setup_parser)
    setup_parser.set_defaults(func=cmd_setup)


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage mastonotify configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create default config file")
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mastonotify",
        description="Mastodon notifications on the desktop",
    )
    subparsers = parser.add_subparsers(dest="command")

    setup_daemon_parser(subparsers)
    setup_setup_parser(subparsers)
    setup_config_parser(subparsers)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
    elif hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
