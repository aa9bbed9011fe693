"""Interactive setup: authorize the app and store the access token.

Create an application under Preferences > Development on your instance
(scope ``read``) to get the client key and secret this asks for.
"""

from rich.console import Console
from rich.prompt import Prompt

from ..handlers import open_link
from ..log import get_logger
from .auth import set_token
from .client import fetch_token, login_url

_log = get_logger("mastodon.wizard")


async def wizard(host: str, account: str, browser: str | None = None) -> None:
    """Walk the user through the authorization-code flow for one account."""
    console = Console()

    client_id = Prompt.ask("Client key", console=console)
    client_secret = Prompt.ask("Client secret", password=True, console=console)

    url = login_url(host, client_id)
    if not open_link(url, browser=browser):
        console.print(f"Open this URL to authorize mastonotify:\n  {url}")

    code = Prompt.ask("Authorization code", console=console)

    console.print("Fetching authorization token")
    token = await fetch_token(host, client_id, client_secret, code)

    set_token(account, token)
    _log.info("stored token for %s", account)
    console.print(f"Token stored for {account}")
