"""Error taxonomy for the bridge.

Item-level errors (DecodeError, DispatchError) are logged and skipped.
Pipeline-level errors (TransportError, SubscriptionError) end the daemon.
"""


class BridgeError(Exception):
    """Base class for mastonotify errors."""


class DecodeError(BridgeError):
    """A feed frame could not be decoded."""


class EnvelopeError(DecodeError):
    """The outer stream envelope is malformed."""


class PayloadError(DecodeError):
    """The notification payload inside an envelope is malformed."""


class TransportError(BridgeError):
    """The feed connection failed or was closed."""


class DispatchError(BridgeError):
    """The notification service rejected or failed a request."""


class SubscriptionError(BridgeError):
    """Could not subscribe to notification service signals."""
