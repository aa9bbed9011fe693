"""Mastodon notifications on the freedesktop notification bus.

- mastodon: streaming feed, wire models, token storage
- desktop: D-Bus dispatch, pending store, action correlation
"""

APP_NAME = "mastodon-notify"
