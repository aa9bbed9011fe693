"""Desktop side of the bridge: the freedesktop notification service on D-Bus.

Requires a session bus with a notification daemon (dunst, mako, GNOME Shell, ...).
"""
