"""Notification mail construction for the node monitor."""

__all__ = [
    "addresses",
    "composer",
    "config",
    "errors",
    "links",
    "mailer",
    "notifier",
    "render",
    "signing",
]
