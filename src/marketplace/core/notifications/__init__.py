"""Notification delivery channels - email.

Re-exports notification-related functions for convenience.
"""

from src.marketplace.core.notifications.email import build_link_url, send_notification_email

__all__ = [
    "build_link_url",
    "send_notification_email",
]
