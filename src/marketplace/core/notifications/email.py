"""Email mirror for in-app notifications, sent through the Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.marketplace.core.config import get_settings
from src.marketplace.core.logging import get_logger

logger = get_logger(__name__)

_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"


def build_link_url(link: str | None) -> str | None:
    """Turn an app-relative deep link into an absolute frontend URL."""
    if not link:
        return None
    settings = get_settings()
    return f"{settings.app_url.rstrip('/')}/{link.lstrip('/')}"


def send_notification_email(
    to: str,
    user_name: str,
    title: str,
    message: str,
    link: str | None = None,
) -> bool:
    """Send a copy of an in-app notification by email.

    Args:
        to: Recipient email address
        user_name: Recipient name for personalization
        title: Notification title, used as the subject
        message: Notification body
        link: Optional app-relative deep link

    Returns:
        True if email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning(
            "RESEND_API_KEY not set - email not sent",
            to=to,
            email_type="notification",
        )
        return True

    resend.api_key = settings.resend_api_key
    url = build_link_url(link)

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": title,
                "html": _get_notification_email_html(user_name, title, message, url),
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Notification email sent", to=to)
        return True
    except FuturesTimeoutError:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        return False
    except Exception as e:
        logger.error("Failed to send notification email", to=to, error=str(e))
        return False


def _get_notification_email_html(
    user_name: str, title: str, message: str, url: str | None
) -> str:
    """Generate HTML content for a notification email."""
    safe_user_name = html.escape(user_name)
    safe_title = html.escape(title)
    safe_message = html.escape(message)
    button = ""
    if url:
        button = (
            f'<p style="margin: 32px 0;">'
            f'<a href="{html.escape(url)}" style="{_BUTTON_STYLE}">Open</a></p>'
        )
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">{safe_title}</h1>
    <p>Hi {safe_user_name},</p>
    <p>{safe_message}</p>
    {button}
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        You are receiving this because email notifications are enabled for your account.
    </p>
</body>
</html>"""
