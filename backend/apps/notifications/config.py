"""
Notification settings snapshot.
"""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class NotificationSettings:
    """
    Values substituted into mail templates and recovery links.

    Attributes:
        sender_company: Company name shown in mail bodies
        sender_system: System name shown in subjects and bodies
        mail_sender: From address
        recovery_page_url: Prefix the recovery token is appended to
        confirmation_page_url: Prefix the confirmation token is appended to
        recovery_token_lifetime_seconds: Lifetime of tokens embedded in links
    """

    sender_company: str
    sender_system: str
    mail_sender: str
    recovery_page_url: str
    confirmation_page_url: str
    recovery_token_lifetime_seconds: int

    @property
    def recovery_token_lifetime_hours(self) -> int:
        return self.recovery_token_lifetime_seconds // 3600


def get_notification_settings() -> NotificationSettings:
    return NotificationSettings(
        sender_company=settings.NOTIFICATIONS_SENDER_COMPANY,
        sender_system=settings.NOTIFICATIONS_SENDER_SYSTEM,
        mail_sender=settings.NOTIFICATIONS_MAIL_SENDER,
        recovery_page_url=settings.NOTIFICATIONS_RECOVERY_PAGE_URL,
        confirmation_page_url=settings.NOTIFICATIONS_CONFIRMATION_PAGE_URL,
        recovery_token_lifetime_seconds=settings.NOTIFICATIONS_RECOVERY_TOKEN_LIFETIME_SECONDS,
    )
