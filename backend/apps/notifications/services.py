"""
Mail delivery and account notification mails.

MailService sends one HTML message through Django's mail framework, so the
transport (SMTP, console, locmem) is chosen by EMAIL_BACKEND.
NotificationService builds the account lifecycle mails on top of it.
"""

from dataclasses import dataclass
from typing import Any

from django.core.mail import EmailMultiAlternatives
from django.utils.html import strip_tags

from apps.core.cache import ResourceCache
from apps.core.logging import get_logger
from apps.core.resources import ResourceLoader
from apps.notifications import templates
from apps.notifications.config import NotificationSettings, get_notification_settings
from apps.problems.exceptions import ApiError
from apps.security.tokens import NAME_CLAIM, TokenService, get_token_service

TEMPLATES_PACKAGE = "apps.notifications.resources"
SEND_ERROR_MESSAGE = "An error occurred while sending an email to the specified recipients."
PROCESS_ID_CLAIM = "process_id"
SUBJECT_PREFIX = "[no-reply]"


@dataclass(frozen=True)
class EmailData:
    """A single outgoing message."""

    name: str
    email: str
    subject: str
    body: str


class MailService:
    """
    Sends HTML mail with a plain-text alternative.

    Args:
        sender: From address. Defaults to NOTIFICATIONS_MAIL_SENDER.
    """

    def __init__(self, sender: str | None = None, logger: Any = None) -> None:
        self.sender = sender or get_notification_settings().mail_sender
        self.logger = logger or get_logger(__name__)

    def build_message(self, email: EmailData) -> EmailMultiAlternatives:
        message = EmailMultiAlternatives(
            subject=email.subject,
            body=strip_tags(email.body).strip(),
            from_email=self.sender,
            to=[f"{email.name} <{email.email}>" if email.name else email.email],
        )
        message.attach_alternative(email.body, "text/html")
        return message

    def send(self, email: EmailData) -> None:
        """
        Raises:
            ApiError: 500 if the backend fails to deliver the message
        """
        message = self.build_message(email)
        try:
            message.send(fail_silently=False)
        except Exception as e:
            self.logger.error("mail_send_failed", recipients=message.to, exc_info=e)
            raise ApiError(500, SEND_ERROR_MESSAGE) from e
        self.logger.info("mail_sent", recipients=message.to, subject=email.subject)


class NotificationService:
    """
    Account notification mails rendered from packaged HTML templates.

    Args:
        mail_service: Transport for the rendered messages.
        token_service: Issues the tokens embedded in recovery links.
        config: Sender names, link prefixes and token lifetime.
        cache: Template memo owned by the caller.
    """

    def __init__(
        self,
        mail_service: MailService | None = None,
        token_service: TokenService | None = None,
        config: NotificationSettings | None = None,
        cache: ResourceCache | None = None,
        logger: Any = None,
    ) -> None:
        self.config = config or get_notification_settings()
        self.mail_service = mail_service or MailService(self.config.mail_sender)
        self.token_service = token_service or get_token_service()
        self.loader = ResourceLoader(TEMPLATES_PACKAGE, cache)
        self.logger = logger or get_logger(__name__)

    def send_recovery_mail(self, name: str, username: str, email: str) -> None:
        """Send the first-password mail with a recovery link for ``username``."""
        token = self._create_link_token({NAME_CLAIM: username})
        params = {
            **self._sender_params(),
            templates.USERNAME: email,
            templates.RECOVERY_URL: f"{self.config.recovery_page_url}{token}",
            templates.TOKEN_EXPIRATION: self.config.recovery_token_lifetime_hours,
        }
        subject = f"{SUBJECT_PREFIX} Welcome to your {self.config.sender_system} account"
        self._send(name, email, templates.FIRST_PASSWORD_TEMPLATE, params, subject)

    def send_password_updated_mail(self, name: str, email: str) -> None:
        subject = f"{SUBJECT_PREFIX} Your {self.config.sender_system} password has changed"
        self._send(name, email, templates.PASSWORD_UPDATED_TEMPLATE, self._sender_params(), subject)

    def send_email_confirmation(self, name: str, username: str, email: str, process_id: str) -> None:
        """
        Send an address confirmation link.

        The link token carries both the username and ``process_id``.
        """
        token = self._create_link_token({NAME_CLAIM: username, PROCESS_ID_CLAIM: process_id})
        params = {
            **self._sender_params(),
            templates.PROCESS_ID: process_id,
            templates.USERNAME: email,
            templates.RECOVERY_URL: f"{self.config.confirmation_page_url}{token}",
            templates.TOKEN_EXPIRATION: self.config.recovery_token_lifetime_hours,
        }
        subject = f"{SUBJECT_PREFIX} Confirmation of request {process_id} for {self.config.sender_system}"
        self._send(name, email, templates.EMAIL_CONFIRMATION_TEMPLATE, params, subject)

    def _create_link_token(self, claims: dict[str, str]) -> str:
        return self.token_service.create(claims, self.config.recovery_token_lifetime_seconds)

    def _sender_params(self) -> dict[str, object]:
        return {
            templates.SENDER_COMPANY: self.config.sender_company,
            templates.SENDER_SYSTEM: self.config.sender_system,
        }

    def _send(self, name: str, email: str, template_name: str, params: dict[str, object], subject: str) -> None:
        body = templates.render_template(self.loader.load_text(template_name), params)
        self.mail_service.send(EmailData(name=name, email=email, subject=subject, body=body))
        self.logger.info("notification_sent", template=template_name)
