from __future__ import annotations

import logging
import smtplib
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .addresses import EmailAddress
from .composer import ComposedMessage
from .errors import SendError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailTransportConfig:
    host: str
    sender_address: str
    port: int = smtplib.SMTP_PORT
    timeout: Optional[float] = None


@contextmanager
def open_transport(config: MailTransportConfig) -> Iterator[smtplib.SMTP]:
    """Open a plain SMTP session; it is closed when the block exits.

    No STARTTLS and no login happen here.
    """
    kwargs = {} if config.timeout is None else {"timeout": config.timeout}
    try:
        smtp = smtplib.SMTP(config.host, config.port, **kwargs)
    except (OSError, smtplib.SMTPException) as exc:
        raise TransportError(
            f"Could not connect to SMTP server {config.host}:{config.port}: {exc}",
            diagnostic=str(exc),
        ) from exc
    logger.info("Opened SMTP session to %s:%s", config.host, config.port)
    try:
        yield smtp
    finally:
        try:
            smtp.quit()
        except (OSError, smtplib.SMTPException) as exc:
            logger.warning("SMTP quit failed (%s); closing socket", exc)
            smtp.close()
        logger.info("Closed SMTP session to %s:%s", config.host, config.port)


def send(transport: smtplib.SMTP, message: ComposedMessage, to: EmailAddress) -> None:
    try:
        transport.send_message(message.to_email_message(to))
    except (OSError, ValueError, smtplib.SMTPException) as exc:
        raise SendError(f"Failed to send email to {to}: {exc}", diagnostic=str(exc)) from exc
    logger.info("Mail sent to %s subject=%r", to, message.subject)


def send_once(config: MailTransportConfig, message: ComposedMessage, to: EmailAddress) -> None:
    with open_transport(config) as transport:
        send(transport, message, to)
