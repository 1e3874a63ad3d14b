from __future__ import annotations


class NotifyError(Exception):
    """Base class for notification mail failures."""


class AddressError(NotifyError):
    """Raised when a user-supplied email address is rejected."""


class MalformedAddress(AddressError):
    """Raised when an address does not contain exactly one @."""


class EmptyLocalPart(AddressError):
    """Raised when the part before @ is empty."""


class MissingDomainDot(AddressError):
    """Raised when the domain part has no dot."""


class KeyDecodeError(NotifyError):
    """Raised when the signing key cannot be decoded."""


class InvalidHexEncoding(KeyDecodeError):
    """Raised when the signing key is not valid hex."""


class LinkError(NotifyError):
    """Raised when an action link cannot be built."""


class InvalidBaseUrl(LinkError):
    """Raised when the base URL is not an absolute URL."""


class ComposeError(NotifyError):
    """Raised when rendered template text cannot be turned into a message."""


class MissingField(ComposeError):
    """Raised when the rendered template lacks sender name, subject or body."""


class MalformedField(ComposeError):
    """Raised when a rendered header field contains a line break."""


class TemplatePreambleError(AssertionError):
    """Raised when the first line of an email template is not empty.

    This is a broken template, not bad input, so it is not a ComposeError.
    """


class MailError(NotifyError):
    """Raised when mail sending fails."""

    def __init__(self, message: str, diagnostic: str | None = None):
        super().__init__(message)
        self.diagnostic = diagnostic


class TransportError(MailError):
    """Raised when the SMTP connection cannot be opened."""


class SendError(MailError):
    """Raised when the SMTP server does not accept the message."""
