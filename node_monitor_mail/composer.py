from __future__ import annotations

from dataclasses import dataclass
from email.headerregistry import Address
from email.message import EmailMessage
from typing import NamedTuple

from .addresses import EmailAddress
from .errors import MalformedField, MissingField, TemplatePreambleError


class RenderedEmail(NamedTuple):
    from_display_name: str
    subject: str
    body: str


@dataclass(frozen=True)
class ComposedMessage:
    from_address: str
    from_display_name: str
    subject: str
    body: str

    @property
    def from_header(self) -> Address:
        # only the display name comes from the template
        return Address(display_name=self.from_display_name, addr_spec=self.from_address)

    def to_email_message(self, to: EmailAddress) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_header
        msg["To"] = Address(addr_spec=to.value)
        msg["Subject"] = self.subject
        msg.set_content(self.body)
        return msg


def split_layout(rendered_text: str) -> RenderedEmail:
    """Split text in the four-line template layout.

    The text must be an empty line, then the sender display name, then the
    subject, then the body. Only the first three newlines are consumed.
    """
    parts = rendered_text.split("\n", 3)
    if parts[0]:
        raise TemplatePreambleError("The first line of the email template must be empty")
    if len(parts) < 4:
        raise MissingField(
            f"Rendered email has {len(parts)} of 4 parts (empty line, sender name, subject, body)"
        )
    _, from_display_name, subject, body = parts
    return RenderedEmail(from_display_name=from_display_name, subject=subject, body=body)


def compose(rendered_text: str, sender_address: str) -> ComposedMessage:
    return compose_parts(split_layout(rendered_text), sender_address)


def compose_parts(rendered: RenderedEmail, sender_address: str) -> ComposedMessage:
    for name, value in (("sender name", rendered.from_display_name), ("subject", rendered.subject)):
        if "\r" in value or "\n" in value:
            raise MalformedField(f"Rendered email {name} contains a line break: {value!r}")
    return ComposedMessage(
        from_address=sender_address,
        from_display_name=rendered.from_display_name,
        subject=rendered.subject,
        body=rendered.body,
    )
