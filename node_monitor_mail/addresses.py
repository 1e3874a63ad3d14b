from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote_plus

from .errors import EmptyLocalPart, MalformedAddress, MissingDomainDot


@dataclass(frozen=True)
class EmailAddress:
    """An address that passed `validate`. Nothing downstream checks it again."""

    value: str

    def __str__(self) -> str:
        return self.value


def validate(raw: str) -> EmailAddress:
    """Validate a form-encoded address.

    Purely syntactic: exactly one @, a non-empty local part, and a dot
    somewhere in the domain. The decoded value is kept as is.
    """
    try:
        decoded = unquote_plus(raw, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedAddress(f"Address is not valid UTF-8: {exc}") from exc

    parts = decoded.split("@")
    if len(parts) != 2:
        raise MalformedAddress("Too many or too few @")
    local, domain = parts
    if not local:
        raise EmptyLocalPart("User part is empty")
    if "." not in domain:
        raise MissingDomainDot("Domain part must contain .")
    return EmailAddress(decoded)
