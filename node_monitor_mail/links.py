from __future__ import annotations

from typing import Sequence, Tuple
from urllib.parse import urlencode, urlsplit, urlunsplit

from .errors import InvalidBaseUrl
from .signing import SigningKey

QueryPairs = Sequence[Tuple[str, str]]


def build_url(base_url: str, params: QueryPairs) -> str:
    """Append query parameters to `base_url` in the order given.

    Parameters are never sorted; whoever verifies the link has to rebuild
    the same order. A query already present on `base_url` is kept in front.
    """
    try:
        parts = urlsplit(base_url)
        _ = parts.port  # raises on a non-numeric port
    except ValueError as exc:
        raise InvalidBaseUrl(f"Invalid base URL {base_url!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidBaseUrl(f"Base URL must be absolute: {base_url!r}")

    query = "&".join(q for q in (parts.query, urlencode(list(params))) if q)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def signing_payload(params: QueryPairs) -> str:
    return urlencode(list(params))


def signed_url(key: SigningKey, base_url: str, params: QueryPairs, sig_param: str = "sig") -> str:
    pairs = list(params)
    signature = key.sign(signing_payload(pairs))
    return build_url(base_url, [*pairs, (sig_param, signature)])


def verify_params(key: SigningKey, params: QueryPairs, sig_param: str = "sig") -> bool:
    """Check the signature among query pairs received from a signed link."""
    signature = None
    signed: list[Tuple[str, str]] = []
    for name, value in params:
        if name == sig_param:
            signature = value
        else:
            signed.append((name, value))
    if signature is None:
        return False
    return key.verify(signing_payload(signed), signature)
