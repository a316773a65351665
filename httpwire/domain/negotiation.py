"""Accept-Encoding negotiation and the response body codecs behind it."""

import functools
import gzip
from typing import Callable, Optional, Sequence

SUPPORTED_ENCODINGS: tuple[str, ...] = ("gzip",)

CODECS: dict[str, Callable[[bytes], bytes]] = {
    # mtime pinned so identical bodies encode to identical bytes
    "gzip": functools.partial(gzip.compress, mtime=0),
}


class UnsupportedEncoding(Exception):
    """Raised when a body is asked to be encoded with an unknown scheme."""


def _quality(params: str) -> float:
    """Return the q-value declared in a coding's parameters (1.0 if absent)."""
    for param in params.split(";"):
        key, _, raw_value = param.strip().partition("=")
        if key.strip().lower() == "q" and raw_value:
            try:
                return float(raw_value)
            except ValueError:
                return 0.0
    return 1.0


def negotiate_encoding(
    accept_encoding: Optional[str],
    supported: Sequence[str] = SUPPORTED_ENCODINGS,
) -> Optional[str]:
    """Pick the first client-listed coding that the server supports.

    Client order wins over q-values; a coding explicitly refused with
    ``q=0`` is skipped.
    """
    if not accept_encoding:
        return None
    available = {scheme.lower() for scheme in supported}
    for token in accept_encoding.split(","):
        value = token.strip()
        if not value:
            continue
        scheme, _, params = value.partition(";")
        scheme = scheme.strip().lower()
        if scheme in available and _quality(params) > 0:
            return scheme
    return None


def encode_body(data: bytes, scheme: str) -> bytes:
    """Apply the codec registered for ``scheme``."""
    try:
        codec = CODECS[scheme]
    except KeyError as exc:
        raise UnsupportedEncoding(scheme) from exc
    return codec(data)
