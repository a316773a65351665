"""Shared HTTP type definitions to avoid circular imports."""

import enum
from dataclasses import dataclass, field
from typing import Union

from httpwire.domain.header_map import HeaderMap


class Method(str, enum.Enum):
    """Request methods the server understands."""

    GET = "GET"
    POST = "POST"


class Status(enum.Enum):
    """Response statuses with their reason phrases."""

    OK = (200, "OK")
    CREATED = (201, "Created")
    BAD_REQUEST = (400, "Bad Request")
    FORBIDDEN = (403, "Forbidden")
    NOT_FOUND = (404, "Not Found")
    PAYLOAD_TOO_LARGE = (413, "Payload Too Large")
    INTERNAL_SERVER_ERROR = (500, "Internal Server Error")

    def __init__(self, code: int, reason: str) -> None:
        self.code = code
        self.reason = reason

    @property
    def status_line(self) -> str:
        return f"HTTP/1.1 {self.code} {self.reason}"


class ResponseAlreadySerialized(Exception):
    """Raised when a response is handed to the serializer a second time."""


@dataclass(frozen=True)
class HttpRequest:
    """Represents a parsed HTTP request."""

    method: Method
    target: str
    segments: tuple[str, ...]
    headers: HeaderMap
    body: bytes = b""


@dataclass(frozen=True)
class RawBody:
    """Body bytes sent as-is."""

    data: bytes


@dataclass(frozen=True)
class CompressedBody:
    """Body bytes to be encoded with ``scheme`` at serialization time."""

    data: bytes
    scheme: str


Body = Union[RawBody, CompressedBody]


@dataclass
class HttpResponse:
    """Logical response produced by a handler and consumed by the serializer."""

    status: Status
    headers: HeaderMap = field(default_factory=HeaderMap)
    body: Body = field(default_factory=lambda: RawBody(b""))
    _consumed: bool = field(default=False, init=False, repr=False)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def consume(self) -> None:
        """Mark the response as serialized; a second call is an error."""
        if self._consumed:
            raise ResponseAlreadySerialized(self.status.status_line)
        self._consumed = True
