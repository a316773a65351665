"""Hand-rolled HTTP/1.1 request parsing over a binary stream."""

from typing import BinaryIO, Tuple

from httpwire.bootstrap.config import MAX_BODY_BYTES, MAX_LINE_BYTES
from httpwire.domain.correlation_id import get_logger
from httpwire.domain.header_map import HeaderMap
from httpwire.domain.http_types import HttpRequest, Method

PARSER_LOGGER = get_logger("pipeline.parser")

CRLF = b"\r\n"
HEADER_SEPARATOR = ": "


class RequestParseError(Exception):
    """Raised when the bytes on the wire are not a request we can serve."""


class MalformedRequest(RequestParseError):
    """Raised for truncated, oversized or undecodable request lines."""


class UnsupportedMethod(RequestParseError):
    """Raised when the request method is neither GET nor POST."""


class RequestEntityTooLarge(Exception):
    """Raised when a request body exceeds configured limits."""


def _read_line(stream: BinaryIO) -> str:
    """Read one line and return it without its terminator."""
    # MAX_LINE_BYTES bounds the content; the CRLF terminator is not counted.
    raw = stream.readline(MAX_LINE_BYTES + len(CRLF))
    if len(raw.rstrip(CRLF)) > MAX_LINE_BYTES:
        raise MalformedRequest("Line too long")
    try:
        line = raw.decode()
    except UnicodeDecodeError as exc:
        raise MalformedRequest("Request is not valid UTF-8") from exc
    return line.rstrip("\r\n")


def parse_request_line(stream: BinaryIO) -> Tuple[Method, str]:
    """Read the request line and return the method and request-target."""
    line = _read_line(stream)
    if not line:
        raise MalformedRequest("Empty request line")
    fields = line.split(" ")
    if len(fields) < 2 or not fields[1]:
        raise MalformedRequest("Missing request target")
    try:
        method = Method(fields[0])
    except ValueError as exc:
        raise UnsupportedMethod(fields[0]) from exc
    return method, fields[1]


def parse_headers(stream: BinaryIO) -> HeaderMap:
    """Read header lines up to the blank line that ends the header block.

    A line without a ``": "`` separator stops parsing; anything after it is
    left unread in the stream.
    """
    headers = HeaderMap()
    while True:
        line = _read_line(stream)
        if not line:
            break
        if HEADER_SEPARATOR not in line:
            PARSER_LOGGER.debug(
                "Header parsing stopped at malformed line",
                extra={"event": "header_block_truncated"},
            )
            break
        name, value = line.split(HEADER_SEPARATOR, 1)
        headers[name.lower()] = value
    return headers


def declared_content_length(headers: HeaderMap) -> int:
    """Return the Content-Length header as an int; absent or invalid means 0."""
    raw_value = headers.get("content-length")
    if raw_value is None:
        return 0
    try:
        content_length = int(raw_value.strip())
    except ValueError:
        return 0
    return max(0, content_length)


def read_body(headers: HeaderMap, stream: BinaryIO) -> bytes:
    """Read the declared body; a short stream yields a truncated body."""
    content_length = declared_content_length(headers)
    if content_length == 0:
        return b""
    if content_length > MAX_BODY_BYTES:
        raise RequestEntityTooLarge(content_length)
    body = stream.read(content_length) or b""
    if len(body) < content_length:
        PARSER_LOGGER.info(
            "Request body shorter than declared",
            extra={
                "event": "short_body",
                "bytes_in": len(body),
            },
        )
    return body


def split_path(target: str) -> tuple[str, ...]:
    """Split a request-target on ``/`` keeping the leading empty segment.

    ``/`` maps to ``("",)``; any other trailing slash yields a trailing empty
    segment.
    """
    if target == "/":
        return ("",)
    return tuple(target.split("/"))


def receive_request(stream: BinaryIO) -> HttpRequest:
    """Parse a request from ``stream``.

    Only POST requests carry a body; for GET the declared Content-Length is
    ignored and nothing past the header block is read.
    """
    method, target = parse_request_line(stream)
    headers = parse_headers(stream)
    body = read_body(headers, stream) if method is Method.POST else b""
    if PARSER_LOGGER.debug_enabled():
        PARSER_LOGGER.debug(
            "Parsed request",
            extra={
                "event": "request_parsed",
                "method": method.value,
                "route": target,
                "bytes_in": len(body),
            },
        )
    return HttpRequest(method, target, split_path(target), headers, body)
