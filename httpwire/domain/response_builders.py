"""Pure HTTP response builders."""

from typing import Optional

from httpwire.domain.header_map import HeaderMap
from httpwire.domain.http_types import CompressedBody, HttpResponse, RawBody, Status

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"


def empty_response(status: Status = Status.OK) -> HttpResponse:
    """Return a response with no body and no Content-Type."""
    return HttpResponse(status, HeaderMap(), RawBody(b""))


def content_response(
    payload: bytes, content_type: str, encoding: Optional[str] = None
) -> HttpResponse:
    """Return a 200 carrying ``payload``, compressed when an encoding was negotiated."""
    headers = HeaderMap([("Content-Type", content_type)])
    if encoding is None:
        return HttpResponse(Status.OK, headers, RawBody(payload))
    headers["Content-Encoding"] = encoding
    return HttpResponse(Status.OK, headers, CompressedBody(payload, encoding))


def text_response(message: str, encoding: Optional[str] = None) -> HttpResponse:
    """Return a text/plain response."""
    return content_response(message.encode(), TEXT_PLAIN, encoding)


def octet_response(payload: bytes, encoding: Optional[str] = None) -> HttpResponse:
    """Return an application/octet-stream response."""
    return content_response(payload, OCTET_STREAM, encoding)


def created_response() -> HttpResponse:
    return empty_response(Status.CREATED)


def not_found_response() -> HttpResponse:
    return empty_response(Status.NOT_FOUND)


def bad_request_response() -> HttpResponse:
    return empty_response(Status.BAD_REQUEST)


def forbidden_response() -> HttpResponse:
    return empty_response(Status.FORBIDDEN)


def entity_too_large_response() -> HttpResponse:
    return empty_response(Status.PAYLOAD_TOO_LARGE)


def server_error_response() -> HttpResponse:
    return empty_response(Status.INTERNAL_SERVER_ERROR)
