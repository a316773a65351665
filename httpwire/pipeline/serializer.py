"""Response serialization to the exact bytes written back to the client."""

from typing import BinaryIO

from httpwire.domain.correlation_id import get_logger
from httpwire.domain.http_types import CompressedBody, HttpResponse
from httpwire.domain.negotiation import encode_body

SERIALIZER_LOGGER = get_logger("pipeline.serializer")


def _body_bytes(response: HttpResponse) -> bytes:
    body = response.body
    if isinstance(body, CompressedBody):
        encoded = encode_body(body.data, body.scheme)
        if SERIALIZER_LOGGER.debug_enabled():
            SERIALIZER_LOGGER.debug(
                "Compressed payload",
                extra={
                    "event": "body_compressed",
                    "encoding": body.scheme,
                    "bytes_in": len(body.data),
                    "bytes_out": len(encoded),
                },
            )
        return encoded
    return body.data


def serialize_response(response: HttpResponse) -> bytes:
    """Consume ``response`` and return its wire form.

    Content-Length is set from the bytes actually sent, after any
    compression. A response can only be serialized once.
    """
    response.consume()
    payload = _body_bytes(response)
    response.headers["Content-Length"] = str(len(payload))

    lines = [response.status.status_line]
    lines.extend(f"{name}: {value}" for name, value in response.headers.display_items())
    head = "\r\n".join(lines) + "\r\n\r\n"
    return head.encode() + payload


def send_response(stream: BinaryIO, response: HttpResponse) -> int:
    """Serialize and write ``response`` to ``stream``; return bytes written."""
    data = serialize_response(response)
    stream.write(data)
    stream.flush()
    SERIALIZER_LOGGER.debug(
        "Sent response",
        extra={
            "event": "response_sent",
            "status_code": response.status.code,
            "bytes_out": len(data),
        },
    )
    return len(data)
