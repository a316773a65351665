"""Connection handling: one request/response cycle per accepted socket."""

import socket
import time
from typing import BinaryIO, Optional

from httpwire.domain.correlation_id import correlation_scope, get_logger
from httpwire.domain.negotiation import negotiate_encoding
from httpwire.domain.response_builders import entity_too_large_response
from httpwire.pipeline.parser import (
    RequestEntityTooLarge,
    RequestParseError,
    receive_request,
)
from httpwire.pipeline.router import route_request
from httpwire.pipeline.serializer import send_response
from httpwire.transport.context import WorkerContext

WORKER_LOGGER = get_logger("transport.worker")


def serve_stream(
    reader: BinaryIO, writer: BinaryIO, context: WorkerContext
) -> Optional[int]:
    """Read one request from ``reader`` and write its response to ``writer``.

    Returns the response status code, or None when the request could not be
    parsed and nothing was written.
    """
    started = time.perf_counter()
    try:
        request = receive_request(reader)
    except RequestParseError as error:
        WORKER_LOGGER.warning(
            "Malformed request dropped",
            extra={"event": "malformed_request", "error_type": type(error).__name__},
        )
        return None
    except RequestEntityTooLarge:
        WORKER_LOGGER.warning(
            "Request body size exceeded limit",
            extra={"event": "body_size_exceeded"},
        )
        response = entity_too_large_response()
        send_response(writer, response)
        return response.status.code

    encoding = negotiate_encoding(
        request.headers.get("accept-encoding"), context.supported_encodings
    )
    response = route_request(request, encoding, context.file_store)
    send_response(writer, response)
    WORKER_LOGGER.info(
        "Request complete",
        extra={
            "event": "request_complete",
            "method": request.method.value,
            "route": request.target,
            "status_code": response.status.code,
            "encoding": encoding or "identity",
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )
    return response.status.code


def _close_socket(client_socket: socket.socket) -> None:
    try:
        client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    client_socket.close()


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Serve a single request on ``client_socket`` and close it."""
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    with correlation_scope():
        if WORKER_LOGGER.debug_enabled():
            WORKER_LOGGER.debug(
                "Request processing started",
                extra={"event": "request_started", "client": client_addr_str},
            )
        try:
            client_socket.settimeout(context.socket_timeout)
            with client_socket.makefile("rb") as reader, client_socket.makefile(
                "wb"
            ) as writer:
                serve_stream(reader, writer, context)
        except (ConnectionError, TimeoutError, OSError) as error:
            WORKER_LOGGER.error(
                "Error handling client connection",
                extra={
                    "event": "connection_error",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                },
            )
        except Exception as error:  # pylint: disable=broad-except
            WORKER_LOGGER.error(
                "Unexpected error in worker",
                extra={
                    "event": "worker_error",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                    "error": str(error),
                },
                exc_info=True,
            )
        finally:
            _close_socket(client_socket)
            if WORKER_LOGGER.debug_enabled():
                WORKER_LOGGER.debug(
                    "Socket closed",
                    extra={"event": "socket_closed", "client": client_addr_str},
                )
