"""Main connection acceptance loop."""

import socket
import threading
from typing import Optional

from httpwire.bootstrap.config import ServerConfig
from httpwire.bootstrap.socket_factory import create_server_socket
from httpwire.domain.correlation_id import get_logger
from httpwire.domain.file_store import FileStore
from httpwire.transport.context import WorkerContext
from httpwire.transport.dispatch import WorkerDispatcher, create_dispatcher
from httpwire.transport.worker import handle_client

ACCEPT_LOGGER = get_logger("transport.accept")


def serve_forever(
    server_socket: socket.socket,
    dispatcher: WorkerDispatcher,
    context: WorkerContext,
    stop_event: threading.Event,
) -> None:
    """Accept connections and hand each one to ``dispatcher`` until stopped."""
    while not stop_event.is_set():
        try:
            client_socket, client_address = server_socket.accept()
        except socket.timeout:
            continue
        except OSError as error:
            if stop_event.is_set():
                break
            ACCEPT_LOGGER.error(
                "Socket accept failed",
                extra={"event": "accept_error", "error_type": type(error).__name__},
            )
            continue

        if ACCEPT_LOGGER.debug_enabled():
            ACCEPT_LOGGER.debug(
                "Client connection accepted",
                extra={
                    "event": "client_accepted",
                    "client": f"{client_address[0]}:{client_address[1]}",
                },
            )
        dispatcher.submit(handle_client, client_socket, client_address, context)


def run_server(
    config: ServerConfig, stop_event: Optional[threading.Event] = None
) -> None:
    """Create the listening socket and serve until ``stop_event`` is set."""
    stop_event = stop_event or threading.Event()
    server_socket = create_server_socket(config)
    dispatcher = create_dispatcher(config.workers)
    context = WorkerContext(
        file_store=FileStore(config.directory),
        socket_timeout=config.connection_timeout,
    )

    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={
            "event": "server_listening",
            "host": config.host,
            "port": config.port,
            "directory": str(context.file_store.root),
            "workers": config.workers,
        },
    )

    try:
        serve_forever(server_socket, dispatcher, context, stop_event)
    finally:
        server_socket.close()
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={
                "event": "shutdown_waiting",
                "shutdown_grace_seconds": config.shutdown_grace_seconds,
            },
        )
        dispatcher.close(config.shutdown_grace_seconds)
        ACCEPT_LOGGER.info("Server shutdown complete", extra={"event": "server_stopped"})
