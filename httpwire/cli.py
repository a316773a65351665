"""Command-line entry point."""

import signal
import sys
import threading
from typing import Optional

from httpwire.bootstrap.config import ServerConfig, parse_cli_args
from httpwire.bootstrap.logging_setup import configure_logging
from httpwire.domain.correlation_id import get_logger
from httpwire.transport.accept_loop import run_server

SERVER_LOGGER = get_logger("server")


def main(argv: Optional[list[str]] = None) -> None:
    """Start the HTTP server and serve until SIGINT or SIGTERM."""
    args = parse_cli_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level, args.log_destination, args.log_format)
    config = ServerConfig.from_args(args)
    stop_event = threading.Event()

    def shutdown_handler(signum: int, _frame) -> None:
        SERVER_LOGGER.info(
            "Received shutdown signal", extra={"event": "shutdown", "signal": signum}
        )
        stop_event.set()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting HTTP server",
        extra={
            "event": "server_starting",
            "host": config.host,
            "port": config.port,
            "directory": config.directory,
            "workers": config.workers,
            "log_destination": args.log_destination,
            "log_level": args.log_level,
            "socket_timeout": config.socket_timeout,
            "shutdown_grace_seconds": config.shutdown_grace_seconds,
        },
    )
    run_server(config, stop_event)
