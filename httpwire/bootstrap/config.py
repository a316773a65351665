"""Server configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass
from typing import Optional

from httpwire.bootstrap.logging_setup import LOG_FORMATS


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


MAX_BODY_BYTES = _env_int("HTTPWIRE_MAX_BODY_BYTES", 5 * 1024 * 1024)
MAX_LINE_BYTES = 64 * 1024
DEFAULT_WORKERS = _env_int("HTTPWIRE_WORKERS", 0)
DEFAULT_SOCKET_TIMEOUT = _env_int("HTTPWIRE_SOCKET_TIMEOUT", 0)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("HTTPWIRE_SHUTDOWN_GRACE_SECONDS", 30)
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4221


@dataclass(frozen=True)
class ServerConfig:
    """Settings fixed at startup and shared read-only with every worker."""

    directory: str = "."
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    workers: int = DEFAULT_WORKERS
    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    shutdown_grace_seconds: int = DEFAULT_SHUTDOWN_GRACE_SECONDS

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ServerConfig":
        """Build the configuration from parsed CLI arguments."""
        return cls(
            directory=args.directory,
            host=args.host,
            port=args.port,
            workers=max(0, args.workers),
            socket_timeout=max(0, args.socket_timeout),
            shutdown_grace_seconds=max(0, args.shutdown_grace_seconds),
        )

    @property
    def connection_timeout(self) -> Optional[float]:
        """Per-connection socket timeout, or None when reads may block forever."""
        return float(self.socket_timeout) if self.socket_timeout > 0 else None


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(
        prog="httpwire", description="Minimal HTTP/1.1 file and echo server"
    )
    parser.add_argument(
        "--directory", default=".", help="Directory served under /files/"
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Size of a bounded worker pool (0 for one thread per connection)",
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Per-connection socket timeout in seconds (0 to disable)",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for in-flight connections on shutdown",
    )
    default_log_level = os.getenv("HTTPWIRE_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("HTTPWIRE_LOG_DESTINATION", "stdout")
    default_log_format = os.getenv("HTTPWIRE_LOG_FORMAT", "json").lower()
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--log-format",
        default=default_log_format,
        choices=LOG_FORMATS,
        type=str.lower,
    )
    return parser.parse_args(argv)
