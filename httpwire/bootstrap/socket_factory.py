"""Listening socket creation."""

import socket

from httpwire.bootstrap.config import ServerConfig

ACCEPT_POLL_SECONDS = 0.5


def create_server_socket(config: ServerConfig) -> socket.socket:
    """Bind the listener; accept() wakes periodically so shutdown is noticed."""
    server_socket = socket.create_server((config.host, config.port), reuse_port=True)
    server_socket.settimeout(ACCEPT_POLL_SECONDS)
    return server_socket
