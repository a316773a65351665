"""System handlers for the root, echo and user-agent routes."""

from typing import Optional

from httpwire.domain.correlation_id import get_logger
from httpwire.domain.http_types import HttpRequest, HttpResponse
from httpwire.domain.response_builders import (
    bad_request_response,
    empty_response,
    text_response,
)

SYSTEM_LOGGER = get_logger("handlers.system")


def handle_root() -> HttpResponse:
    """Handle ``/`` with an empty 200."""
    return empty_response()


def handle_echo(text: str, encoding: Optional[str]) -> HttpResponse:
    """Handle ``/echo/<text>`` by returning the segment verbatim."""
    if SYSTEM_LOGGER.debug_enabled():
        SYSTEM_LOGGER.debug(
            "Echo request processed",
            extra={"event": "echo_request", "bytes_out": len(text.encode())},
        )
    return text_response(text, encoding)


def handle_user_agent(
    request: HttpRequest, encoding: Optional[str]
) -> HttpResponse:
    """Handle ``/user-agent`` by reflecting the User-Agent header."""
    agent = request.headers.get("user-agent")
    if agent is None:
        SYSTEM_LOGGER.info(
            "User-Agent header missing",
            extra={"event": "user_agent_missing", "route": request.target},
        )
        return bad_request_response()
    return text_response(agent, encoding)
