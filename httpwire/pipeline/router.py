"""Request routing logic."""

from typing import Optional

from httpwire.domain.correlation_id import get_logger
from httpwire.domain.file_store import FileStore
from httpwire.domain.http_types import HttpRequest, HttpResponse, Method
from httpwire.domain.response_builders import not_found_response
from httpwire.handlers.file_handler import handle_file_read, handle_file_write
from httpwire.handlers.system_handlers import (
    handle_echo,
    handle_root,
    handle_user_agent,
)

ROUTER_LOGGER = get_logger("pipeline.router")


def _matched(route: str) -> None:
    if ROUTER_LOGGER.debug_enabled():
        ROUTER_LOGGER.debug(
            "Route matched", extra={"event": "route_matched", "route": route}
        )


def _route_get(
    request: HttpRequest, encoding: Optional[str], file_store: FileStore
) -> Optional[HttpResponse]:
    segments = request.segments
    if segments == ("",):
        _matched("/")
        return handle_root()
    if segments == ("", "user-agent"):
        _matched("/user-agent")
        return handle_user_agent(request, encoding)
    if len(segments) == 3 and segments[1] == "echo":
        _matched("/echo/*")
        return handle_echo(segments[2], encoding)
    if len(segments) == 3 and segments[1] == "files":
        _matched("/files/*")
        return handle_file_read(segments[2], file_store, encoding)
    return None


def _route_post(
    request: HttpRequest, file_store: FileStore
) -> Optional[HttpResponse]:
    segments = request.segments
    if len(segments) == 3 and segments[1] == "files":
        _matched("/files/*")
        return handle_file_write(segments[2], request.body, file_store)
    return None


def route_request(
    request: HttpRequest, encoding: Optional[str], file_store: FileStore
) -> HttpResponse:
    """Map a request to the logical response of its handler.

    Exact routes are checked before patterned ones. Unmatched
    method/path combinations produce a 404.
    """
    if request.method is Method.GET:
        response = _route_get(request, encoding, file_store)
    else:
        response = _route_post(request, file_store)
    if response is not None:
        return response

    ROUTER_LOGGER.info(
        "No matching route found",
        extra={
            "event": "route_not_found",
            "route": request.target,
            "method": request.method.value,
        },
    )
    return not_found_response()
