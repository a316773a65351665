"""Per-connection correlation IDs carried through logging via contextvars."""

import contextlib
import contextvars
import logging
import uuid
from typing import Any, Iterator, MutableMapping, Optional

ROOT_LOGGER_NAME = "httpwire"

_correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)


def generate_correlation_id() -> str:
    """Generate a new correlation ID using UUID4."""
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """Return the correlation ID bound to the current context, if any."""
    return _correlation_id_var.get()


@contextlib.contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block."""
    value = correlation_id or generate_correlation_id()
    token = _correlation_id_var.set(value)
    try:
        yield value
    finally:
        _correlation_id_var.reset(token)


def component_name(logger_name: str) -> str:
    """Strip the package prefix from a logger name."""
    prefix = f"{ROOT_LOGGER_NAME}."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix) :]
    return logger_name


def get_logger(name: str) -> "CorrelationLoggerAdapter":
    """Return an adapter for ``httpwire.<name>``."""
    return CorrelationLoggerAdapter(
        logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), {}
    )


class CorrelationLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter injecting correlation_id and component into records."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        correlation_id = get_correlation_id()
        extra["correlation_id"] = correlation_id if correlation_id is not None else "-"
        extra["component"] = component_name(self.logger.name)
        kwargs["extra"] = extra
        return msg, kwargs

    def debug_enabled(self) -> bool:
        """Return True when DEBUG records would be emitted."""
        return self.logger.isEnabledFor(logging.DEBUG)
