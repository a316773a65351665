"""Context object shared across worker threads."""

from dataclasses import dataclass, field
from typing import Optional

from httpwire.domain.file_store import FileStore
from httpwire.domain.negotiation import SUPPORTED_ENCODINGS


@dataclass(frozen=True)
class WorkerContext:
    """Read-only dependencies handed to every connection handler."""

    file_store: FileStore
    supported_encodings: tuple[str, ...] = field(default=SUPPORTED_ENCODINGS)
    socket_timeout: Optional[float] = None
