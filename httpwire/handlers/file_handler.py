"""File read and write handlers backed by the FileStore."""

from typing import Optional

from httpwire.domain.correlation_id import get_logger
from httpwire.domain.file_store import FileStore, FileStoreError, ForbiddenPath
from httpwire.domain.http_types import HttpResponse
from httpwire.domain.response_builders import (
    created_response,
    forbidden_response,
    not_found_response,
    octet_response,
    server_error_response,
)

FILE_LOGGER = get_logger("handlers.file")


def handle_file_read(
    name: str, file_store: FileStore, encoding: Optional[str]
) -> HttpResponse:
    """Serve a stored file, or 404 on any read failure."""
    try:
        data = file_store.read(name)
    except FileStoreError as error:
        FILE_LOGGER.info(
            "File not readable",
            extra={
                "event": "file_not_found",
                "filename": name,
                "error_type": type(error).__name__,
            },
        )
        return not_found_response()
    FILE_LOGGER.info(
        "File read operation complete",
        extra={"event": "file_read_complete", "filename": name, "bytes_out": len(data)},
    )
    return octet_response(data, encoding)


def handle_file_write(name: str, body: bytes, file_store: FileStore) -> HttpResponse:
    """Persist the request body; 403 for names outside the store, 500 on I/O errors."""
    try:
        file_store.write(name, body)
    except ForbiddenPath:
        FILE_LOGGER.warning(
            "Forbidden path access blocked",
            extra={"event": "forbidden_path", "filename": name},
        )
        return forbidden_response()
    except FileStoreError as error:
        FILE_LOGGER.error(
            "File write failed",
            extra={"event": "file_write_failed", "filename": name, "error": str(error)},
        )
        return server_error_response()
    FILE_LOGGER.info(
        "File write complete",
        extra={"event": "file_write_complete", "filename": name, "bytes_in": len(body)},
    )
    return created_response()
