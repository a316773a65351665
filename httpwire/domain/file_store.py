"""Named-blob storage rooted at the configured directory."""

from pathlib import Path

from httpwire.domain.correlation_id import get_logger

STORE_LOGGER = get_logger("domain.file_store")


class FileStoreError(Exception):
    """Raised when a blob cannot be read or written."""


class ForbiddenPath(FileStoreError):
    """Raised when a requested name escapes the storage directory."""


class FileStore:
    """Reads and writes files by name inside one base directory.

    The directory is fixed at construction; there is no locking between
    concurrent writers of the same name.
    """

    def __init__(self, directory: str) -> None:
        self._root = Path(directory).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, name: str) -> Path:
        """Map a user-supplied name to a path inside the root."""
        if not name or "\x00" in name:
            raise ForbiddenPath(name)
        relative_part = name.lstrip("/")
        if not relative_part or ".." in Path(relative_part).parts:
            raise ForbiddenPath(name)
        target = (self._root / relative_part).resolve()
        if self._root not in target.parents:
            raise ForbiddenPath(name)
        return target

    def read(self, name: str) -> bytes:
        """Return the stored bytes for ``name``."""
        path = self.resolve(name)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise FileStoreError(f"cannot read {name!r}: {exc.strerror}") from exc
        if STORE_LOGGER.debug_enabled():
            STORE_LOGGER.debug(
                "File read",
                extra={"event": "file_read", "filename": name, "bytes_out": len(data)},
            )
        return data

    def write(self, name: str, data: bytes) -> None:
        """Store ``data`` under ``name``, replacing any previous content."""
        path = self.resolve(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise FileStoreError(f"cannot write {name!r}: {exc.strerror}") from exc
        if STORE_LOGGER.debug_enabled():
            STORE_LOGGER.debug(
                "File written",
                extra={"event": "file_written", "filename": name, "bytes_in": len(data)},
            )
