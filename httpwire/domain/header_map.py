"""Case-insensitive header storage with last-write-wins semantics."""

from collections.abc import MutableMapping
from typing import Iterable, Iterator, Optional, Tuple


class HeaderMap(MutableMapping):
    """Mapping of header names to single string values.

    Lookups ignore case. Each name holds one value; writing a name again
    replaces the value and the spelling used for serialization, but keeps the
    position of the first write so output order stays stable.
    """

    def __init__(self, items: Optional[Iterable[Tuple[str, str]]] = None) -> None:
        self._entries: dict[str, tuple[str, str]] = {}
        if items is not None:
            for name, value in items:
                self[name] = value

    def __getitem__(self, name: str) -> str:
        return self._entries[name.lower()][1]

    def __setitem__(self, name: str, value: str) -> None:
        self._entries[name.lower()] = (name, value)

    def __delitem__(self, name: str) -> None:
        del self._entries[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __repr__(self) -> str:
        return f"HeaderMap({list(self.items())!r})"

    def display_items(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(name, value)`` pairs using the spelling of the last write."""
        return iter(self._entries.values())
