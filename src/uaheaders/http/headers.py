"""Case-insensitive, order-preserving multimap of header fields."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

LIST_SEPARATOR: str = ", "


class HeaderTable:
    """Ordered ``(name, value)`` entries with case-insensitive name lookup.

    Duplicate names are allowed. Lookups return the first matching entry,
    and ``merge`` extends that first entry the way list-valued HTTP
    headers are combined.
    """

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._entries: list[tuple[str, str]] = [(name, value) for name, value in items]

    @staticmethod
    def _key(name: str) -> str:
        return name.lower()

    def _index(self, name: str) -> int | None:
        key = self._key(name)
        for idx, (entry_name, _) in enumerate(self._entries):
            if self._key(entry_name) == key:
                return idx
        return None

    def get(self, name: str) -> str | None:
        """Return the first value stored under *name*, or None."""
        idx = self._index(name)
        if idx is None:
            return None
        return self._entries[idx][1]

    def get_all(self, name: str) -> list[str]:
        key = self._key(name)
        return [value for entry_name, value in self._entries if self._key(entry_name) == key]

    def add(self, name: str, value: str) -> None:
        """Append an entry, even if *name* is already present."""
        self._entries.append((name, value))

    def set(self, name: str, value: str) -> None:
        """Replace every entry for *name* with a single entry.

        The replacement keeps the position of the first existing entry.
        """
        idx = self._index(name)
        if idx is None:
            self._entries.append((name, value))
            return
        key = self._key(name)
        self._entries[idx] = (name, value)
        self._entries = [
            entry for pos, entry in enumerate(self._entries) if pos == idx or self._key(entry[0]) != key
        ]

    def merge(self, name: str, value: str) -> None:
        """Join *value* onto the first entry for *name* with ``", "``, or add it."""
        idx = self._index(name)
        if idx is None:
            self._entries.append((name, value))
            return
        entry_name, existing = self._entries[idx]
        self._entries[idx] = (entry_name, f"{existing}{LIST_SEPARATOR}{value}")

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._index(name) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"HeaderTable({self._entries!r})"
