"""
Event classification table.

Maps event schema paths to the prefix used in generated operation names and
to the subscription pattern of the event.
"""

from __future__ import annotations

from collections.abc import Iterator

from ...errors import ConfigError, MissingEventClassificationError, UnknownEventCategoryError
from .ir_nodes import EventCategory, EventInfo


class EventTable:
    """Path-keyed event classifications."""

    def __init__(self, events: dict[str, EventInfo] | None = None):
        self._events: dict[str, EventInfo] = dict(events or {})

    def add(self, path: str, prefix: str, category: EventCategory) -> EventTable:
        """Add an entry and return the table for chaining."""
        self._events[path] = EventInfo(prefix, category)
        return self

    def classify(self, path: str) -> EventInfo:
        """
        Look up an event.

        Raises:
            MissingEventClassificationError: If the path is not classified
        """
        info = self._events.get(path)
        if info is None:
            raise MissingEventClassificationError(path)
        return info

    def __contains__(self, path: str) -> bool:
        return path in self._events

    def __iter__(self) -> Iterator[str]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def copy(self) -> EventTable:
        return EventTable(self._events)

    def merged(self, other: EventTable) -> EventTable:
        """Return a new table with the entries of other taking precedence."""
        table = self.copy()
        table._events.update(other._events)
        return table

    @staticmethod
    def from_dict(d: dict) -> EventTable:
        """
        Create a table from {"Path": ["Prefix", "CATEGORY"]}.

        Raises:
            ConfigError: If an entry is not a [prefix, category] pair
            UnknownEventCategoryError: If a category is not known
        """
        table = EventTable()
        for path, entry in d.items():
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ConfigError(f"Event classification for '{path}' must be [prefix, category], got {entry!r}")
            prefix, category = entry
            try:
                table.add(path, prefix, EventCategory(category))
            except ValueError as e:
                raise UnknownEventCategoryError(path, category) from e
        return table

    def to_dict(self) -> dict:
        return {path: [info.prefix, info.category.value] for path, info in self._events.items()}
