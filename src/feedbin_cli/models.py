"""Data models for feedbin-cli."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone

READING_LIST_CAP = 100


@dataclass(frozen=True)
class Entry:
    """A single Feedbin entry, snapshotted once per session.

    ``published`` keeps the raw timestamp string sent by the service so that a
    malformed value never prevents the entry from being shown.
    """

    id: int
    feed_id: int
    title: str
    published: str
    url: str
    author: str | None = None
    content: str | None = None
    feed_title: str = ""

    @property
    def published_at(self) -> datetime | None:
        """Parsed publication time, or None when the raw value is malformed."""
        try:
            parsed = datetime.fromisoformat(self.published)
        except (TypeError, ValueError):
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


@dataclass(frozen=True)
class Feed:
    """Represents a Feedbin feed."""

    id: int
    title: str


@dataclass(frozen=True)
class Subscription:
    """Represents a Feedbin subscription."""

    id: int
    feed_id: int
    title: str


class ReadingList:
    """Ordered working set of entries offered during a reading session.

    Entries are deduplicated by id (first occurrence wins) and capped at
    READING_LIST_CAP. The only mutation is removal.
    """

    def __init__(self, entries: Iterable[Entry] = (), feeds_resolved: bool = True):
        self.feeds_resolved = feeds_resolved
        self._entries: list[Entry] = []
        seen: set[int] = set()
        for entry in entries:
            if entry.id in seen:
                continue
            if len(self._entries) >= READING_LIST_CAP:
                break
            seen.add(entry.id)
            self._entries.append(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    def __repr__(self) -> str:
        return f"ReadingList({len(self._entries)} entries)"

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def ids(self) -> list[int]:
        return [entry.id for entry in self._entries]

    def remove(self, entry_id: int) -> Entry:
        """Remove and return the entry with ``entry_id``.

        Raises:
            KeyError: If no entry with that id is present
        """
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return self._entries.pop(index)
        raise KeyError(entry_id)
