"""
Change feed for operational tables.

Services publish ``insert`` / ``update`` / ``delete`` events after a commit;
subscribers receive the events of one table whose record matches their
filters (``{"referenceid": "ABC-123"}``). :class:`LiveList` shows how a
consumer folds the stream into an id-ordered snapshot.
"""
import logging
import queue
import threading
from typing import Any

logger = logging.getLogger(__name__)

EVENT_TYPES = ("insert", "update", "delete")


class Subscription:
    def __init__(self, feed: "ChangeFeed", table: str, filters: dict[str, Any] | None = None):
        self.feed = feed
        self.table = table
        self.filters = {k: v for k, v in (filters or {}).items() if v is not None}
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self.closed = False

    def matches(self, table: str, record: dict) -> bool:
        if table != self.table:
            return False
        return all(str(record.get(k)) == str(v) for k, v in self.filters.items())

    def put(self, event: dict) -> None:
        self._queue.put(event)

    def get(self, timeout: float | None = None) -> dict | None:
        """Next event, or None if nothing arrived within ``timeout`` seconds."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[dict]:
        events = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def close(self) -> None:
        self.feed.unsubscribe(self)
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class ChangeFeed:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, table: str, filters: dict[str, Any] | None = None) -> Subscription:
        sub = Subscription(self, table, filters)
        with self._lock:
            self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)

    def publish(self, table: str, event_type: str, record: dict) -> int:
        """Fan the event out to matching subscribers; returns how many got it."""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        event = {"type": event_type, "table": table, "record": record}
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(table, record)]
        for sub in targets:
            sub.put(event)
        if targets:
            logger.debug("%s %s delivered to %d subscriber(s)", table, event_type, len(targets))
        return len(targets)


class LiveList:
    """Id-keyed snapshot kept current by change events. Last write wins."""

    def __init__(self, records: list[dict] | None = None):
        self._by_id: dict[Any, dict] = {}
        for record in records or []:
            self._by_id[record["id"]] = record

    def apply(self, event: dict) -> None:
        record = event["record"]
        record_id = record.get("id")
        if event["type"] == "insert":
            self._by_id.setdefault(record_id, record)
        elif event["type"] == "update":
            if record_id in self._by_id:
                self._by_id[record_id] = record
        elif event["type"] == "delete":
            self._by_id.pop(record_id, None)

    def items(self) -> list[dict]:
        return [self._by_id[k] for k in sorted(self._by_id)]

    def __len__(self) -> int:
        return len(self._by_id)


feed = ChangeFeed()
