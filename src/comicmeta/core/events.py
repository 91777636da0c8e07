# ABOUTME: Minimal in-process event bus for metadata change notifications.
# ABOUTME: Handlers subscribe by event name; broadcast calls them in subscription order.

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

INVALIDATE_METADATA_CACHE = "InvalidateMetadataCache"
BOOK_METADATA_CHANGED = "BookMetadataChanged"


@dataclass(frozen=True)
class Event:
    """A named notification with positional arguments."""

    name: str
    args: tuple[Any, ...] = ()


Handler = Callable[[Event], None]


class EventBus:
    """Dispatches events to subscribed handlers and remembers what was sent."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self.history: list[Event] = []

    def subscribe(self, name: str, handler: Handler) -> None:
        self._handlers[name].append(handler)

    def broadcast(self, event: Event) -> None:
        self.history.append(event)
        for handler in list(self._handlers.get(event.name, ())):
            handler(event)
