"""
Domain events and the in-process dispatcher that fans them out to handlers.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone
from dataclasses import dataclass, field
import uuid


logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class DomainEvent(ABC):
    """Something that happened in the marketplace. ``event_type`` is the class name."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: str = field(init=False, default="")
    version: int = field(default=1)

    def __post_init__(self):
        self.event_type = self.event_type or type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self._get_event_data(),
        }

    @abstractmethod
    def _get_event_data(self) -> Dict[str, Any]:
        """Event payload, JSON friendly."""


class EventHandler(ABC):

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        ...

    @abstractmethod
    def can_handle(self, event: DomainEvent) -> bool:
        """Global handlers use this to filter the events they receive."""


class EventDispatcher:
    """
    Routes each event to the handlers registered for its type plus any
    global handler that accepts it. A failing handler is logged and
    does not stop the others.
    """

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._global_handlers: List[EventHandler] = []
        self._event_log: List[Dict[str, Any]] = []

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(f"{type(handler).__name__} subscribed to {event_type}")

    def register_global_handler(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)
        logger.debug(f"{type(handler).__name__} subscribed to all events")

    def _handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        handlers = list(self._handlers.get(event.event_type, ()))
        handlers.extend(h for h in self._global_handlers if h.can_handle(event))
        return handlers

    async def dispatch(self, event: DomainEvent) -> None:
        self._event_log.append(event.to_dict())
        handlers = self._handlers_for(event)
        if not handlers:
            logger.warning(f"{event.event_type} ({event.event_id}) has no handlers")
            return

        logger.info(f"Dispatching {event.event_type} ({event.event_id}) to {len(handlers)} handler(s)")
        await asyncio.gather(*(self._run_handler(handler, event) for handler in handlers))

    async def dispatch_all(self, events: List[DomainEvent]) -> None:
        """Dispatch in the order the events were raised."""
        for event in events:
            await self.dispatch(event)

    async def _run_handler(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            await handler.handle(event)
        except Exception:
            logger.exception(f"{type(handler).__name__} failed on {event.event_type} ({event.event_id})")

    def get_event_log(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Dispatched events, newest first."""
        newest_first = sorted(self._event_log, key=lambda entry: entry['occurred_at'], reverse=True)
        return newest_first[:limit] if limit else newest_first

    def get_registered_handlers(self) -> Dict[str, List[str]]:
        summary = {
            event_type: [type(h).__name__ for h in handlers]
            for event_type, handlers in self._handlers.items()
            if handlers
        }
        if self._global_handlers:
            summary["global"] = [type(h).__name__ for h in self._global_handlers]
        return summary
