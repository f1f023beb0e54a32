"""
In-process event bus (Observer pattern).

Services publish reorder lifecycle events; handlers subscribe by event type.
A handler failure is logged and never propagates back into the publisher,
so observers cannot break a reorder run.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    occurred_at: datetime = field(default_factory=datetime.utcnow, kw_only=True)

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass
class ReorderHistoryClosedEvent(DomainEvent):
    history_id: int
    sku_id: int
    status: str
    purchase_order_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass
class ReorderRunCompletedEvent(DomainEvent):
    trigger_type: str
    processed_count: int
    created_pos: List[int]
    error_count: int
    skipped_count: int


Handler = Callable[[DomainEvent], None]


class EventBus:
    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def publish(self, event: DomainEvent) -> None:
        for event_type, handlers in list(self._handlers.items()):
            if not isinstance(event, event_type):
                continue
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception("event_handler_failed event=%s handler=%r", event.name, handler)


class LoggingHandler:
    def __call__(self, event: DomainEvent) -> None:
        logger.info("domain_event event=%s", event.name, extra={"event": asdict(event)})


_bus: Optional[EventBus] = None


def configure_event_bus() -> EventBus:
    global _bus
    _bus = EventBus()
    _bus.subscribe(DomainEvent, LoggingHandler())
    return _bus


def get_event_bus() -> EventBus:
    if _bus is None:
        return configure_event_bus()
    return _bus
