from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)
_EVENTS_LOG = logging.getLogger("order_history.events")


class OrderEvent(str, Enum):
    STATUS_UPDATED = "NOTIFY_UPDATE_ORDER_STATUS"
    HISTORY_UPDATED = "NOTIFY_UPDATE_ORDER_STATUS_HISTORY"


@dataclass(frozen=True)
class OrderStatusUpdated:
    orders_id: int
    prev_orders_status_id: int
    next_orders_status_id: int
    updated_by: str | None

    event = OrderEvent.STATUS_UPDATED

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OrderStatusHistoryUpdated:
    orders_status_history_id: int
    orders_id: int
    orders_status_id: int
    updated_by: str
    date_added: datetime
    customer_notified: int
    comments: str | None

    event = OrderEvent.HISTORY_UPDATED

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


OrderEventPayload = Union[OrderStatusUpdated, OrderStatusHistoryUpdated]
Observer = Callable[[OrderEventPayload], Any]


class EventBus:
    """In-process observer registry for order lifecycle events.

    Delivery is synchronous and fire-and-forget: an observer failure is
    logged and never reaches the code that emitted the event.
    """

    def __init__(self):
        self._observers: dict[OrderEvent, list[Observer]] = defaultdict(list)

    def attach(self, event: OrderEvent, observer: Observer) -> None:
        if observer not in self._observers[event]:
            self._observers[event].append(observer)

    def detach(self, event: OrderEvent, observer: Observer) -> None:
        observers = self._observers.get(event) or []
        if observer in observers:
            observers.remove(observer)

    def observers(self, event: OrderEvent) -> list[Observer]:
        return list(self._observers.get(event) or [])

    def notify(self, payload: OrderEventPayload) -> int:
        delivered = 0
        for observer in self.observers(payload.event):
            try:
                observer(payload)
            except Exception:
                logger.exception(
                    "order_event_observer_failed event=%s observer=%r",
                    payload.event.value,
                    observer,
                )
                continue
            delivered += 1
        return delivered


def log_order_event(payload: OrderEventPayload) -> None:
    if isinstance(payload, OrderStatusUpdated):
        _EVENTS_LOG.info(
            "%s orders_id=%s prev=%s next=%s updated_by=%s",
            payload.event.value,
            payload.orders_id,
            payload.prev_orders_status_id,
            payload.next_orders_status_id,
            payload.updated_by or "-",
        )
    else:
        _EVENTS_LOG.info(
            "%s orders_status_history_id=%s orders_id=%s status=%s notified=%s updated_by=%s",
            payload.event.value,
            payload.orders_status_history_id,
            payload.orders_id,
            payload.orders_status_id,
            payload.customer_notified,
            payload.updated_by,
        )


def build_default_event_bus() -> EventBus:
    from order_history.services.telegram_notify import TelegramStatusObserver

    bus = EventBus()
    for event in OrderEvent:
        bus.attach(event, log_order_event)
    bus.attach(OrderEvent.STATUS_UPDATED, TelegramStatusObserver())
    return bus
