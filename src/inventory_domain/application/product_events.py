"""Publish/subscribe notifications about product and stock changes."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

import pytz

from src.common.exceptions.custom_exceptions import ApplicationError

logger = logging.getLogger(__name__)

PRODUCT_ADDED = "product:added"
PRODUCT_UPDATED = "product:updated"
STOCK_UPDATED = "stock:updated"
SALE_RECORDED = "sale:recorded"
DAMAGE_RECORDED = "damage:recorded"
RETURN_RECORDED = "return:recorded"

PRODUCT_EVENTS = (
    PRODUCT_ADDED,
    PRODUCT_UPDATED,
    STOCK_UPDATED,
    SALE_RECORDED,
    DAMAGE_RECORDED,
    RETURN_RECORDED,
)


@dataclass(frozen=True)
class ProductEvent:
    name: str
    payload: Any
    occurred_at: datetime


Listener = Callable[[ProductEvent], None]


class ProductEventBus:
    """
    Delivers product events to the screens that subscribed to them.

    One bus is created by whoever wires the application together and handed to
    each consumer; there is no module-level instance.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    @staticmethod
    def _check_event(event_name: str) -> None:
        if event_name not in PRODUCT_EVENTS:
            raise ApplicationError(f"Unknown product event {event_name!r}; expected one of {PRODUCT_EVENTS}")

    def subscribe(self, event_name: str, listener: Listener) -> Callable[[], None]:
        """Registers listener and returns a function that removes it again."""
        self._check_event(event_name)
        self._listeners.setdefault(event_name, []).append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(event_name, listener)

        return unsubscribe

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_name)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def clear(self, event_name: str | None = None) -> None:
        if event_name:
            self._listeners.pop(event_name, None)
        else:
            self._listeners = {}

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    def publish(self, event_name: str, payload: Any = None) -> ProductEvent:
        """Calls every listener in subscription order. A failing listener does not stop the rest."""
        self._check_event(event_name)
        event = ProductEvent(name=event_name, payload=payload, occurred_at=datetime.now(pytz.utc))
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners.get(event_name, [])):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Error in listener for {event_name}: {e}")
        return event
