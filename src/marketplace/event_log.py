"""
EventLog — журнал наблюдаемых событий marketplace

Для внешних индексаторов и тестов. Каждое событие с JSON контрактом
валидируется перед публикацией. Подписчики только наблюдают:
их сбой логируется и не влияет на операцию, которая уже закоммичена.
"""

import logging
from typing import Callable, List, Optional, Type, TypeVar

from src.core.contracts import validate_event
from src.core.domain.events import MarketplaceEvent

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=MarketplaceEvent)

Subscriber = Callable[[MarketplaceEvent], None]


class EventLog:
    """
    Append-only журнал событий с подписчиками.

    Args:
        validate_contracts: Проверять события против JSON Schema
    """

    def __init__(self, validate_contracts: bool = True):
        self.validate_contracts = validate_contracts
        self._events: List[MarketplaceEvent] = []
        self._subscribers: List[Subscriber] = []

    def validate(self, event: MarketplaceEvent) -> None:
        """
        Raises:
            ValidationError: Если событие не соответствует своему контракту
        """
        if self.validate_contracts:
            validate_event(event)

    def publish(self, event: MarketplaceEvent) -> None:
        self.validate(event)
        self._events.append(event)
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s", subscriber, event.name)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Подписка на новые события.

        Returns:
            Функция отписки
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def events(self) -> tuple[MarketplaceEvent, ...]:
        return tuple(self._events)

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [e for e in self._events if isinstance(e, event_type)]

    def last(self) -> Optional[MarketplaceEvent]:
        return self._events[-1] if self._events else None

    def __len__(self) -> int:
        return len(self._events)
