"""
OrderStore — Хранилище активных ордеров

Ключ: (asset_contract, asset_id). На ключ — не больше одного ордера.
put перезаписывает без ошибки (семантика replace), remove идемпотентен.
"""

from typing import Dict, Iterator, Optional

from src.core.domain.order import Order, OrderKey


class OrderStore:
    """In-memory Order Store с поддержкой checkpoint/restore."""

    def __init__(self):
        self._orders: Dict[OrderKey, Order] = {}

    def put(self, key: OrderKey, order: Order) -> Optional[Order]:
        """
        Сохранение ордера с перезаписью существующего.

        Args:
            key: Ключ пары (asset_contract, asset_id)
            order: Новый ордер

        Returns:
            Заменённый ордер или None

        Raises:
            ValueError: Если key не совпадает с парой ордера
        """
        if order.key != key:
            raise ValueError(f"Order {order.id} does not belong to key {key}")
        replaced = self._orders.get(key)
        self._orders[key] = order
        return replaced

    def get(self, key: OrderKey) -> Optional[Order]:
        """Текущий ордер или None, если ордера нет."""
        return self._orders.get(key)

    def remove(self, key: OrderKey) -> Optional[Order]:
        """
        Удаление ордера. Отсутствующий ключ — no-op.

        Returns:
            Удалённый ордер или None
        """
        return self._orders.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._orders

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders.values()))

    # Ордера immutable: копируется только словарь
    def checkpoint(self) -> Dict[OrderKey, Order]:
        return dict(self._orders)

    def restore(self, token: Dict[OrderKey, Order]) -> None:
        self._orders = dict(token)
