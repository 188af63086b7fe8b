"""
In-memory order store

Lives as long as the process. All access happens on the event loop, so
appends and id assignment need no locking.
"""

from itertools import count
from typing import List

from shared.schemas import OrderCreateSchema, OrderSchema


class OrderStoreFullError(Exception):
    """Raised when the store already holds ``capacity`` orders"""


class OrderStore:

    def __init__(self, capacity: int = 10000):
        self.capacity = capacity
        self._orders: List[OrderSchema] = []
        self._ids = count(1)

    def __len__(self) -> int:
        return len(self._orders)

    def list(self) -> List[OrderSchema]:
        return list(self._orders)

    def add(self, data: OrderCreateSchema) -> OrderSchema:
        if len(self._orders) >= self.capacity:
            raise OrderStoreFullError(f"Order store is full ({self.capacity} orders)")
        order = OrderSchema(id=next(self._ids), **data.model_dump())
        self._orders.append(order)
        return order
