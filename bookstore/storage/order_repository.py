"""
Order Repository

Local storage for the order service. Referenced users and books live in
other services and are never joined here.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional

from .database import Repository
from .models import ORDER_STATUS_IN_PROGRESS, OrderModel, as_utc, utcnow


@dataclass
class StoredOrder:
    """Data class for order data transfer."""

    id: int
    user_id: int
    book_id: int
    status: str
    order_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model: OrderModel) -> "StoredOrder":
        return cls(
            id=model.id,
            user_id=model.user_id,
            book_id=model.book_id,
            status=model.status,
            order_date=as_utc(model.order_date),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def to_dict(self) -> dict:
        return asdict(self)


class OrderRepository(Repository):
    """Repository for orders."""

    tables = (OrderModel.__table__,)

    def create(
        self,
        user_id: int,
        book_id: int,
        status: str = ORDER_STATUS_IN_PROGRESS,
        order_date: Optional[datetime] = None,
    ) -> StoredOrder:
        """Insert one order; a single write, nothing partial is left on failure."""
        with self.get_session() as session:
            order = OrderModel(
                user_id=user_id,
                book_id=book_id,
                status=status,
                order_date=order_date or utcnow(),
            )
            session.add(order)
            session.commit()
            session.refresh(order)

            return StoredOrder.from_model(order)

    def get(self, order_id: int) -> Optional[StoredOrder]:
        with self.get_session() as session:
            order = session.get(OrderModel, order_id)
            if order:
                return StoredOrder.from_model(order)
            return None

    def list_all(self) -> list[StoredOrder]:
        """All orders in insertion order."""
        with self.get_session() as session:
            orders = session.query(OrderModel).order_by(OrderModel.id.asc()).all()
            return [StoredOrder.from_model(o) for o in orders]

    def count(self) -> int:
        with self.get_session() as session:
            return session.query(OrderModel).count()
