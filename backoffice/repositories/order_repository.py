"""
Order Repository - Data Access Layer for Orders

Order listing, order lines and payment, and the aggregates the dashboard
needs. Sums and counts run in the database instead of loading every order.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backoffice.models import Order, OrderItem, Payment
from backoffice.repositories.base import Repository


class OrderRepository(Repository[Order]):
    """Repository for Order data access"""

    model = Order

    def __init__(self, session: Session):
        super().__init__(session)

    def get_recent(self, limit: int = 100) -> List[Order]:
        """
        Newest orders first, read-only

        Args:
            limit: Maximum orders to return
        """
        statement = (
            select(Order)
            .order_by(Order.order_date.desc(), Order.id.desc())
            .limit(limit)
        )
        return self._read_only(statement)

    def get_items(self, order_id: int) -> List[OrderItem]:
        """Line items of an order, read-only"""
        statement = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        return self._read_only(statement)

    def get_payment(self, order_id: int) -> Optional[Payment]:
        """Payment of an order, tracked by the session, or None"""
        statement = select(Payment).where(Payment.order_id == order_id)
        return self.session.scalars(statement).first()

    def total_revenue(self) -> Decimal:
        """Sum of total_amount over all orders (0 when there are none)"""
        total = self.session.scalar(select(func.sum(Order.total_amount)))
        if total is None:
            return Decimal("0")
        return Decimal(str(total))

    def count_between(self, start: datetime, end: datetime) -> int:
        """Orders placed in [start, end)"""
        return self.count(Order.order_date >= start, Order.order_date < end)
