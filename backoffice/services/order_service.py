"""
Order Service
Admin order handling: listing, details, status and payment status
changes, deletion.

Statuses are free-standing: any member of OrderStatus may replace any
other in one step. Only set membership is checked.
"""
import logging
from typing import List, Optional

from backoffice.core.exceptions import ValidationError
from backoffice.domain.order import (
    OrderDetails, OrderItemRead, OrderRead, OrderStatus, PaymentRead, PaymentStatus,
)
from backoffice.models import Order, Payment
from backoffice.repositories.base import Repository
from backoffice.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderService:
    """Business logic for the admin order screens"""

    def __init__(self, orders: OrderRepository, payments: Repository[Payment]):
        self.orders = orders
        self.payments = payments

    def list_recent_orders(self, limit: int = 100) -> List[Order]:
        logger.info(f"Fetching latest {limit} orders")
        return self.orders.get_recent(limit)

    def get_order_details(self, order_id: int) -> Optional[OrderDetails]:
        """
        Order with its items and payment

        Returns:
            OrderDetails or None if the order does not exist
        """
        order = self.orders.get_by_id(order_id)
        if order is None:
            return None

        items = self.orders.get_items(order_id)
        payment = self.orders.get_payment(order_id)

        return OrderDetails(
            order=OrderRead.model_validate(order),
            items=[OrderItemRead.model_validate(item) for item in items],
            payment=PaymentRead.model_validate(payment) if payment else None,
        )

    def update_status(self, order_id: int, status: str) -> Optional[Order]:
        """
        Set the status of an order

        Returns:
            The updated order, or None if the order does not exist

        Raises:
            ValidationError: status is not one of OrderStatus (order unchanged)
        """
        order = self.orders.get_by_id(order_id)
        if order is None:
            logger.warning(f"Status update requested for non-existing order {order_id}")
            return None

        if status not in OrderStatus.values():
            logger.warning(f"Rejected status {status!r} for order {order_id}")
            raise ValidationError("status", "Invalid status")

        order.status = status
        order = self.orders.update(order)
        self.orders.save_changes()

        logger.info(f"Order {order_id} status updated to {status}")
        return order

    def update_payment_status(self, order_id: int, payment_status: str) -> Optional[Payment]:
        """
        Set the payment status of an order's payment

        Returns:
            The updated payment, or None if the order has no payment record

        Raises:
            ValidationError: payment_status is not one of PaymentStatus
        """
        payment = self.orders.get_payment(order_id)
        if payment is None:
            logger.warning(f"Payment record not found for order {order_id}")
            return None

        if payment_status not in PaymentStatus.values():
            logger.warning(f"Rejected payment status {payment_status!r} for order {order_id}")
            raise ValidationError("payment_status", "Invalid payment status")

        payment.payment_status = payment_status
        payment = self.payments.update(payment)
        self.payments.save_changes()

        logger.info(f"Order {order_id} payment status updated to {payment_status}")
        return payment

    def delete_order(self, order_id: int) -> bool:
        """
        Delete an order with its items and payment

        Returns:
            False if the order does not exist
        """
        order = self.orders.get_by_id(order_id)
        if order is None:
            return False

        self.orders.remove(order)
        self.orders.save_changes()

        logger.info(f"Order {order_id} deleted")
        return True
