"""
Order Domain Models

Order, order item and payment shapes, plus the fixed status sets the
admin flow accepts.
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


def _decimals_to_float(data: dict, fields) -> dict:
    for field in fields:
        if data.get(field) is not None:
            data[field] = float(data[field])
    return data


class OrderItemRead(BaseModel):
    """
    Order Item domain model - a line item in an order

    Fields:
        id: Internal order item ID
        order_id: Parent order ID
        product_id: Reference to product catalog
        quantity: Number of units ordered
        unit_price: Price per unit at order time
    """

    id: int = Field(..., description="Order item ID")
    order_id: int = Field(..., description="Parent order ID")
    product_id: Optional[int] = Field(None, description="Product catalog ID")
    quantity: int = Field(..., description="Quantity ordered")
    unit_price: Decimal = Field(..., description="Price per unit")

    model_config = ConfigDict(from_attributes=True)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['line_total'] = self.line_total
        return _decimals_to_float(data, ['unit_price', 'line_total'])


class PaymentRead(BaseModel):
    """Payment of an order"""

    id: int
    order_id: int
    amount: Decimal
    payment_method: Optional[str] = None
    payment_status: str
    payment_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return _decimals_to_float(self.model_dump(), ['amount'])


class OrderRead(BaseModel):
    """
    Order domain model

    status is kept as a plain string: rows written outside the admin flow
    are not guaranteed to hold a member of OrderStatus.
    """

    id: int = Field(..., description="Order ID")
    order_date: datetime = Field(..., description="When the order was placed (UTC)")
    total_amount: Decimal = Field(..., description="Order total")
    status: str = Field(..., description="Order status")
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    shipping_address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return _decimals_to_float(self.model_dump(), ['total_amount'])


class OrderDetails(BaseModel):
    """An order with its lines, its payment and the statuses it may take"""

    order: OrderRead
    items: List[OrderItemRead] = Field(default_factory=list)
    payment: Optional[PaymentRead] = None
    allowed_statuses: List[str] = Field(default_factory=OrderStatus.values)
    allowed_payment_statuses: List[str] = Field(default_factory=PaymentStatus.values)

    def to_dict(self) -> dict:
        return {
            "order": self.order.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "payment": self.payment.to_dict() if self.payment else None,
            "allowed_statuses": self.allowed_statuses,
            "allowed_payment_statuses": self.allowed_payment_statuses,
        }


class StatusUpdate(BaseModel):
    """Requested order status (validated by OrderService)"""
    status: str


class PaymentStatusUpdate(BaseModel):
    """Requested payment status (validated by OrderService)"""
    payment_status: str
