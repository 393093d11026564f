"""
Modelos relacionados con órdenes/pedidos
"""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from backoffice.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Order(Base):
    """
    Customer order. Status is one of OrderStatus, checked at the service
    boundary, not by the table.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    order_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    total_amount = Column(DECIMAL(12, 2), nullable=False, default=0)
    status = Column(String(50), nullable=False, default="Pending", index=True)

    # Cliente
    customer_name = Column(String(255))
    customer_email = Column(String(255))
    shipping_address = Column(Text)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    payment = relationship("Payment", back_populates="order", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Order id={self.id} status={self.status} total={self.total_amount}>"


class OrderItem(Base):
    """
    Items/productos de cada orden
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(DECIMAL(12, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")

    @property
    def line_total(self):
        return (self.unit_price or 0) * (self.quantity or 0)


class Payment(Base):
    """
    Payment of an order (at most one per order)
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)

    amount = Column(DECIMAL(12, 2), nullable=False, default=0)
    payment_method = Column(String(50))
    payment_status = Column(String(50), nullable=False, default="Pending", index=True)
    payment_date = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    order = relationship("Order", back_populates="payment")
