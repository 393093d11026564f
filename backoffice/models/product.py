"""
Modelos del catálogo: categorías y productos
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from backoffice.core.database import Base


class Category(Base):
    """
    Product category
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)

    # No ORM cascade: deleting a referenced category is left to the database FK
    products = relationship("Product", back_populates="category", passive_deletes=True)

    def __repr__(self):
        return f"<Category id={self.id} name={self.name!r}>"


class Product(Base):
    """
    Catalog product. price >= 0 and stock >= 0 are enforced by ProductService.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)

    price = Column(DECIMAL(12, 2), nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    image_url = Column(String(500))

    category_id = Column(Integer, ForeignKey("categories.id"), index=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    category = relationship("Category", back_populates="products")
    order_items = relationship("OrderItem", back_populates="product", passive_deletes=True)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name!r} price={self.price} stock={self.stock}>"
