from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

from catalogue.product.product import DEFAULT_IMAGE

# Base class for declarative ORM models.
Base = declarative_base()


class ProductRecord(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text)
    image = Column(String(500), default=DEFAULT_IMAGE)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class CustomerRecord(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(254), nullable=False)
    address = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False)


class OrderRecord(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False)
    total = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    customer = relationship(CustomerRecord, lazy="joined")
    items = relationship(
        "OrderItemRecord",
        order_by="OrderItemRecord.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class OrderItemRecord(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    # Plain column, no foreign key: lines outlive the products they snapshot
    product_id = Column(String(36), nullable=False)
    product_name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Float, nullable=False)
