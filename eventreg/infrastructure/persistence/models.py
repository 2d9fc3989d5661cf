"""
Database models for event registration orders.

Handles:
- Buyers (users) and their contact details
- Orders with amounts in minor units (cents)
- Participants, add-ons (merchandise) and refunds attached to an order
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    and_,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from eventreg.domain.orders import (
    FulfillmentStatus,
    OrderStatus,
    OrderType,
    PaymentMethod,
    RefundStatus,
)
from eventreg.infrastructure.persistence.database import Base


def _enum_column(enum_class, **kwargs) -> Column:
    """String-backed enum column storing member values, e.g. 'paid'."""
    return Column(
        Enum(
            enum_class,
            native_enum=False,
            length=32,
            values_callable=lambda members: [member.value for member in members],
        ),
        **kwargs,
    )


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    mobile_no = Column(String(32), nullable=True)

    orders = relationship("Order", back_populates="user")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)


class Tier(Base):
    """Pricing tier, e.g. 'Early Bird'."""

    __tablename__ = "tiers"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)


class Order(Base):
    """
    A purchase: registration fees, merchandise and donations in one checkout.

    All *_amount columns and processing_fee are integer cents.
    payment_meta is gateway metadata; the export reads "gateway_fee" from it.
    """

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(64), nullable=False, unique=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    tier_id = Column(Integer, ForeignKey("tiers.id"), nullable=True)

    types = Column(JSON, nullable=False, default=list)
    status = _enum_column(OrderStatus, nullable=False, default=OrderStatus.PENDING)
    payment_method = _enum_column(PaymentMethod, nullable=True)
    fulfillment_status = _enum_column(FulfillmentStatus, nullable=True)

    category_price_amount = Column(Integer, nullable=False, default=0)
    add_on_amount = Column(Integer, nullable=False, default=0)
    donation_amount = Column(Integer, nullable=False, default=0)
    subtotal_amount = Column(Integer, nullable=False, default=0)
    processing_fee = Column(Integer, nullable=False, default=0)
    gst_amount = Column(Integer, nullable=False, default=0)
    total_amount = Column(Integer, nullable=False, default=0)

    payment_meta = Column(JSON, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    user = relationship("User", back_populates="orders")
    category = relationship("Category")
    tier = relationship("Tier")
    participants = relationship("Participant", back_populates="order")
    add_ons = relationship("AddOn", back_populates="order")
    refunds = relationship("Refund", back_populates="order")
    completed_refunds = relationship(
        "Refund",
        primaryjoin=lambda: and_(
            Order.id == Refund.order_id,
            Refund.status == RefundStatus.COMPLETED,
        ),
        viewonly=True,
    )

    __table_args__ = (Index("idx_orders_created_at_id", "created_at", "id"),)

    @property
    def types_label(self) -> str:
        """Human-readable order types, e.g. 'Registration, Merchandise'."""
        return ", ".join(OrderType(value).label for value in (self.types or []))

    def total_refunded_amount(self) -> int:
        """Sum of completed refunds in cents."""
        return sum(refund.amount for refund in self.completed_refunds)

    def __repr__(self) -> str:
        return f"<Order {self.order_number} status={self.status}>"


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    order = relationship("Order", back_populates="participants")


class AddOn(Base):
    """Merchandise item bought with an order."""

    __tablename__ = "add_ons"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Integer, nullable=False, default=0)

    order = relationship("Order", back_populates="add_ons")


class Refund(Base):
    __tablename__ = "refunds"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    status = _enum_column(RefundStatus, nullable=False, default=RefundStatus.PENDING)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    order = relationship("Order", back_populates="refunds")
