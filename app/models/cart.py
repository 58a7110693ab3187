from sqlalchemy import (
    Column,
    String,
    Integer,
    ForeignKey,
    TIMESTAMP,
    CheckConstraint,
    func,
)
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.product import generate_id


class Cart(Base):
    __tablename__ = "carts"

    id = Column(
        String(64),
        primary_key=True,
        default=generate_id,
    )

    user_id = Column(
        String(64),
        nullable=False,
        index=True,
        comment="用户ID",
    )

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )

    created_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
        onupdate=func.now(),
    )


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    cart_id = Column(
        String(64),
        ForeignKey("carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product_id = Column(
        String(64),
        nullable=False,
        comment="商品ID",
    )

    quantity = Column(
        Integer,
        nullable=False,
        comment="购买数量",
    )

    cart = relationship("Cart", back_populates="items")

    __table_args__ = (
        CheckConstraint(
            "quantity > 0",
            name="ck_cart_item_quantity_positive",
        ),
    )
