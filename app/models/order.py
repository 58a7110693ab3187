import enum

from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    ForeignKey,
    TIMESTAMP,
    JSON,
    Enum,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.product import generate_id


# 1️ 订单状态 / 支付状态枚举

class OrderStatus(str, enum.Enum):
    PENDING = "pending"       # 待支付
    CONFIRMED = "confirmed"   # 已确认


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"   # 待支付
    PAID = "paid"         # 已支付


# 2️ 订单表

class Order(Base):
    __tablename__ = "orders"

    id = Column(
        String(64),
        primary_key=True,
        default=generate_id,
    )

    user_id = Column(
        String(64),
        nullable=False,
        index=True,
        comment="下单用户ID",
    )

    cart_id = Column(
        String(64),
        nullable=True,
        comment="来源购物车ID（支付成功后清空）",
    )

    address_info = Column(
        JSON,
        nullable=True,
        comment="收货地址快照",
    )

    order_status = Column(
        Enum(OrderStatus, name="order_status_type"),
        nullable=False,
        default=OrderStatus.PENDING,
    )

    payment_method = Column(
        String(32),
        nullable=False,
        default="stripe",
    )

    payment_status = Column(
        Enum(PaymentStatus, name="payment_status_type"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    payment_id = Column(
        String(128),
        nullable=True,
        comment="支付意图ID",
    )

    payer_id = Column(
        String(128),
        nullable=True,
    )

    total_amount = Column(
        Numeric(10, 2),
        nullable=False,
        comment="服务端重新计算的订单总额",
    )

    order_date = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
    )

    order_update_date = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
    )

    cart_items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
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


# 3️ 订单明细（下单时的商品快照）

class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    order_id = Column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product_id = Column(
        String(64),
        nullable=False,
        comment="商品ID",
    )

    title = Column(
        String(255),
        nullable=False,
        comment="商品名称快照",
    )

    image = Column(
        String(512),
        nullable=True,
    )

    price = Column(
        Numeric(10, 2),
        nullable=False,
        comment="下单时的成交单价",
    )

    quantity = Column(
        Integer,
        nullable=False,
    )

    order = relationship("Order", back_populates="cart_items")


# 4 按用户查询订单列表

Index(
    "idx_orders_user_order_date",
    Order.user_id,
    Order.order_date.desc(),
)
