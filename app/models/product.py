import uuid

from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    TIMESTAMP,
    CheckConstraint,
    Index,
    func,
)
from app.db.base import Base


def generate_id() -> str:
    return uuid.uuid4().hex


class Product(Base):
    __tablename__ = "products"

    id = Column(
        String(64),
        primary_key=True,
        default=generate_id,
    )

    title = Column(
        String(255),
        nullable=False,
        comment="商品名称",
    )

    image = Column(
        String(512),
        nullable=True,
        comment="商品主图",
    )

    price = Column(
        Numeric(10, 2),
        nullable=False,
        comment="原价",
    )

    sale_price = Column(
        Numeric(10, 2),
        nullable=False,
        default=0,
        server_default="0",
        comment="促销价，0 表示无促销",
    )

    total_stock = Column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="当前可售库存",
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

    __table_args__ = (
        CheckConstraint(
            "total_stock >= 0",
            name="ck_total_stock_non_negative",
        ),
        CheckConstraint(
            "sale_price >= 0",
            name="ck_sale_price_non_negative",
        ),
    )

    @property
    def effective_price(self):
        """有促销价时按促销价计算"""
        if self.sale_price is not None and self.sale_price > 0:
            return self.sale_price
        return self.price


# -----------------------------
# 组合索引（按名称搜索）
# -----------------------------
Index(
    "idx_products_title",
    Product.title,
)
