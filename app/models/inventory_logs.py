import enum

from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    String,
    TIMESTAMP,
    Enum,
    Index,
    func,
)
from app.db.base import Base

# 1 库存变更类型
class ChangeType(str, enum.Enum):
    CAPTURE = "CAPTURE"   # 支付确认扣减

# 2️ 库存日志表
class InventoryLog(Base):
    __tablename__ = "inventory_logs"

    # SQLite 只对 INTEGER 主键自增
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    product_id = Column(
        String(64),
        nullable=False,
        index=True,
        comment="商品ID",
    )

    order_id = Column(
        String(64),
        nullable=True,
        index=True,
        comment="订单ID（可能为空，例如库存调整）",
    )

    change_type = Column(
        Enum(ChangeType, name="inventory_change_type"),
        nullable=False,
        comment="库存变更类型",
    )

    quantity = Column(
        Integer,
        nullable=False,
        comment="变更数量",
    )

    before_stock = Column(
        Integer,
        nullable=False,
        comment="变更前库存",
    )

    after_stock = Column(
        Integer,
        nullable=False,
        comment="变更后库存",
    )

    created_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    operator = Column(
        String(64),
        nullable=True,
        comment="操作人/服务名",
    )

    source = Column(
        String(50),
        nullable=True,
        comment="来源：order_service / manual / celery",
    )

# 3️ 组合索引（高频查询优化）


Index(
    "idx_inventory_logs_product_created_desc",
    InventoryLog.product_id,
    InventoryLog.created_at.desc(),
)
