"""依赖注入配置模块"""

from fastapi import Depends

# 数据库会话依赖
from app.db.session import SessionLocal
from sqlalchemy.orm import Session

# Redis 依赖
from app.core.redis import redlock
from app.core.config import settings

from app.services.order_service import OrderService
from app.services.payment_gateway import MockPaymentGateway


def get_redlock():
    """获取 Redlock 分布式锁实例"""
    return redlock

def get_payment_gateway() -> MockPaymentGateway:
    """按当前配置创建模拟支付网关"""
    return MockPaymentGateway.from_settings(settings)

def get_db() -> Session:
    """获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def build_order_service(db: Session, gateway: MockPaymentGateway = None, rlock=None, source: str = "order_service") -> OrderService:
    """组装订单服务，配置显式传入"""
    return OrderService(
        db=db,
        gateway=gateway or MockPaymentGateway.from_settings(settings),
        rlock=rlock,
        payment_method=settings.PAYMENT_METHOD,
        lock_ttl_ms=settings.CAPTURE_LOCK_TTL_MS,
        source=source,
    )


def get_order_service(
    db: Session = Depends(get_db),
    gateway: MockPaymentGateway = Depends(get_payment_gateway),
    rlock = Depends(get_redlock)
) -> OrderService:
    """获取订单服务实例（依赖注入）"""
    return build_order_service(db, gateway, rlock)


# 常用的依赖注入别名
OrderServiceDep = Depends(get_order_service)
