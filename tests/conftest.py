"""测试配置和 fixtures"""
import os

# 测试环境使用内存 SQLite，必须在导入 app 之前设置
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from decimal import Decimal
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from redlock import Redlock

import app.models  # noqa: F401  注册模型
from app.db.base import Base
from app.models.cart import Cart, CartItem
from app.models.product import Product
from app.schemas.payment import PaymentFailureMode
from app.services.order_service import OrderService
from app.services.payment_gateway import MockPaymentGateway


@pytest.fixture
def db_engine():
    """内存数据库引擎（所有线程共享同一连接）"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def mock_db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(
        bind=db_engine,
        autoflush=False,
        expire_on_commit=False,
    )
    db = SessionLocal()

    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def mock_redlock():
    """创建模拟 Redlock 分布式锁"""
    redlock_mock = Mock(spec=Redlock)
    lock_mock = Mock()
    redlock_mock.lock.return_value = lock_mock
    redlock_mock.unlock.return_value = True
    return redlock_mock


@pytest.fixture
def gateway():
    """总是成功的模拟支付网关"""
    return MockPaymentGateway(currency="usd", failure_mode=PaymentFailureMode.NONE)


@pytest.fixture
def order_service(mock_db_session, gateway):
    """不带分布式锁的订单服务"""
    return OrderService(mock_db_session, gateway)


@pytest.fixture
def seeded_catalog(mock_db_session):
    """示例商品和购物车：p1 单价 50 库存 10，p2 促销价 30 库存 5"""
    mock_db_session.add_all([
        Product(id="p1", title="Test Product", image="p1.jpg", price=Decimal("50.00"),
                sale_price=Decimal("0"), total_stock=10),
        Product(id="p2", title="Sale Product", image="p2.jpg", price=Decimal("45.00"),
                sale_price=Decimal("30.00"), total_stock=5),
        Cart(id="cart123", user_id="user123", items=[
            CartItem(product_id="p1", quantity=2),
            CartItem(product_id="p2", quantity=1),
        ]),
    ])
    mock_db_session.commit()
    return mock_db_session


@pytest.fixture
def sample_order_data():
    """示例下单数据"""
    return {
        "userId": "user123",
        "cartId": "cart123",
        "cartItems": [
            {
                "productId": "p1",
                "quantity": 2,
                "title": "Test Product",
                "image": "test.jpg",
                "price": 50
            }
        ],
        "addressInfo": {
            "address": "123 Main St",
            "city": "Test City",
            "zip": "12345"
        },
        "orderStatus": "pending",
        "paymentMethod": "stripe",
        "paymentStatus": "pending",
        "totalAmount": 100
    }
