"""订单服务实现

下单：按服务端商品价格重新计算总额，校验通过后创建支付意图和待支付订单。
支付确认：确认支付意图，扣减库存、清空购物车并确认订单，整个过程在同一事务内完成。
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
import logging

from redlock import Redlock
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import (
    AmountMismatchError,
    CaptureInProgressError,
    InsufficientStockError,
    NoOrdersFoundError,
    OrderAlreadyCapturedError,
    OrderNotFoundError,
    PaymentFailedError,
    ProductNotFoundError,
)
from app.models.cart import Cart
from app.models.inventory_logs import ChangeType, InventoryLog
from app.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from app.models.product import Product
from app.schemas.order import CreateOrderRequest
from app.schemas.payment import PaymentIntentStatus
from app.services.payment_gateway import MockPaymentGateway

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """统一保留两位小数（四舍五入）"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """金额转换为最小货币单位（美分）"""
    return int((to_money(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderService:
    """订单核心服务类"""

    def __init__(
        self,
        db: Session,
        gateway: MockPaymentGateway,
        rlock: Redlock = None,
        payment_method: str = "stripe",
        lock_ttl_ms: int = 10000,
        source: str = "order_service",
    ):
        self.db = db
        self.gateway = gateway
        self.rlock = rlock
        self.payment_method = payment_method
        self.lock_ttl_ms = lock_ttl_ms
        self.source = source

    def _get_product(self, product_id: str, for_update: bool = False) -> Optional[Product]:
        stmt = select(Product).where(Product.id == product_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def _get_order(self, order_id: str, for_update: bool = False) -> Optional[Order]:
        stmt = (
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.cart_items))
        )
        if for_update:
            # 加锁读取并覆盖会话中已缓存的订单状态
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def calculate_total(self, request: CreateOrderRequest) -> Tuple[Decimal, Dict[str, Product]]:
        """按服务端商品价格重新计算订单总额

        Returns:
            (总额, 商品ID到商品的映射)；商品不存在时抛出 ProductNotFoundError
        """
        products = {}
        total = Decimal("0")
        for item in request.cart_items:
            product = products.get(item.product_id) or self._get_product(item.product_id)
            if product is None:
                raise ProductNotFoundError(f"Product with ID {item.product_id} not found")
            products[item.product_id] = product
            total += to_money(product.effective_price) * item.quantity
        return to_money(total), products

    def create_order(self, request: CreateOrderRequest) -> Dict[str, str]:
        """创建待支付订单

        Returns:
            包含 client_secret、order_id、payment_intent_id 的字典
        """
        try:
            server_total, products = self.calculate_total(request)
            if to_money(request.total_amount) != server_total:
                logger.warning(
                    f"订单总额不一致: user_id={request.user_id}, "
                    f"client={request.total_amount}, server={server_total}"
                )
                raise AmountMismatchError()

            intent = self.gateway.create_payment_intent(
                to_minor_units(server_total),
                metadata={"orderId": "temp_order_id", "userId": request.user_id},
            )

            now = utcnow()
            order = Order(
                user_id=request.user_id,
                cart_id=request.cart_id,
                address_info=request.address_info,
                order_status=OrderStatus.PENDING,
                payment_method=self.payment_method,
                payment_status=PaymentStatus.PENDING,
                payment_id=intent.id,
                payer_id=None,
                total_amount=server_total,
                order_date=now,
                order_update_date=now,
            )
            for item in request.cart_items:
                product = products[item.product_id]
                order.cart_items.append(
                    OrderItem(
                        product_id=product.id,
                        title=product.title,
                        image=item.image or product.image,
                        price=to_money(product.effective_price),
                        quantity=item.quantity,
                    )
                )

            self.db.add(order)
            self.db.commit()
            logger.info(
                f"创建订单成功: order_id={order.id}, user_id={order.user_id}, "
                f"total={server_total}, payment_intent={intent.id}"
            )
            return {
                "client_secret": intent.client_secret,
                "order_id": order.id,
                "payment_intent_id": intent.id,
            }

        except Exception:
            self.db.rollback()
            raise

    def capture_payment(self, payment_intent_id: Optional[str], order_id: str) -> Order:
        """确认支付并完成订单（带分布式锁）

        库存扣减、清空购物车、更新订单状态在同一事务中提交，
        任一商品失败则整体回滚，不会留下部分扣减。
        """
        order = self._get_order(order_id)
        if order is None:
            raise OrderNotFoundError()

        lock = None
        if self.rlock:
            lock = self.rlock.lock(f"lock:order:capture:{order_id}", self.lock_ttl_ms)
            if not lock:
                raise CaptureInProgressError()

        try:
            # 拿到锁后重新读取订单，等待期间可能已被其他请求确认
            order = self._get_order(order_id, for_update=True)
            if order is None:
                raise OrderNotFoundError()
            if order.payment_status == PaymentStatus.PAID:
                raise OrderAlreadyCapturedError()

            intent = self.gateway.confirm_payment_intent(payment_intent_id)
            if intent.status != PaymentIntentStatus.SUCCEEDED:
                logger.warning(f"支付确认失败: order_id={order_id}, status={intent.status.value}")
                raise PaymentFailedError()

            for item in order.cart_items:
                # 行级锁查询商品库存
                product = self._get_product(item.product_id, for_update=True)
                if product is None:
                    raise ProductNotFoundError(f"Product not found: {item.title}")

                if product.total_stock < item.quantity:
                    logger.warning(
                        f"库存不足: order_id={order_id}, product_id={product.id}, "
                        f"requested={item.quantity}, available={product.total_stock}"
                    )
                    raise InsufficientStockError(product.title)

                before = product.total_stock
                product.total_stock -= item.quantity

                self.db.add(InventoryLog(
                    product_id=product.id,
                    order_id=order.id,
                    change_type=ChangeType.CAPTURE,
                    quantity=-item.quantity,
                    before_stock=before,
                    after_stock=product.total_stock,
                    operator=f"{self.source}_{order.id}",
                    source=self.source,
                ))

            # 清空购物车（保留购物车本身）
            if order.cart_id:
                cart = self.db.get(Cart, order.cart_id)
                if cart is not None:
                    cart.items.clear()

            order.payment_status = PaymentStatus.PAID
            order.order_status = OrderStatus.CONFIRMED
            order.payment_id = intent.id
            order.order_update_date = utcnow()

            self.db.commit()
            logger.info(f"支付确认成功: order_id={order_id}, payment_id={order.payment_id}")
            return order

        except Exception:
            self.db.rollback()
            raise
        finally:
            # 释放分布式锁
            if self.rlock and lock:
                self.rlock.unlock(lock)

    def check_stock(self, order_id: str) -> Dict[str, bool]:
        """只读检查订单各商品库存是否充足（不做任何修改）"""
        order = self._get_order(order_id)
        if order is None:
            raise OrderNotFoundError()

        result = {}
        for item in order.cart_items:
            product = self._get_product(item.product_id)
            result[item.product_id] = product is not None and product.total_stock >= item.quantity
        return result

    def list_orders_by_user(self, user_id: str) -> List[Order]:
        """查询用户的全部订单（按下单时间倒序）"""
        orders = self.db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .options(selectinload(Order.cart_items))
            .order_by(Order.order_date.desc())
        ).scalars().all()

        if not orders:
            raise NoOrdersFoundError()
        return list(orders)

    def get_order_details(self, order_id: str) -> Order:
        order = self._get_order(order_id)
        if order is None:
            raise OrderNotFoundError("Order not found!")
        return order
