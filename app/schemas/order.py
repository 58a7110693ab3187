# app/schemas/order.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.models.order import OrderStatus, PaymentStatus
from app.schemas.base import CamelSchema


# ==================== 请求模型 ====================

class CartItemIn(CamelSchema):
    """下单商品项（价格以服务端商品数据为准）"""
    product_id: str = Field(..., min_length=1, examples=["p1"])
    quantity: int = Field(..., gt=0, examples=[2])
    title: Optional[str] = None
    image: Optional[str] = None
    price: Optional[Decimal] = None


class CreateOrderRequest(CamelSchema):
    """创建订单请求，客户端提交的总额仅用于校验"""
    user_id: str = Field(..., min_length=1, examples=["user123"])
    cart_id: Optional[str] = Field(None, examples=["cart123"])
    cart_items: List[CartItemIn] = Field(default_factory=list)
    address_info: Optional[Dict[str, Any]] = None
    total_amount: Decimal = Field(..., ge=0, examples=[100])


class CaptureOrderRequest(CamelSchema):
    """确认支付请求"""
    payment_intent_id: Optional[str] = Field(None, examples=["pi_mock_1700000000000_abc123def"])
    order_id: str = Field(..., min_length=1)


# ==================== 订单数据 ====================

class OrderItemSchema(CamelSchema):
    product_id: str
    title: str
    image: Optional[str] = None
    price: Decimal
    quantity: int


class OrderSchema(CamelSchema):
    id: str
    user_id: str
    cart_id: Optional[str] = None
    cart_items: List[OrderItemSchema] = []
    address_info: Optional[Dict[str, Any]] = None
    order_status: OrderStatus
    payment_method: str
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    payer_id: Optional[str] = None
    total_amount: Decimal
    order_date: datetime
    order_update_date: datetime


# ==================== 响应模型 ====================

class BaseResponse(CamelSchema):
    success: bool
    message: Optional[str] = None


class CreateOrderResponse(BaseResponse):
    client_secret: str
    order_id: str
    payment_intent_id: str


class CaptureOrderResponse(BaseResponse):
    data: OrderSchema
    order_status: OrderStatus
    cart_cleared: bool = True


class OrderListResponse(BaseResponse):
    data: List[OrderSchema]


class OrderDetailResponse(BaseResponse):
    data: OrderSchema


class CeleryTaskResponse(BaseResponse):
    task_id: Optional[str] = None


class TaskStatusResponse(CamelSchema):
    task_id: str
    status: str
    state: str
