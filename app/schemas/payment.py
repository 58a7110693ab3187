"""模拟支付网关的数据结构"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PaymentIntentStatus(str, Enum):
    """支付意图状态（与 Stripe 的取值保持一致）"""
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    SUCCEEDED = "succeeded"


class PaymentFailureMode(str, Enum):
    """故障注入模式"""
    NONE = "none"        # 总是成功
    DECLINE = "decline"  # 确认时返回未支付状态
    ERROR = "error"      # 网关调用直接抛错


class Charge(BaseModel):
    id: str
    amount: int = 0
    currency: str
    status: PaymentIntentStatus


class PaymentIntent(BaseModel):
    id: Optional[str]
    status: PaymentIntentStatus
    amount: Optional[int] = None
    currency: str
    client_secret: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    charges: List[Charge] = Field(default_factory=list)
