"""模拟支付网关

不发起任何外部调用，只生成结构上类似 Stripe 的支付意图。
生成的 ID 仅保证唯一，不具备任何加密意义。
"""

import logging
import time
import uuid
from typing import Dict, Optional

from app.core.exceptions import PaymentGatewayError
from app.schemas.payment import (
    Charge,
    PaymentFailureMode,
    PaymentIntent,
    PaymentIntentStatus,
)

logger = logging.getLogger(__name__)


def _random_token(length: int = 9) -> str:
    return uuid.uuid4().hex[:length]


class MockPaymentGateway:
    """模拟支付网关（支持故障注入）"""

    def __init__(self, currency: str = "usd", failure_mode: PaymentFailureMode = PaymentFailureMode.NONE):
        self.currency = currency
        self.failure_mode = PaymentFailureMode(failure_mode)

    @classmethod
    def from_settings(cls, settings) -> "MockPaymentGateway":
        return cls(
            currency=settings.PAYMENT_CURRENCY,
            failure_mode=PaymentFailureMode(settings.PAYMENT_FAILURE_MODE.lower()),
        )

    def create_payment_intent(
        self,
        amount: int,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentIntent:
        """创建支付意图

        Args:
            amount: 金额（最小货币单位，例如美分）
            currency: 币种，默认使用网关配置
            metadata: 附加信息
        """
        if amount is None or amount < 0:
            raise ValueError(f"Invalid payment amount: {amount}")
        if self.failure_mode == PaymentFailureMode.ERROR:
            raise PaymentGatewayError("Payment gateway unavailable")

        intent_id = f"pi_mock_{int(time.time() * 1000)}_{_random_token()}"
        intent = PaymentIntent(
            id=intent_id,
            status=PaymentIntentStatus.REQUIRES_PAYMENT_METHOD,
            amount=amount,
            currency=currency or self.currency,
            client_secret=f"{intent_id}_secret_mock_{_random_token()}",
            metadata=metadata or {},
        )
        logger.debug(f"Payment intent created: {intent_id}, amount={amount}")
        return intent

    def confirm_payment_intent(self, intent_id: Optional[str]) -> PaymentIntent:
        """确认支付意图，默认对任意输入（包括空值）都返回 succeeded"""
        if self.failure_mode == PaymentFailureMode.ERROR:
            raise PaymentGatewayError("Payment gateway unavailable")

        if self.failure_mode == PaymentFailureMode.DECLINE:
            status = PaymentIntentStatus.REQUIRES_PAYMENT_METHOD
        else:
            status = PaymentIntentStatus.SUCCEEDED

        charge = Charge(
            id=f"ch_{int(time.time() * 1000)}_{_random_token()}",
            currency=self.currency,
            status=status,
        )
        logger.debug(f"Payment intent confirmed: {intent_id}, status={status.value}")
        return PaymentIntent(
            id=intent_id,
            status=status,
            currency=self.currency,
            charges=[charge],
        )
