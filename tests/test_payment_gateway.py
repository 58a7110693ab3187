"""模拟支付网关单元测试"""
import pytest
from types import SimpleNamespace

from app.core.exceptions import PaymentGatewayError
from app.schemas.payment import PaymentFailureMode, PaymentIntentStatus
from app.services.payment_gateway import MockPaymentGateway


class TestMockPaymentGateway:
    """模拟支付网关测试类"""

    def test_create_payment_intent(self, gateway):
        """测试创建支付意图"""
        intent = gateway.create_payment_intent(10000, metadata={"userId": "user123"})

        assert intent.id.startswith("pi_mock_")
        assert intent.client_secret.startswith(f"{intent.id}_secret_mock")
        assert intent.amount == 10000
        assert intent.currency == "usd"
        assert intent.status == PaymentIntentStatus.REQUIRES_PAYMENT_METHOD
        assert intent.metadata == {"userId": "user123"}

    def test_create_payment_intent_unique_ids(self, gateway):
        """测试每次生成的支付意图ID和密钥都不同"""
        first = gateway.create_payment_intent(100)
        second = gateway.create_payment_intent(200)

        assert first.id != second.id
        assert first.client_secret != second.client_secret

    def test_create_payment_intent_zero_amount(self, gateway):
        """测试金额为 0 时仍可创建"""
        intent = gateway.create_payment_intent(0)
        assert intent.amount == 0

    def test_create_payment_intent_negative_amount(self, gateway):
        """测试负数金额被拒绝"""
        with pytest.raises(ValueError):
            gateway.create_payment_intent(-1)

    @pytest.mark.parametrize("intent_id", ["pi_mock_12345", "anything", "", None])
    def test_confirm_always_succeeds(self, gateway, intent_id):
        """测试默认模式下任意输入都确认成功"""
        intent = gateway.confirm_payment_intent(intent_id)

        assert intent.id == intent_id
        assert intent.status == PaymentIntentStatus.SUCCEEDED
        assert intent.charges[0].id.startswith("ch_")

    def test_decline_mode(self):
        """测试拒付模式"""
        gateway = MockPaymentGateway(failure_mode=PaymentFailureMode.DECLINE)

        # 创建不受影响
        intent = gateway.create_payment_intent(500)
        confirmed = gateway.confirm_payment_intent(intent.id)

        assert confirmed.status == PaymentIntentStatus.REQUIRES_PAYMENT_METHOD

    def test_error_mode(self):
        """测试网关故障模式"""
        gateway = MockPaymentGateway(failure_mode="error")

        with pytest.raises(PaymentGatewayError):
            gateway.create_payment_intent(500)
        with pytest.raises(PaymentGatewayError):
            gateway.confirm_payment_intent("pi_mock_1")

    def test_from_settings(self):
        """测试从配置创建网关"""
        settings = SimpleNamespace(PAYMENT_CURRENCY="eur", PAYMENT_FAILURE_MODE="DECLINE")

        gateway = MockPaymentGateway.from_settings(settings)

        assert gateway.currency == "eur"
        assert gateway.failure_mode == PaymentFailureMode.DECLINE

    def test_from_settings_invalid_mode(self):
        """测试非法的故障模式配置"""
        settings = SimpleNamespace(PAYMENT_CURRENCY="usd", PAYMENT_FAILURE_MODE="sometimes")

        with pytest.raises(ValueError):
            MockPaymentGateway.from_settings(settings)
