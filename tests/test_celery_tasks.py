"""Celery 任务单元测试"""
import pytest
from unittest.mock import Mock, patch

from app.core.exceptions import InsufficientStockError
from app.models.order import OrderStatus
from tasks.order_tasks import capture_order_payment


class TestOrderTasks:
    """订单 Celery 任务测试类"""

    def test_capture_order_payment_success(self):
        """测试异步确认支付成功"""
        order_mock = Mock(id="ORDER001", order_status=OrderStatus.CONFIRMED, payment_id="pi_mock_1")
        service_mock = Mock()
        service_mock.capture_payment.return_value = order_mock
        db_mock = Mock()

        with patch('tasks.order_tasks.SessionLocal') as mock_session_local, \
             patch('tasks.order_tasks.build_order_service') as mock_build_service, \
             patch('tasks.order_tasks.redlock') as mock_redlock:

            mock_session_local.return_value = db_mock
            mock_build_service.return_value = service_mock

            result = capture_order_payment("ORDER001", "pi_mock_1")

            assert result == {
                "status": "success",
                "order_id": "ORDER001",
                "order_status": "confirmed",
                "payment_id": "pi_mock_1",
            }
            mock_build_service.assert_called_once_with(db_mock, rlock=mock_redlock, source="celery")
            service_mock.capture_payment.assert_called_once_with("pi_mock_1", "ORDER001")
            db_mock.close.assert_called_once()

    def test_capture_order_payment_business_error(self):
        """测试异步确认支付遇到库存不足"""
        service_mock = Mock()
        service_mock.capture_payment.side_effect = InsufficientStockError("测试商品")
        db_mock = Mock()

        with patch('tasks.order_tasks.SessionLocal') as mock_session_local, \
             patch('tasks.order_tasks.build_order_service') as mock_build_service:

            mock_session_local.return_value = db_mock
            mock_build_service.return_value = service_mock

            with pytest.raises(InsufficientStockError):
                capture_order_payment("ORDER001", "pi_mock_1")

            db_mock.rollback.assert_called_once()
            db_mock.close.assert_called_once()

    def test_capture_order_payment_exception(self):
        """测试异步确认支付异常"""
        db_mock = Mock()

        with patch('tasks.order_tasks.SessionLocal') as mock_session_local, \
             patch('tasks.order_tasks.build_order_service') as mock_build_service:

            mock_session_local.return_value = db_mock
            mock_build_service.side_effect = Exception("数据库错误")

            with pytest.raises(Exception) as exc_info:
                capture_order_payment("ORDER001")

            assert "数据库错误" in str(exc_info.value)
            db_mock.rollback.assert_called_once()
