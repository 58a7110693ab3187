"""订单相关的 Celery 任务"""

from celery_app import app
from app.db.session import SessionLocal
from app.core.dependencies import build_order_service
from app.core.redis import redlock
import logging

logger = logging.getLogger(__name__)

@app.task(name='tasks.order.capture_payment')
def capture_order_payment(order_id: str, payment_intent_id: str = None):
    """异步确认支付

    Args:
        order_id: 订单ID
        payment_intent_id: 支付意图ID（可为空）

    Returns:
        订单确认结果
    """
    db = SessionLocal()
    try:
        service = build_order_service(db, rlock=redlock, source="celery")
        order = service.capture_payment(payment_intent_id, order_id)
        logger.info(f"异步确认支付成功: {order_id}")
        return {
            "status": "success",
            "order_id": order.id,
            "order_status": order.order_status.value,
            "payment_id": order.payment_id,
        }
    except Exception as e:
        logger.error(f"异步确认支付失败: {order_id}, error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()

# 导出任务
__all__ = [
    'capture_order_payment',
]
