"""订单支付确认本地执行脚本"""

import argparse
import logging
from app.db.session import SessionLocal
from app.core.dependencies import build_order_service

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def run_capture(order_id: str, payment_intent_id: str = None, dry_run: bool = False):
    """执行支付确认

    Args:
        order_id: 订单ID
        payment_intent_id: 支付意图ID，为空时沿用订单上的支付意图
        dry_run: 是否为试运行模式（只检查库存，不做任何修改）
    """
    db = SessionLocal()
    try:
        service = build_order_service(db, source="manual")
        if dry_run:
            # 试运行模式：只检查库存是否充足
            stock_check = service.check_stock(order_id)
            for product_id, enough in stock_check.items():
                logger.info(f"试运行模式：商品 {product_id} 库存{'充足' if enough else '不足'}")
            return stock_check

        order = service.capture_payment(payment_intent_id, order_id)
        logger.info(f"确认完成：订单 {order.id} 状态 {order.order_status.value}")
        return order

    except Exception as e:
        logger.error(f"确认执行失败: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()

def main(argv=None):
    """主函数"""
    parser = argparse.ArgumentParser(description='订单支付确认工具')
    parser.add_argument(
        'order_id',
        help='订单ID'
    )
    parser.add_argument(
        '--payment-intent-id',
        default=None,
        help='支付意图ID (默认: 使用订单上的支付意图)'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='试运行模式，只检查库存不执行确认'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='详细输出模式'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        result = run_capture(args.order_id, args.payment_intent_id, args.dry_run)
        if args.dry_run:
            ready = all(result.values())
            print(f"📊 试运行结果：{len(result)} 个商品，库存{'全部充足' if ready else '存在不足'}")
        else:
            print(f"✅ 确认完成：订单 {result.id} 已{result.order_status.value}")
    except Exception as e:
        detail = getattr(e, "detail", None) or str(e)
        print(f"❌ 执行失败: {detail}")
        return 1

    return 0

if __name__ == "__main__":
    exit(main())
