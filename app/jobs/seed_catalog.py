"""演示数据初始化脚本（建表 + 商品 + 购物车）"""

import argparse
import logging
from decimal import Decimal

from app.db import init_db
from app.db.session import SessionLocal, engine
from app.models.cart import Cart, CartItem
from app.models.product import Product

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {"id": "p1", "title": "Test Product", "price": Decimal("50.00"), "sale_price": Decimal("0"), "total_stock": 10},
    {"id": "p2", "title": "Sale Product", "price": Decimal("80.00"), "sale_price": Decimal("59.99"), "total_stock": 5},
]


def seed(db, user_id: str = "user123", cart_id: str = "cart123") -> int:
    """写入演示商品和购物车，已存在的记录跳过

    Returns:
        新增的商品数量
    """
    created = 0
    for data in DEMO_PRODUCTS:
        if db.get(Product, data["id"]) is None:
            db.add(Product(**data))
            created += 1

    if db.get(Cart, cart_id) is None:
        db.add(Cart(
            id=cart_id,
            user_id=user_id,
            items=[CartItem(product_id="p1", quantity=2)],
        ))

    db.commit()
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(description='初始化演示商品和购物车')
    parser.add_argument('--user-id', default='user123', help='购物车所属用户ID')
    parser.add_argument('--cart-id', default='cart123', help='购物车ID')
    args = parser.parse_args(argv)

    init_db(engine)
    db = SessionLocal()
    try:
        count = seed(db, args.user_id, args.cart_id)
        logger.info(f"初始化完成：新增 {count} 个商品")
    except Exception as e:
        logger.error(f"初始化失败: {str(e)}")
        db.rollback()
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    exit(main())
