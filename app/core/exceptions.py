"""订单业务异常

业务异常直接继承 HTTPException，由全局异常处理器统一转换为
{"success": false, "message": ...} 的响应格式。
"""

from fastapi import HTTPException


class OrderServiceError(HTTPException):
    """订单服务业务异常基类"""
    status_code = 400
    message = "Order request failed"

    def __init__(self, message: str = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class AmountMismatchError(OrderServiceError):
    status_code = 400
    message = "Total amount mismatch. Please try again."


class ProductNotFoundError(OrderServiceError):
    status_code = 404
    message = "Product not found"


class OrderNotFoundError(OrderServiceError):
    status_code = 404
    message = "Order can not be found"


class NoOrdersFoundError(OrderServiceError):
    status_code = 404
    message = "No orders found!"


class InsufficientStockError(OrderServiceError):
    status_code = 400

    def __init__(self, product_title: str):
        super().__init__(f"Not enough stock for product: {product_title}")


class PaymentFailedError(OrderServiceError):
    status_code = 400
    message = "Payment failed"


class OrderAlreadyCapturedError(OrderServiceError):
    status_code = 400
    message = "Order has already been paid"


class CaptureInProgressError(OrderServiceError):
    status_code = 429
    message = "Payment capture already in progress, please retry later"


class PaymentGatewayError(Exception):
    """支付网关调用失败（非业务异常，按 500 处理）"""
    pass
