"""订单 API 路由"""

from fastapi import APIRouter, HTTPException, Path, Body
import logging

from app.core.dependencies import OrderServiceDep
from app.services.order_service import OrderService
from app.schemas.order import (
    CreateOrderRequest,
    CaptureOrderRequest,
    CreateOrderResponse,
    CaptureOrderResponse,
    OrderListResponse,
    OrderDetailResponse,
    OrderSchema,
    CeleryTaskResponse,
    TaskStatusResponse,
)
from tasks.order_tasks import capture_order_payment as celery_capture_task

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/order",
    tags=["订单管理"],
    responses={
        400: {"description": "请求参数错误或业务校验失败"},
        404: {"description": "资源未找到"},
        422: {"description": "请求验证失败"},
        500: {"description": "服务器内部错误"}
    }
)

CREATE_ERROR_MESSAGE = "Error while creating payment intent!"
GENERIC_ERROR_MESSAGE = "Some error occurred!"


@router.post(
    "/create",
    status_code=201,
    response_model=CreateOrderResponse,
    response_model_exclude_none=True,
    summary="创建订单",
    description="""按服务端商品价格校验订单总额，创建支付意图和待支付订单。

    **注意：**
    - 客户端提交的总额只用于校验，不一致时返回 400
    - 下单不会扣减库存，也不会清空购物车
    """,
    responses={
        201: {
            "description": "创建成功",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "clientSecret": "pi_mock_1700000000000_abc123def_secret_mock_0a1b2c3d4",
                        "orderId": "6f1c2e0b9d8a4c7e8f0a1b2c3d4e5f60",
                        "paymentIntentId": "pi_mock_1700000000000_abc123def"
                    }
                }
            }
        },
        400: {
            "description": "订单总额不一致",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "Total amount mismatch. Please try again."
                    }
                }
            }
        }
    }
)
async def create_order(
    request: CreateOrderRequest = Body(...),
    service: OrderService = OrderServiceDep
):
    """创建订单（待支付状态）"""
    try:
        result = service.create_order(request)
        return {"success": True, **result}
    except HTTPException:
        # 透传业务异常
        raise
    except Exception as e:
        logger.error(f"创建订单失败: {str(e)}", exc_info=True)
        # 未知异常统一抛 500
        raise HTTPException(status_code=500, detail=CREATE_ERROR_MESSAGE)


@router.post(
    "/capture",
    response_model=CaptureOrderResponse,
    summary="确认支付",
    description="""确认支付意图，扣减库存、清空购物车并确认订单。

    **注意：**
    - 任一商品库存不足时整体回滚，订单保持待支付状态
    - 同一订单的并发确认请求由分布式锁互斥
    """,
    responses={
        200: {
            "description": "支付成功",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Payment successful and order confirmed",
                        "orderStatus": "confirmed",
                        "cartCleared": True
                    }
                }
            }
        },
        400: {
            "description": "库存不足或支付失败",
            "content": {
                "application/json": {
                    "examples": {
                        "insufficient_stock": {
                            "summary": "库存不足",
                            "value": {
                                "success": False,
                                "message": "Not enough stock for product: Test Product"
                            }
                        },
                        "payment_failed": {
                            "summary": "支付失败",
                            "value": {
                                "success": False,
                                "message": "Payment failed"
                            }
                        }
                    }
                }
            }
        },
        429: {"description": "该订单正在确认支付"}
    }
)
async def capture_payment(
    request: CaptureOrderRequest = Body(...),
    service: OrderService = OrderServiceDep
):
    """确认支付（客户端支付完成后调用）"""
    try:
        order = service.capture_payment(request.payment_intent_id, request.order_id)
        return {
            "success": True,
            "message": "Payment successful and order confirmed",
            "data": OrderSchema.model_validate(order),
            "order_status": order.order_status,
            "cart_cleared": True,
        }
    except HTTPException:
        # 透传业务异常
        raise
    except Exception as e:
        logger.error(f"确认支付失败: {str(e)}", exc_info=True)
        # 未知异常统一抛 500
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)


@router.post(
    "/capture/async",
    status_code=202,
    response_model=CeleryTaskResponse,
    summary="异步确认支付",
)
async def capture_payment_async(request: CaptureOrderRequest = Body(...)):
    """提交 Celery 异步确认支付任务"""
    try:
        task = celery_capture_task.delay(request.order_id, request.payment_intent_id)
        return {
            "success": True,
            "message": "Capture task submitted",
            "task_id": task.id
        }
    except Exception as e:
        logger.error(f"Celery 任务提交失败: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)


@router.get(
    "/tasks/{task_id}",
    response_model=TaskStatusResponse,
    summary="查询异步任务状态",
)
async def get_task_status(task_id: str = Path(..., description="Celery 任务ID")):
    """查询 Celery 任务执行状态"""
    try:
        from celery_app import app
        task = app.AsyncResult(task_id)

        if task.state == 'PENDING':
            status = "Task pending"
        elif task.state == 'SUCCESS':
            status = f"Task finished: {task.result}"
        elif task.state == 'FAILURE':
            status = f"Task failed: {str(task.info)}"
        else:
            status = f"Task state: {task.state}"

        return {
            "task_id": task_id,
            "status": status,
            "state": task.state
        }
    except Exception as e:
        logger.error(f"查询任务状态失败: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)


@router.get(
    "/list/{user_id}",
    response_model=OrderListResponse,
    summary="查询用户订单列表",
)
async def get_all_orders_by_user(
    user_id: str = Path(..., description="用户ID"),
    service: OrderService = OrderServiceDep
):
    try:
        orders = service.list_orders_by_user(user_id)
        return {
            "success": True,
            "data": [OrderSchema.model_validate(order) for order in orders]
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"查询订单列表失败: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)


@router.get(
    "/details/{order_id}",
    response_model=OrderDetailResponse,
    summary="查询订单详情",
)
async def get_order_details(
    order_id: str = Path(..., description="订单ID"),
    service: OrderService = OrderServiceDep
):
    try:
        order = service.get_order_details(order_id)
        return {"success": True, "data": OrderSchema.model_validate(order)}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"查询订单详情失败: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)
