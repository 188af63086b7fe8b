"""
Order Routes
"""

from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from services.order_service.store import OrderStoreFullError
from shared.schemas import OrderCreateSchema, OrderSchema
from shared.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[OrderSchema])
async def list_orders(request: Request):
    """List orders placed since the service started"""
    return request.app.state.orders.list()


@router.post("", response_model=OrderSchema, status_code=status.HTTP_201_CREATED)
async def create_order(order_data: OrderCreateSchema, request: Request):
    """Place an order"""
    try:
        order = request.app.state.orders.add(order_data)
    except OrderStoreFullError as e:
        logger.warning("Order rejected", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
            detail=str(e)
        )

    logger.info("Order created", order_id=order.id, user_id=order.user_id, product_id=order.product_id)
    return order
