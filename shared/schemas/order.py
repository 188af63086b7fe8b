"""
Order data schemas

Pydantic models for order creation and serialization.
"""

from pydantic import BaseModel, Field


class OrderCreateSchema(BaseModel):
    """Body accepted by ``POST /orders``"""
    user_id: int = Field(..., ge=1)
    product_id: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1, le=1000)


class OrderSchema(OrderCreateSchema):
    """Stored order"""
    id: int = Field(..., ge=1)
