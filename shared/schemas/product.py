"""
Product data schemas
"""

from pydantic import BaseModel, Field


class ProductSchema(BaseModel):
    """Product as returned by ``GET /products``"""
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0)
