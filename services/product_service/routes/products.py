"""
Product Catalogue Routes
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from shared.schemas import ProductSchema

router = APIRouter()

PRODUCTS: List[ProductSchema] = [
    ProductSchema(id=1, name="Laptop", price=999.99),
    ProductSchema(id=2, name="Smartphone", price=699.99),
]


@router.get("", response_model=List[ProductSchema])
async def list_products():
    """List the catalogue"""
    return PRODUCTS


@router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: int):
    """Get a single product"""
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Product not found"
    )
