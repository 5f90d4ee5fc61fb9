from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import get_db
from neocoffee.shared.security import get_current_admin

from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .service import ProductService

# Catalog writes are admin only
router = APIRouter(prefix="/products", tags=["Products"], dependencies=[Depends(get_current_admin)])
public_router = APIRouter(prefix="/products", tags=["Products"])


@public_router.get("", response_model=List[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@public_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product(db, product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await ProductService.create_product(db, product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, changes: ProductUpdate, db: AsyncSession = Depends(get_db)):
    return await ProductService.update_product(db, product_id, changes)


@router.delete("/{product_id}")
async def delete_product(product_id: str, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, product_id)
    return {"message": "Product deleted"}
