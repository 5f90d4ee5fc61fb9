from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Product


class ProductRepository:

    @staticmethod
    async def save(db: AsyncSession, product: Product) -> Product:
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def save_all(db: AsyncSession, products: Sequence[Product]) -> None:
        db.add_all(products)
        await db.commit()

    @staticmethod
    async def get_all(db: AsyncSession) -> Sequence[Product]:
        result = await db.execute(select(Product).order_by(Product.nev, Product.id))
        return result.scalars().all()

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Product))
        return result.scalar_one()

    @staticmethod
    async def get_by_id(db: AsyncSession, product_id: str) -> Optional[Product]:
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def delete(db: AsyncSession, product: Product) -> None:
        await db.delete(product)
        await db.commit()
