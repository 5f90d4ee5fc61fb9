from typing import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import new_id
from neocoffee.shared.errors import NotFoundError

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

# The coffee menu a fresh shop starts with
DEFAULT_CATALOG = [
    ("Cappuccino", 850, "/images/cappuccino.jpg"),
    ("Espresso", 650, "/images/espresso.webp"),
    ("Ristretto", 850, "/images/ristretto.jpg"),
    ("Latte", 900, "/images/latte.jpg"),
    ("Americano", 700, "/images/americano.jpg"),
    ("Doppio", 800, "/images/doppio.webp"),
]


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
        product = Product(id=new_id(), nev=data.nev, ar=data.ar, kep_url=data.kep_url)
        product = await ProductRepository.save(db, product)
        logger.info("product_created", product_id=product.id, nev=product.nev)
        return product

    @staticmethod
    async def list_products(db: AsyncSession) -> Sequence[Product]:
        return await ProductRepository.get_all(db)

    @staticmethod
    async def get_product(db: AsyncSession, product_id: str) -> Product:
        product = await ProductRepository.get_by_id(db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: str, data: ProductUpdate) -> Product:
        product = await ProductService.get_product(db, product_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field != "kep_url":
                continue
            setattr(product, field, value)

        product = await ProductRepository.save(db, product)
        logger.info("product_updated", product_id=product.id, fields=sorted(changes))
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: str) -> None:
        # Order items hold their own name/price snapshot, nothing to cascade
        product = await ProductService.get_product(db, product_id)
        await ProductRepository.delete(db, product)
        logger.info("product_deleted", product_id=product_id)

    @staticmethod
    async def seed_catalog(db: AsyncSession) -> int:
        """Inserts the default menu into an empty catalog. Returns the number of rows added."""
        if await ProductRepository.count(db) > 0:
            return 0
        products = [
            Product(id=new_id(), nev=nev, ar=ar, kep_url=kep_url)
            for nev, ar, kep_url in DEFAULT_CATALOG
        ]
        await ProductRepository.save_all(db, products)
        logger.info("catalog_seeded", count=len(products))
        return len(products)
