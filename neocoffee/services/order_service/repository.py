from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order


class OrderRepository:

    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        """Inserts the order and its items in one transaction; nothing is kept on failure."""
        db.add(order)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return order

    @staticmethod
    async def list_orders(
        db: AsyncSession,
        postazva: Optional[int] = None,
        email: Optional[str] = None,
    ) -> Sequence[Order]:
        stmt = select(Order)
        if postazva is not None:
            stmt = stmt.where(Order.postazva == postazva)
        if email:
            # Emails are stored as submitted, so compare them case-insensitively
            stmt = stmt.where(func.lower(Order.email) == email.strip().lower())
        stmt = stmt.order_by(Order.megrendelve, Order.id)

        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def save(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.commit()
        return order

    @staticmethod
    async def delete(db: AsyncSession, order: Order) -> None:
        await db.delete(order)
        await db.commit()
