from typing import Optional, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import new_id, utcnow
from neocoffee.shared.errors import InvalidInputError, NotFoundError
from neocoffee.shared.observability import (
    neocoffee_order_items_created_total,
    neocoffee_orders_created_total,
)

from .models import Order, OrderItem
from .repository import OrderRepository
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)


class OrderService:

    @staticmethod
    async def create_order(db: AsyncSession, data: OrderCreate) -> Order:
        if not data.items:
            raise InvalidInputError("An order needs at least one item")

        order = Order(
            id=new_id(),
            vevo_nev=data.vevo_nev,
            telefon=data.telefon,
            email=data.email,
            iranyitoszam=data.iranyitoszam,
            telepules=data.telepules,
            utca_hazszam=data.utca_hazszam,
            megrendelve=utcnow(),
            postazva=0,
            postazva_datum=None,
            items=[OrderItem(id=new_id(), **item.model_dump()) for item in data.items],
        )
        order = await OrderRepository.create_order(db, order)

        neocoffee_orders_created_total.inc()
        neocoffee_order_items_created_total.inc(len(order.items))
        logger.info("order_created", order_id=order.id, items=len(order.items))
        return order

    @staticmethod
    async def list_orders(
        db: AsyncSession,
        postazva: Optional[int] = None,
        email: Optional[str] = None,
    ) -> Sequence[Order]:
        return await OrderRepository.list_orders(db, postazva=postazva, email=email)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    async def set_shipped(db: AsyncSession, order_id: str, postazva: int) -> Order:
        # bool is an int subclass, reject it explicitly
        if isinstance(postazva, bool) or postazva not in (0, 1):
            raise InvalidInputError("postazva must be 0 or 1")

        order = await OrderService.get_order(db, order_id)
        order.postazva = postazva
        order.postazva_datum = utcnow() if postazva == 1 else None
        order = await OrderRepository.save(db, order)

        logger.info("order_shipped" if postazva else "order_unshipped", order_id=order.id)
        return order

    @staticmethod
    async def delete_order(db: AsyncSession, order_id: str) -> None:
        order = await OrderService.get_order(db, order_id)
        await OrderRepository.delete(db, order)
        logger.info("order_deleted", order_id=order_id)
