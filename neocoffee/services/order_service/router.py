from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from neocoffee.shared.config.database import get_db
from neocoffee.shared.security import get_current_admin

from .schemas import OrderCreate, OrderResponse, ShipResponse, ShipUpdate
from .service import OrderService

# Reading and changing orders is admin only; checkout is public
router = APIRouter(prefix="/orders", tags=["Orders"], dependencies=[Depends(get_current_admin)])
public_router = APIRouter(prefix="/orders", tags=["Orders"])


@public_router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(order: OrderCreate, db: AsyncSession = Depends(get_db)):
    return await OrderService.create_order(db, order)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    postazva: Optional[int] = Query(default=None, ge=0, le=1),
    email: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_orders(db, postazva=postazva, email=email)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    return await OrderService.get_order(db, order_id)


@router.patch("/{order_id}/ship", response_model=ShipResponse)
async def ship_order(order_id: str, payload: ShipUpdate, db: AsyncSession = Depends(get_db)):
    return await OrderService.set_shipped(db, order_id, payload.postazva)


@router.delete("/{order_id}")
async def delete_order(order_id: str, db: AsyncSession = Depends(get_db)):
    await OrderService.delete_order(db, order_id)
    return {"message": "Order deleted"}
