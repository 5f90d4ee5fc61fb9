"""
Storefront cart.

A Cart is plain application state owned by whoever builds the storefront
session; there is no module-level cart. Every ``add`` appends a new line,
so the same coffee with different modifiers stays on separate lines.
"""
from typing import List

from pydantic import BaseModel, PositiveInt

from neocoffee.services.order_service.schemas import OrderCreate, OrderItemCreate, ShippingDetails
from neocoffee.services.product_service.schemas import ProductResponse


class Modifiers(BaseModel):
    milk: str
    sugar: str


class CartItem(BaseModel):
    product_id: str
    name: str
    price: int
    quantity: PositiveInt
    modifiers: Modifiers

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


class Cart:

    def __init__(self):
        self._items: List[CartItem] = []

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total(self) -> int:
        return sum(item.subtotal for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def add(self, product: ProductResponse, quantity: int, modifiers: Modifiers) -> CartItem:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        item = CartItem(
            product_id=product.id,
            name=product.nev,
            price=product.ar,
            quantity=quantity,
            modifiers=modifiers,
        )
        self._items.append(item)
        return item

    def clear(self) -> None:
        self._items.clear()

    def to_order(self, customer: ShippingDetails) -> OrderCreate:
        """Builds the checkout payload; name and price are taken from the cart lines."""
        if self.is_empty:
            raise ValueError("Cart is empty")
        return OrderCreate(
            **customer.model_dump(),
            items=[
                OrderItemCreate(
                    termek_nev=item.name,
                    termek_ar=item.price,
                    mennyiseg=item.quantity,
                    tej=item.modifiers.milk,
                    cukor=item.modifiers.sugar,
                )
                for item in self._items
            ],
        )
