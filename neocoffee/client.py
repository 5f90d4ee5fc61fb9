"""
Async client for the NeoCoffee API.

The bearer token lives only in the client: ``login`` stores it and
``logout`` forgets it once the server has acknowledged.
"""
from typing import List, Optional

import httpx

from neocoffee.services.auth_service.schemas import LoginResponse, VerifyResponse
from neocoffee.services.order_service.schemas import OrderCreate, OrderResponse, ShipResponse
from neocoffee.services.product_service.schemas import ProductCreate, ProductResponse, ProductUpdate

DEFAULT_BASE_URL = "http://localhost:3000/api"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class NeoCoffeeClient:

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None

    async def __aenter__(self) -> "NeoCoffeeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def is_logged_in(self) -> bool:
        return self.token is not None

    async def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        resp = await self._http.request(method, path, headers=headers, **kwargs)
        if resp.is_error:
            try:
                message = resp.json().get("error") or resp.reason_phrase
            except ValueError:
                message = resp.text or resp.reason_phrase
            raise ApiError(resp.status_code, message)
        return resp.json()

    # --- Catalog (public) ---

    async def get_products(self) -> List[ProductResponse]:
        data = await self._request("GET", "/products")
        return [ProductResponse.model_validate(p) for p in data]

    async def get_product(self, product_id: str) -> ProductResponse:
        return ProductResponse.model_validate(await self._request("GET", f"/products/{product_id}"))

    # --- Checkout (public) ---

    async def create_order(self, order: OrderCreate) -> OrderResponse:
        data = await self._request("POST", "/orders", json=order.model_dump(mode="json"))
        return OrderResponse.model_validate(data)

    # --- Admin session ---

    async def login(self, felhasznalonev: str, jelszo: str) -> LoginResponse:
        data = await self._request(
            "POST", "/admin/login", json={"felhasznalonev": felhasznalonev, "jelszo": jelszo}
        )
        response = LoginResponse.model_validate(data)
        self.token = response.token
        return response

    async def logout(self) -> None:
        await self._request("POST", "/admin/logout")
        self.token = None

    async def verify(self) -> VerifyResponse:
        return VerifyResponse.model_validate(await self._request("GET", "/admin/verify"))

    # --- Catalog management (admin) ---

    async def create_product(self, product: ProductCreate) -> ProductResponse:
        data = await self._request("POST", "/products", json=product.model_dump())
        return ProductResponse.model_validate(data)

    async def update_product(self, product_id: str, changes: ProductUpdate) -> ProductResponse:
        data = await self._request(
            "PUT", f"/products/{product_id}", json=changes.model_dump(exclude_unset=True)
        )
        return ProductResponse.model_validate(data)

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}")

    # --- Order management (admin) ---

    async def get_orders(
        self, postazva: Optional[int] = None, email: Optional[str] = None
    ) -> List[OrderResponse]:
        params = {}
        if postazva is not None:
            params["postazva"] = postazva
        if email:
            params["email"] = email
        data = await self._request("GET", "/orders", params=params)
        return [OrderResponse.model_validate(o) for o in data]

    async def get_order(self, order_id: str) -> OrderResponse:
        return OrderResponse.model_validate(await self._request("GET", f"/orders/{order_id}"))

    async def ship_order(self, order_id: str, postazva: int) -> ShipResponse:
        data = await self._request("PATCH", f"/orders/{order_id}/ship", json={"postazva": postazva})
        return ShipResponse.model_validate(data)

    async def delete_order(self, order_id: str) -> None:
        await self._request("DELETE", f"/orders/{order_id}")
