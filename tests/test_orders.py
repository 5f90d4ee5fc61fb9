import pytest
from prometheus_client import REGISTRY
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from neocoffee.services.order_service.models import Order, OrderItem
from neocoffee.services.order_service.repository import OrderRepository

from .conftest import order_payload


async def count_rows(app, model):
    async with app.state.database.sessionmaker() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def test_create_order_returns_order_with_items(client, app):
    resp = await client.post("/api/orders", json=order_payload())

    assert resp.status_code == 201
    body = resp.json()
    assert body["vevo_nev"] == "Teszt"
    assert body["postazva"] == 0
    assert body["postazva_datum"] is None
    assert body["megrendelve"]
    assert len(body["items"]) == 1
    item = body["items"][0]
    assert item["rendeles_id"] == body["id"]
    assert item["termek_nev"] == "Cappuccino"
    assert item["termek_ar"] == 850
    assert item["mennyiseg"] == 2

    assert await count_rows(app, Order) == 1
    assert await count_rows(app, OrderItem) == 1


async def test_create_order_writes_one_item_row_per_input_item(client, app):
    items = [
        {"termek_nev": "Cappuccino", "termek_ar": 850, "mennyiseg": 1, "tej": "None", "cukor": "None"},
        {"termek_nev": "Espresso", "termek_ar": 650, "mennyiseg": 2, "tej": "None", "cukor": "2 spoons"},
        {"termek_nev": "Latte", "termek_ar": 900, "mennyiseg": 3, "tej": "Oat", "cukor": "1 spoon"},
    ]
    resp = await client.post("/api/orders", json=order_payload(items=items))

    assert resp.status_code == 201
    order_id = resp.json()["id"]
    assert sorted(i["termek_nev"] for i in resp.json()["items"]) == ["Cappuccino", "Espresso", "Latte"]

    async with app.state.database.sessionmaker() as session:
        result = await session.execute(select(OrderItem.rendeles_id))
        assert result.scalars().all() == [order_id] * 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"items": []},
        {"vevo_nev": ""},
        {"telefon": "   "},
        {"email": "not-an-email"},
        {"items": [{"termek_nev": "Latte", "termek_ar": 0, "mennyiseg": 1, "tej": "Cow", "cukor": "None"}]},
        {"items": [{"termek_nev": "Latte", "termek_ar": 900, "mennyiseg": 0, "tej": "Cow", "cukor": "None"}]},
        {"items": [{"termek_nev": "Latte", "termek_ar": 900, "mennyiseg": 1, "tej": "Cow"}]},
    ],
)
async def test_invalid_order_is_rejected_and_nothing_is_stored(client, app, overrides):
    resp = await client.post("/api/orders", json=order_payload(**overrides))

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert await count_rows(app, Order) == 0
    assert await count_rows(app, OrderItem) == 0


async def test_order_with_missing_shipping_fields_is_rejected(client, app):
    resp = await client.post("/api/orders", json={"vevo_nev": "Teszt", "items": []})

    assert resp.status_code == 400
    body = resp.json()
    assert "telefon" in body["error"]
    assert "items" in body["error"]
    assert await count_rows(app, Order) == 0


async def test_accepted_orders_are_counted(client):
    def sample(name):
        return REGISTRY.get_sample_value(name) or 0.0

    orders, items = sample("neocoffee_orders_created_total"), sample("neocoffee_order_items_created_total")
    payload = order_payload()
    payload["items"].append(dict(payload["items"][0], termek_nev="Latte", termek_ar=900))

    assert (await client.post("/api/orders", json=payload)).status_code == 201
    assert (await client.post("/api/orders", json=order_payload(items=[]))).status_code == 400

    assert sample("neocoffee_orders_created_total") == orders + 1
    assert sample("neocoffee_order_items_created_total") == items + 2


async def test_failed_item_insert_rolls_back_the_whole_order(app, db):
    order = Order(
        vevo_nev="Teszt",
        telefon="+36301234567",
        email="t@example.com",
        iranyitoszam="1051",
        telepules="Budapest",
        utca_hazszam="Fő utca 1.",
        items=[
            OrderItem(termek_nev="Latte", termek_ar=900, mennyiseg=1, tej="Cow", cukor="None"),
            # violates the mennyiseg > 0 check constraint
            OrderItem(termek_nev="Espresso", termek_ar=650, mennyiseg=0, tej="None", cukor="None"),
        ],
    )

    with pytest.raises(IntegrityError):
        await OrderRepository.create_order(db, order)

    assert await count_rows(app, Order) == 0
    assert await count_rows(app, OrderItem) == 0


async def test_admin_routes_require_token(client):
    assert (await client.get("/api/orders")).status_code == 401
    assert (await client.get("/api/orders/abcd1234")).status_code == 401
    assert (await client.patch("/api/orders/abcd1234/ship", json={"postazva": 1})).status_code == 401
    assert (await client.delete("/api/orders/abcd1234")).status_code == 401


async def test_list_orders_with_filters(client, admin_headers):
    first = (await client.post("/api/orders", json=order_payload(email="a@example.com"))).json()
    second = (await client.post("/api/orders", json=order_payload(email="b@example.com"))).json()
    await client.patch(f"/api/orders/{second['id']}/ship", json={"postazva": 1}, headers=admin_headers)

    resp = await client.get("/api/orders", headers=admin_headers)
    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [first["id"], second["id"]]
    assert all(len(o["items"]) == 1 for o in resp.json())

    shipped = (await client.get("/api/orders", params={"postazva": 1}, headers=admin_headers)).json()
    assert [o["id"] for o in shipped] == [second["id"]]

    pending = (await client.get("/api/orders", params={"postazva": 0}, headers=admin_headers)).json()
    assert [o["id"] for o in pending] == [first["id"]]

    by_email = (await client.get("/api/orders", params={"email": "a@example.com"}, headers=admin_headers)).json()
    assert [o["id"] for o in by_email] == [first["id"]]

    resp = await client.get("/api/orders", params={"postazva": 2}, headers=admin_headers)
    assert resp.status_code == 400


async def test_mixed_case_email_is_kept_and_found_by_filter(client, admin_headers):
    created = await client.post("/api/orders", json=order_payload(email="  T@Example.COM "))
    assert created.status_code == 201
    assert created.json()["email"] == "T@Example.COM"

    for typed in ("T@Example.COM", "t@example.com"):
        found = (await client.get("/api/orders", params={"email": typed}, headers=admin_headers)).json()
        assert [o["id"] for o in found] == [created.json()["id"]]
        assert found[0]["email"] == "T@Example.COM"


async def test_get_order_by_id(client, admin_headers):
    created = (await client.post("/api/orders", json=order_payload())).json()

    resp = await client.get(f"/api/orders/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == created

    resp = await client.get("/api/orders/00000000", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Order not found"}


async def test_ship_toggle_sets_and_clears_shipped_date(client, admin_headers):
    order_id = (await client.post("/api/orders", json=order_payload())).json()["id"]

    resp = await client.patch(f"/api/orders/{order_id}/ship", json={"postazva": 1}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == order_id
    assert resp.json()["postazva"] == 1
    assert resp.json()["postazva_datum"] is not None

    resp = await client.patch(f"/api/orders/{order_id}/ship", json={"postazva": 0}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["postazva"] == 0
    assert resp.json()["postazva_datum"] is None

    stored = (await client.get(f"/api/orders/{order_id}", headers=admin_headers)).json()
    assert stored["postazva"] == 0
    assert stored["postazva_datum"] is None


@pytest.mark.parametrize("value", [2, -1, True, "1", 1.0, None])
async def test_ship_toggle_rejects_anything_but_0_or_1(client, admin_headers, value):
    order_id = (await client.post("/api/orders", json=order_payload())).json()["id"]

    resp = await client.patch(f"/api/orders/{order_id}/ship", json={"postazva": value}, headers=admin_headers)
    assert resp.status_code == 400

    stored = (await client.get(f"/api/orders/{order_id}", headers=admin_headers)).json()
    assert stored["postazva"] == 0


async def test_ship_unknown_order_is_not_found(client, admin_headers):
    resp = await client.patch("/api/orders/00000000/ship", json={"postazva": 1}, headers=admin_headers)
    assert resp.status_code == 404


async def test_delete_order_removes_its_items(client, app, admin_headers):
    keep = (await client.post("/api/orders", json=order_payload())).json()
    items = [
        {"termek_nev": "Espresso", "termek_ar": 650, "mennyiseg": 1, "tej": "None", "cukor": "None"},
        {"termek_nev": "Doppio", "termek_ar": 800, "mennyiseg": 1, "tej": "None", "cukor": "None"},
    ]
    doomed = (await client.post("/api/orders", json=order_payload(items=items))).json()

    resp = await client.delete(f"/api/orders/{doomed['id']}", headers=admin_headers)
    assert resp.status_code == 200

    assert (await client.get(f"/api/orders/{doomed['id']}", headers=admin_headers)).status_code == 404
    assert (await client.delete(f"/api/orders/{doomed['id']}", headers=admin_headers)).status_code == 404

    async with app.state.database.sessionmaker() as session:
        result = await session.execute(select(OrderItem.rendeles_id))
        assert result.scalars().all() == [keep["id"]]


async def test_database_cascades_item_delete(client, app):
    order_id = (await client.post("/api/orders", json=order_payload())).json()["id"]

    async with app.state.database.sessionmaker() as session:
        await session.execute(text("DELETE FROM orders WHERE id = :id"), {"id": order_id})
        await session.commit()

    assert await count_rows(app, OrderItem) == 0


async def test_order_items_keep_their_snapshot_after_catalog_changes(client, admin_headers):
    product = (
        await client.post("/api/products", json={"nev": "Latte", "ar": 900}, headers=admin_headers)
    ).json()
    items = [{"termek_nev": "Latte", "termek_ar": 900, "mennyiseg": 1, "tej": "Cow", "cukor": "None"}]
    order_id = (await client.post("/api/orders", json=order_payload(items=items))).json()["id"]

    await client.put(f"/api/products/{product['id']}", json={"nev": "Oat Latte", "ar": 1200}, headers=admin_headers)
    await client.delete(f"/api/products/{product['id']}", headers=admin_headers)

    stored = (await client.get(f"/api/orders/{order_id}", headers=admin_headers)).json()
    assert stored["items"][0]["termek_nev"] == "Latte"
    assert stored["items"][0]["termek_ar"] == 900
