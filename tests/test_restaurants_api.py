import pytest

OUTLET = "r1"
BASE = f"/api/v1/outlets/{OUTLET}"


@pytest.fixture
def menu(client):
    pizza = client.post(f"{BASE}/menu-items", json={"name": "Margherita", "price": 350}).json()
    coffee = client.post(f"{BASE}/menu-items", json={"name": "Espresso", "price": 120}).json()
    return {"pizza": pizza, "coffee": coffee}


@pytest.fixture
def order(client, menu):
    response = client.post(f"{BASE}/orders", json={
        "customer_name": "Meera",
        "items": [
            {"menu_item_id": menu["pizza"]["id"], "quantity": 2},
            {"menu_item_id": menu["coffee"]["id"], "quantity": 0},
        ],
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_create_order_totals_items(order):
    assert order["order_number"] == "ORD001"
    assert order["status"] == "pending"
    assert order["next_action"] == "Start Cooking"
    # quantity is clamped to at least one
    assert [i["quantity"] for i in order["items"]] == [2, 1]
    assert order["total_price"] == 820


def test_order_numbers_increment_per_outlet(client, menu, order):
    second = client.post(f"{BASE}/orders", json={
        "customer_name": "Kabir",
        "items": [{"menu_item_id": menu["coffee"]["id"]}],
    }).json()
    assert second["order_number"] == "ORD002"


def test_order_needs_items_and_known_menu_entries(client, menu):
    empty = client.post(f"{BASE}/orders", json={"customer_name": "Meera", "items": []})
    assert empty.status_code == 422

    unknown = client.post(f"{BASE}/orders", json={
        "customer_name": "Meera", "items": [{"menu_item_id": "missing"}],
    })
    assert unknown.status_code == 404


def test_advance_walks_the_kitchen_flow(client, order):
    url = f"{BASE}/orders/{order['id']}/advance"

    assert client.post(url).json()["status"] == "preparing"
    assert client.post(url).json()["status"] == "ready"
    served = client.post(url).json()
    assert served["status"] == "delivered"
    assert served["next_action"] is None

    assert client.post(url).status_code == 409


def test_cancel_through_edit(client, order):
    response = client.patch(f"{BASE}/orders/{order['id']}", json={"status": "cancelled"})
    assert response.json()["status"] == "cancelled"

    assert client.post(f"{BASE}/orders/{order['id']}/advance").status_code == 409
    reopen = client.patch(f"{BASE}/orders/{order['id']}", json={"status": "pending"})
    assert reopen.status_code == 409


def test_edit_allows_skipping_ahead(client, order):
    response = client.patch(f"{BASE}/orders/{order['id']}", json={"status": "ready", "customer_name": "Meera S"})
    assert response.json()["status"] == "ready"
    assert response.json()["customer_name"] == "Meera S"


def test_kitchen_board(client, menu, order):
    second = client.post(f"{BASE}/orders", json={
        "customer_name": "Kabir", "items": [{"menu_item_id": menu["coffee"]["id"]}],
    }).json()
    client.post(f"{BASE}/orders/{second['id']}/advance")

    board = client.get(f"{BASE}/kot").json()
    assert [o["id"] for o in board["pending"]] == [order["id"]]
    assert [o["id"] for o in board["preparing"]] == [second["id"]]
    assert board["ready"] == []


def test_menu_item_in_use_cannot_be_deleted(client, menu, order):
    assert client.delete(f"{BASE}/menu-items/{menu['pizza']['id']}").status_code == 409

    client.delete(f"{BASE}/orders/{order['id']}")
    assert client.delete(f"{BASE}/menu-items/{menu['pizza']['id']}").status_code == 204


def test_list_orders_by_status(client, order):
    client.post(f"{BASE}/orders/{order['id']}/advance")
    assert client.get(f"{BASE}/orders", params={"status": "pending"}).json() == []
    assert len(client.get(f"{BASE}/orders", params={"status": "preparing"}).json()) == 1


def test_order_numbers_are_not_reused_after_delete(client, menu, order):
    line = [{"menu_item_id": menu["coffee"]["id"]}]
    second = client.post(f"{BASE}/orders", json={"customer_name": "Kabir", "items": line}).json()
    assert second["order_number"] == "ORD002"

    client.delete(f"{BASE}/orders/{order['id']}")
    third = client.post(f"{BASE}/orders", json={"customer_name": "Dev", "items": line}).json()
    assert third["order_number"] == "ORD003"

    client.delete(f"{BASE}/orders/{third['id']}")
    fourth = client.post(f"{BASE}/orders", json={"customer_name": "Isha", "items": line}).json()
    assert fourth["order_number"] == "ORD004"

    other_outlet = client.post("/api/v1/outlets/r2/menu-items", json={"name": "Chai", "price": 40}).json()
    first_elsewhere = client.post("/api/v1/outlets/r2/orders", json={
        "customer_name": "Nia", "items": [{"menu_item_id": other_outlet["id"]}],
    }).json()
    assert first_elsewhere["order_number"] == "ORD001"


def test_menu_category_and_sub_category_crud(client):
    mains = client.post(f"{BASE}/menu-categories", json={"name": "Mains"})
    assert mains.status_code == 201
    mains_id = mains.json()["id"]

    renamed = client.patch(f"{BASE}/menu-categories/{mains_id}", json={"description": "Hot dishes"})
    assert renamed.json() == {"id": mains_id, "outlet_id": OUTLET, "name": "Mains", "description": "Hot dishes"}

    pasta = client.post(f"{BASE}/sub-categories", json={"category_id": mains_id, "name": "Pasta"})
    assert pasta.status_code == 201
    assert client.post(f"{BASE}/sub-categories", json={"category_id": "missing", "name": "Soups"}).status_code == 404

    assert [s["name"] for s in client.get(f"{BASE}/sub-categories", params={"category_id": mains_id}).json()] == ["Pasta"]

    # a category with sub-categories is kept
    assert client.delete(f"{BASE}/menu-categories/{mains_id}").status_code == 409
    assert client.delete(f"{BASE}/sub-categories/{pasta.json()['id']}").status_code == 204
    assert client.delete(f"{BASE}/menu-categories/{mains_id}").status_code == 204
    assert client.get(f"{BASE}/menu-categories").json() == []


def test_menu_item_details(client):
    mains = client.post(f"{BASE}/menu-categories", json={"name": "Mains"}).json()
    pasta = client.post(f"{BASE}/sub-categories", json={"category_id": mains["id"], "name": "Pasta"}).json()

    created = client.post(f"{BASE}/menu-items", json={
        "name": "Penne Arrabbiata",
        "sku": "PST-01",
        "price": 320,
        "discount_price": 290,
        "dietary_type": "VEGAN",
        "category_ids": [mains["id"]],
        "sub_category_id": pasta["id"],
        "variants": [{"name": "Half", "price": 180}, {"name": "Full", "price": 320, "stock_count": 5}],
    })
    assert created.status_code == 201, created.text
    item = created.json()
    assert item["category_ids"] == [mains["id"]]
    assert item["dietary_type"] == "VEGAN"
    assert item["has_variants"] is True
    assert [(v["name"], v["stock_count"]) for v in item["variants"]] == [("Half", 0), ("Full", 5)]

    updated = client.patch(f"{BASE}/menu-items/{item['id']}", json={"variants": [], "dietary_type": "VEG"}).json()
    assert updated["has_variants"] is False
    assert updated["dietary_type"] == "VEG"
    assert updated["sku"] == "PST-01"

    in_mains = client.get(f"{BASE}/menu-items", params={"category_id": mains["id"]}).json()
    assert [i["id"] for i in in_mains] == [item["id"]]

    # removing the sub-category and category detaches them from the item
    client.delete(f"{BASE}/sub-categories/{pasta['id']}")
    client.delete(f"{BASE}/menu-categories/{mains['id']}")
    detached = client.get(f"{BASE}/menu-items/{item['id']}").json()
    assert detached["sub_category_id"] is None
    assert detached["category_ids"] == []


def test_menu_item_discount_cannot_exceed_price(client, menu):
    too_cheap = client.post(f"{BASE}/menu-items", json={"name": "Soup", "price": 100, "discount_price": 150})
    assert too_cheap.status_code == 422

    response = client.patch(f"{BASE}/menu-items/{menu['coffee']['id']}", json={"discount_price": 500})
    assert response.status_code == 400
    assert client.get(f"{BASE}/menu-items/{menu['coffee']['id']}").json()["discount_price"] is None


def test_menu_item_with_unknown_category_is_rejected(client):
    body = {"name": "Soup", "price": 100, "category_ids": ["missing"]}
    assert client.post(f"{BASE}/menu-items", json=body).status_code == 404
