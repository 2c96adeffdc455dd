"""Checkout and order history over HTTP."""
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.models.cart import CartItem
from app.models.order import Order, OrderItem
from app.models.product import Product


class TestCheckout:
    def test_checkout_requires_login(self, client, catalog, make_cart, count_rows):
        cart_id = make_cart([(catalog.widget, 1)])

        response = client.post("/api/orders", json={"cart_id": cart_id})

        assert response.status_code == 401
        assert count_rows(Order) == 0

    def test_worked_example(self, client, catalog, make_cart, login):
        headers = login()
        cart_id = make_cart([(catalog.widget, 2), (catalog.gizmo, 1)])

        response = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert response.status_code == 200
        order = response.json()
        lines = [(i["product_id"], i["quantity"], i["price"]) for i in order["items"]]
        assert lines == [(catalog.widget, 2, 10.0), (catalog.gizmo, 1, 5.0)]
        assert order["total"] == 25.0
        assert order["created_at"]
        assert client.get(f"/api/cart/{cart_id}").json()["items"] == []

    def test_n_lines_make_one_order_with_n_lines(
        self, client, catalog, make_cart, login, count_rows
    ):
        headers = login()
        cart_id = make_cart([(catalog.widget, 1), (catalog.gizmo, 2), (catalog.novel, 3)])

        response = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert response.status_code == 200
        assert count_rows(Order) == 1
        assert count_rows(OrderItem) == 3
        assert count_rows(CartItem) == 0

    def test_empty_cart_is_a_client_error(self, client, login, count_rows):
        headers = login()
        cart_id = client.post("/api/cart").json()["id"]

        response = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot create an empty order"
        assert count_rows(Order) == 0
        assert count_rows(OrderItem) == 0

    def test_unknown_cart_is_treated_as_empty(self, client, login, count_rows):
        headers = login()

        response = client.post("/api/orders", json={"cart_id": 777}, headers=headers)

        assert response.status_code == 400
        assert count_rows(Order) == 0

    def test_checking_out_twice_only_creates_one_order(
        self, client, catalog, make_cart, login, count_rows
    ):
        headers = login()
        cart_id = make_cart([(catalog.widget, 1)])

        first = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)
        second = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert count_rows(Order) == 1

    def test_checkouts_leave_no_cart_locks_behind(
        self, client, catalog, make_cart, login
    ):
        headers = login()
        for _ in range(3):
            cart_id = make_cart([(catalog.widget, 1)])
            client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)
        for unknown_cart in range(5000, 5020):
            client.post("/api/orders", json={"cart_id": unknown_cart}, headers=headers)

        assert len(client.app.state.order_service.cart_locks) == 0

    def test_cart_can_be_refilled_after_checkout(self, client, catalog, make_cart, login):
        headers = login()
        cart_id = make_cart([(catalog.widget, 1)])
        client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        client.post(
            f"/api/cart/{cart_id}/items",
            json={"product_id": catalog.novel, "quantity": 2},
        )
        response = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert response.status_code == 200
        assert [i["product_id"] for i in response.json()["items"]] == [catalog.novel]

    def test_malformed_body_is_rejected(self, client, login):
        headers = login()

        response = client.post("/api/orders", json={"cart": 1}, headers=headers)

        assert response.status_code == 400

    def test_store_failure_is_500_and_leaves_cart_intact(
        self, client, catalog, make_cart, login, count_rows, monkeypatch
    ):
        headers = login()
        cart_id = make_cart([(catalog.widget, 2)])

        def broken_create_items(session, items):
            raise SQLAlchemyError("disk I/O error")

        order_service = client.app.state.order_service
        monkeypatch.setattr(order_service.order_repo, "create_items", broken_create_items)

        response = client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        assert response.status_code == 500
        assert "disk I/O error" in response.json()["detail"]
        assert count_rows(Order) == 0
        assert count_rows(OrderItem) == 0
        assert client.get(f"/api/cart/{cart_id}").json()["items"][0]["quantity"] == 2


class TestPriceSnapshot:
    def test_later_price_change_does_not_touch_orders(
        self, client, catalog, make_cart, login, engine
    ):
        headers = login()
        cart_id = make_cart([(catalog.widget, 3)])
        client.post("/api/orders", json={"cart_id": cart_id}, headers=headers)

        with Session(engine) as session:
            product = session.get(Product, catalog.widget)
            product.price = 99.0
            session.add(product)
            session.commit()

        orders = client.get("/api/orders", headers=headers).json()
        assert orders[0]["items"][0]["price"] == 10.0
        assert orders[0]["total"] == 30.0

    def test_price_is_read_at_checkout_not_at_add(
        self, client, catalog, make_cart, login, engine
    ):
        headers = login()
        cart_id = make_cart([(catalog.gizmo, 2)])

        with Session(engine) as session:
            product = session.get(Product, catalog.gizmo)
            product.price = 7.5
            session.add(product)
            session.commit()

        order = client.post(
            "/api/orders", json={"cart_id": cart_id}, headers=headers
        ).json()
        assert order["items"][0]["price"] == 7.5
        assert order["total"] == 15.0


class TestOrderHistory:
    def test_history_requires_login(self, client):
        assert client.get("/api/orders").status_code == 401

    def test_no_orders_is_an_empty_list(self, client, login):
        headers = login()

        response = client.get("/api/orders", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_order_comes_first(self, client, catalog, make_cart, login):
        headers = login()
        first_cart = make_cart([(catalog.widget, 1)])
        first = client.post("/api/orders", json={"cart_id": first_cart}, headers=headers)
        second_cart = make_cart([(catalog.novel, 1), (catalog.gizmo, 4)])
        second = client.post("/api/orders", json={"cart_id": second_cart}, headers=headers)

        orders = client.get("/api/orders", headers=headers).json()

        assert [o["id"] for o in orders] == [second.json()["id"], first.json()["id"]]
        assert [i["product_id"] for i in orders[0]["items"]] == [catalog.novel, catalog.gizmo]
        assert orders[0]["total"] == 20.0 + 4 * 5.0

    def test_users_only_see_their_own_orders(self, client, catalog, make_cart, login):
        alice = login("alice")
        bob = login("bob")
        cart_id = make_cart([(catalog.widget, 1)])
        client.post("/api/orders", json={"cart_id": cart_id}, headers=alice)

        assert len(client.get("/api/orders", headers=alice).json()) == 1
        assert client.get("/api/orders", headers=bob).json() == []
