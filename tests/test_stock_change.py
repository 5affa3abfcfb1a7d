import asyncio

from fastapi.testclient import TestClient
from sqlalchemy import select

from cafeops.db.database import Database
from cafeops.db.inventory import MAX_STOCK
from cafeops.db.models import InventoryHistory, InventoryItem
from cafeops.routers import inventory as inventory_router


def _change(client, item_id, change_type, quantity, reason=None):
    body = {"change_type": change_type, "quantity": quantity}
    if reason is not None:
        body["reason"] = reason
    return client.post(f"/api/inventory/{item_id}/stock-change", json=body)


def _history(client, item_id):
    res = client.get(f"/api/inventory/{item_id}/history")
    assert res.status_code == 200
    return res.json()


def _stock(client, item_id):
    return client.get(f"/api/inventory/{item_id}").json()["current_stock"]


def test_worked_example(client, make_item):
    item = make_item(item_name="Cheesecake", current_stock=5, minimum_stock=20)
    assert item["is_low_stock"] is True

    res = _change(client, item["id"], "out", 10)
    assert res.status_code == 400
    assert res.json() == {"error": "Insufficient stock"}
    assert _stock(client, item["id"]) == 5
    assert _history(client, item["id"]) == []

    res = _change(client, item["id"], "in", 3)
    assert res.status_code == 200
    assert res.json()["new_stock"] == 8
    assert _stock(client, item["id"]) == 8

    history = _history(client, item["id"])
    assert len(history) == 1
    assert history[0]["change_type"] == "in"
    assert history[0]["quantity"] == 3
    assert history[0]["item_id"] == item["id"]
    assert history[0]["item_name"] == "Cheesecake"


def test_stock_matches_ledger_after_mixed_sequence(client, make_item):
    item = make_item(current_stock=4)
    ops = [("in", 6), ("out", 3), ("out", 9), ("out", 7), ("in", 1), ("out", 2), ("out", 5)]

    expected = 4
    accepted = []
    for change_type, qty in ops:
        res = _change(client, item["id"], change_type, qty)
        candidate = expected + qty if change_type == "in" else expected - qty
        if candidate < 0:
            assert res.status_code == 400
        else:
            assert res.status_code == 200
            expected = candidate
            accepted.append((change_type, qty))
            assert res.json()["new_stock"] == expected
        assert _stock(client, item["id"]) == expected >= 0

    history = _history(client, item["id"])
    assert len(history) == len(accepted)
    total_in = sum(h["quantity"] for h in history if h["change_type"] == "in")
    total_out = sum(h["quantity"] for h in history if h["change_type"] == "out")
    assert 4 + total_in - total_out == _stock(client, item["id"])


def test_out_to_exactly_zero_is_allowed(client, make_item):
    item = make_item(current_stock=3)
    res = _change(client, item["id"], "out", 3)
    assert res.status_code == 200
    assert res.json()["new_stock"] == 0


def test_history_row_records_reason(client, make_item):
    item = make_item(current_stock=10)
    _change(client, item["id"], "out", 2, reason="  dropped a tray ")
    [row] = _history(client, item["id"])
    assert row["change_type"] == "out"
    assert row["quantity"] == 2
    assert row["reason"] == "dropped a tray"


def test_invalid_requests_do_not_touch_store(client, make_item):
    item = make_item(current_stock=10)
    bad_bodies = [
        {"change_type": "sideways", "quantity": 1},
        {"change_type": "IN", "quantity": 1},
        {"change_type": "in", "quantity": 0},
        {"change_type": "in", "quantity": -4},
        {"change_type": "in", "quantity": True},
        {"change_type": "in", "quantity": "2"},
        {"change_type": "in", "quantity": 1.5},
        {"change_type": "in", "quantity": 10**20},
        {"change_type": "out"},
        {"quantity": 2},
        {},
    ]
    for body in bad_bodies:
        res = client.post(f"/api/inventory/{item['id']}/stock-change", json=body)
        assert res.status_code == 400, body
        assert "error" in res.json()

    assert _stock(client, item["id"]) == 10
    assert _history(client, item["id"]) == []


def test_unknown_item_is_404(client):
    res = _change(client, 9999, "in", 1)
    assert res.status_code == 404
    assert res.json() == {"error": "Inventory item not found"}


def test_history_is_newest_first_and_capped(client, make_item):
    item = make_item(current_stock=0)
    for qty in range(1, 56):
        assert _change(client, item["id"], "in", qty).status_code == 200

    history = _history(client, item["id"])
    assert len(history) == 50
    assert history[0]["quantity"] == 55
    assert history[-1]["quantity"] == 6


def test_history_only_for_requested_item(client, make_item):
    a = make_item(item_name="A", current_stock=5)
    b = make_item(item_name="B", current_stock=5)
    _change(client, a["id"], "in", 1)
    _change(client, b["id"], "out", 2)

    assert [h["item_id"] for h in _history(client, a["id"])] == [a["id"]]
    assert [h["item_id"] for h in _history(client, b["id"])] == [b["id"]]


def test_in_past_column_limit_is_rejected(client, make_item):
    item = make_item(current_stock=MAX_STOCK - 1)
    res = _change(client, item["id"], "in", 2)
    assert res.status_code == 400
    assert res.json() == {"error": "Stock limit exceeded"}
    assert _stock(client, item["id"]) == MAX_STOCK - 1
    assert _history(client, item["id"]) == []

    assert _change(client, item["id"], "in", 1).json()["new_stock"] == MAX_STOCK


def test_failed_ledger_insert_rolls_back_stock_write(app, monkeypatch):
    with TestClient(app, raise_server_exceptions=False) as c:
        item = c.post("/api/inventory", json={"item_name": "Beans", "current_stock": 5}).json()
        real_row = inventory_router.InventoryHistoryModel

        def row_rejected_by_check_constraint(**kwargs):
            return real_row(**{**kwargs, "change_type": "sideways"})

        with monkeypatch.context() as m:
            m.setattr(inventory_router, "InventoryHistoryModel", row_rejected_by_check_constraint)
            res = _change(c, item["id"], "in", 3)

        assert res.status_code == 500
        assert res.json() == {"error": "Internal server error"}
        assert _stock(c, item["id"]) == 5
        assert _history(c, item["id"]) == []


def test_concurrent_changes_lose_no_update(settings):
    ops = [("in", q) for q in range(1, 9)] + [("out", 1)] * 6

    async def scenario():
        db = Database(settings.database_url)
        try:
            await db.create_all()
            async with db.session_maker() as session:
                item = InventoryItem(item_name="Milk", current_stock=10)
                session.add(item)
                await session.commit()
                item_id = item.id

            async def change(change_type, quantity):
                async with db.session_maker() as session:
                    await inventory_router._apply_stock_change(
                        db=session,
                        item_id=item_id,
                        change_type=change_type,
                        quantity=quantity,
                        reason=None,
                    )
                    await session.commit()

            await asyncio.gather(*(change(t, q) for t, q in ops))

            async with db.session_maker() as session:
                stock = await session.scalar(
                    select(InventoryItem.current_stock).where(InventoryItem.id == item_id)
                )
                res = await session.execute(
                    select(InventoryHistory.change_type, InventoryHistory.quantity)
                    .where(InventoryHistory.item_id == item_id)
                )
                return stock, res.all()
        finally:
            await db.dispose()

    stock, rows = asyncio.run(scenario())

    assert stock == 10 + sum(range(1, 9)) - 6
    assert len(rows) == len(ops)
    total_in = sum(q for t, q in rows if t == "in")
    total_out = sum(q for t, q in rows if t == "out")
    assert 10 + total_in - total_out == stock
