import pytest

from expense_tracker.core.jwt_config import create_access_token

from tests.conftest import SHEET


def test_health(client):
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_monthly_summary_for_user(client):
    res = client.get("/api/v1/summary/monthly", params={"username": "Alice"})
    assert res.status_code == 200
    assert res.json() == {
        "totalSpending": 80.0,
        "transactions": 2,
        "balanceOwed": 20.0,
        "totalPaid": 100.0,
    }


def test_all_time_summary_for_other_side(client):
    body = client.get("/api/v1/summary/all-time", params={"username": "Bob"}).json()
    # Bob: his half of the gas, 50 of the groceries and 40 of the dinner
    assert body["totalSpending"] == 110.0
    assert body["balanceOwed"] == -70.0
    assert body["transactions"] == 3


def test_group_summary(client):
    body = client.get("/api/v1/summary/all-time").json()
    assert body["totalSpending"] == 240.0
    assert body["balanceOwed"] == 0.0


def test_users(client):
    assert client.get("/api/v1/users/").json() == ["Alice", "Bob"]


def test_recent(client):
    body = client.get("/api/v1/expense/recent", params={"limit": 2}).json()
    assert [e["Item"] for e in body] == ["Gas", "Dinner"]
    assert "Timestamp" not in body[0]
    assert body[1]["Date"] == "2025-03-02T00:00:00"


def test_add_expense(client, seeded_store):
    res = client.post("/api/v1/expense/", json={
        "date": "2025-03-14",
        "item": "Cinema",
        "amount": 30,
        "payer": "Bob",
        "split_ratio": "50/50",
        "category": "Entertainment",
    })
    assert res.status_code == 201
    assert res.json()["success"] is True

    row = seeded_store.sheets[SHEET][-1]
    assert row[:6] == ["2025-03-15 12:00:00", "2025-03-14", "Cinema", 30.0, "Bob", "50/50"]
    assert row[6] == "Entertainment"

    body = client.get("/api/v1/summary/monthly", params={"username": "Bob"}).json()
    assert body["transactions"] == 3


@pytest.mark.parametrize("payload", [
    {"date": "2025-03-14", "item": "x", "amount": -1, "payer": "Bob"},
    {"date": "2025-03-14", "item": "x", "amount": 1e30, "payer": "Bob"},
    {"date": "2025-03-14", "item": "x", "amount": 1, "payer": "Bob", "split_ratio": "half"},
    {"date": "2025-03-14", "item": "x", "amount": 1, "payer": "Bob", "split_ratio": "0/0"},
    {"date": "2025-03-14", "item": " ", "amount": 1, "payer": "Bob"},
    {"date": "2025-03-14", "item": "x", "amount": 1, "payer": "Bob", "category": "Pets"},
])
def test_add_expense_validation(client, seeded_store, payload):
    before = len(seeded_store.sheets[SHEET])
    assert client.post("/api/v1/expense/", json=payload).status_code == 422
    assert len(seeded_store.sheets[SHEET]) == before


def test_raw_row_with_unknown_column(client):
    res = client.post("/api/v1/expense/raw", json={"values": {"Item": "x", "Tip": 2}})
    assert res.status_code == 400
    assert "Tip" in res.json()["detail"]


def test_raw_positional_row(client, seeded_store):
    res = client.post("/api/v1/expense/raw", json={
        "values": ["", "2025-03-10", "Taxi", 12, "Alice", "70/30"],
    })
    assert res.status_code == 201
    assert seeded_store.sheets[SHEET][-1][2] == "Taxi"


def test_huge_raw_amount_still_summarizes(client):
    res = client.post("/api/v1/expense/raw", json={
        "values": ["", "2025-03-10", "Yacht", 1e30, "Alice", "50/50"],
    })
    assert res.status_code == 201

    body = client.get("/api/v1/summary/all-time", params={"username": "Alice"}).json()
    assert body["transactions"] == 4
    assert body["totalPaid"] == pytest.approx(1e30)
    assert body["balanceOwed"] == pytest.approx(5e29)


def test_update_and_delete(client, seeded_store):
    res = client.put("/api/v1/expense/2025-03-05 08:30:00", json={"values": {
        "Date": "2025-03-05", "Item": "Fuel", "Amount": 44, "Who paid?": "Bob",
        "How is it split? (Paid by / Owed)": "50/50",
    }})
    assert res.status_code == 200
    assert seeded_store.sheets[SHEET][3][2] == "Fuel"

    assert client.delete("/api/v1/expense/2025-03-05 08:30:00").status_code == 200
    assert len(seeded_store.sheets[SHEET]) == 3
    assert client.delete("/api/v1/expense/2025-03-05 08:30:00").status_code == 404


def test_sheets(client):
    assert client.get("/api/v1/sheets/").json() == [SHEET]
    assert len(client.get(f"/api/v1/sheets/{SHEET}/records").json()) == 3
    assert client.get("/api/v1/sheets/Nope/records").status_code == 404


def test_summary_survives_missing_sheet(client, seeded_store):
    del seeded_store.sheets[SHEET]
    body = client.get("/api/v1/summary/monthly", params={"username": "Alice"}).json()
    assert body == {"totalSpending": 0.0, "transactions": 0, "balanceOwed": 0.0, "totalPaid": 0.0}
    assert client.get("/api/v1/users/").json() == []


def test_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "Add expense" in res.text
    assert "Groceries" in res.text


class TestAllowList:
    @pytest.fixture
    def allowed(self):
        return ["bill@example.com"]

    def test_anonymous_is_denied(self, client):
        assert client.get("/api/v1/summary/monthly").status_code == 403
        assert client.get("/api/v1/users/").status_code == 403

        page = client.get("/")
        assert page.status_code == 403
        assert "Access Denied" in page.text

    def test_allowed_bearer_token(self, client):
        token = create_access_token({"sub": "bill@example.com"})
        res = client.get("/api/v1/users/", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 200

    def test_allowed_cookie(self, client):
        client.cookies.set("access_token", create_access_token({"sub": "bill@example.com"}))
        assert client.get("/").status_code == 200

    def test_other_email_is_denied(self, client):
        token = create_access_token({"sub": "mook@example.com"})
        res = client.get("/api/v1/expense/recent", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 403

    def test_invalid_token(self, client):
        res = client.get("/api/v1/users/", headers={"Authorization": "Bearer garbage"})
        assert res.status_code == 401

    def test_access_endpoint_is_open(self, client):
        body = client.get("/api/v1/access").json()
        assert body == {"authorized": False, "email": None, "message": "Access denied"}
