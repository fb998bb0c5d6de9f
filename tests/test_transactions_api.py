"""
API tests for /api/transactions and /api/transactions/summary.
"""
import pytest

from budget_app.models import Transaction
from budget_app.services import transaction_store
from budget_app.timestamps import utc_now


class TestCreateTransaction:

    def test_scenario(self, client):
        response = client.post("/api/transactions", json={
            "type": "expense",
            "amount": 42.50,
            "category": "Food & Dining",
            "date": "2024-01-15T00:00:00.000Z",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "expense"
        assert data["amount"] == 42.5
        assert data["category"] == "Food & Dining"
        assert data["date"] == "2024-01-15T00:00:00.000Z"
        assert data["description"] is None
        assert data["userId"] == "user-1"
        assert isinstance(data["id"], int)
        assert data["createdAt"] == data["updatedAt"]

    def test_description_trimmed(self, make_transaction):
        assert make_transaction(description="  lunch  ")["description"] == "lunch"

    @pytest.mark.parametrize("amount", [0, -5, "12", None])
    def test_invalid_amount(self, client, amount):
        response = client.post("/api/transactions", json={
            "type": "expense",
            "amount": amount,
            "category": "Food",
            "date": "2024-01-15",
        })
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AMOUNT"

    def test_amount_beyond_float_range(self, client):
        response = client.post("/api/transactions", json={
            "type": "income",
            "amount": 10 ** 400,
            "category": "Salary",
            "date": "2024-01-15",
        })
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AMOUNT"

    @pytest.mark.parametrize("overrides, code", [
        ({"type": "transfer"}, "INVALID_TYPE"),
        ({"category": "  "}, "INVALID_CATEGORY"),
        ({"date": None}, "INVALID_DATE"),
        ({"date": "yesterday"}, "INVALID_DATE_FORMAT"),
        ({"description": 5}, "INVALID_DESCRIPTION"),
        ({"userId": "user-2"}, "USER_ID_NOT_ALLOWED"),
        ({"user_id": "user-2"}, "USER_ID_NOT_ALLOWED"),
    ])
    def test_rejected_payloads(self, client, overrides, code):
        payload = {"type": "income", "amount": 10, "category": "Salary", "date": "2024-01-15"}
        payload.update(overrides)
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 400
        assert response.json()["code"] == code


class TestListTransactions:

    def test_newest_date_first(self, client, make_transaction):
        make_transaction(date="2024-01-02")
        make_transaction(date="2024-03-01")
        make_transaction(date="2024-02-10")
        dates = [transaction["date"] for transaction in client.get("/api/transactions").json()]
        assert dates == ["2024-03-01", "2024-02-10", "2024-01-02"]

    def test_filters(self, client, make_transaction):
        make_transaction(type="income", category="Salary", date="2024-01-05")
        make_transaction(type="expense", category="Travel", date="2024-01-20")
        make_transaction(type="expense", category="Food", date="2024-02-03")

        data = client.get("/api/transactions", params={"type": "expense"}).json()
        assert {transaction["category"] for transaction in data} == {"Travel", "Food"}

        data = client.get("/api/transactions", params={"category": "Travel"}).json()
        assert [transaction["category"] for transaction in data] == ["Travel"]

        data = client.get("/api/transactions", params={"dateFrom": "2024-01-05", "dateTo": "2024-01-20"}).json()
        assert [transaction["date"] for transaction in data] == ["2024-01-20", "2024-01-05"]

    def test_invalid_date_filter(self, client):
        response = client.get("/api/transactions", params={"dateFrom": "last week"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_DATE_FORMAT"

    def test_limit_default_and_cap(self, client, make_transaction, monkeypatch):
        seen = {}
        original = transaction_store.list_transactions

        def spy(*args, **kwargs):
            seen.update(kwargs)
            return original(*args, **kwargs)

        monkeypatch.setattr(transaction_store, "list_transactions", spy)

        client.get("/api/transactions")
        assert seen["limit"] == 100
        assert seen["offset"] == 0

        response = client.get("/api/transactions", params={"limit": 5000})
        assert response.status_code == 200
        assert seen["limit"] == 1000

    def test_cap_limits_rows_returned(self, db, client):
        now = utc_now()
        db.add_all([
            Transaction(
                user_id="user-1", type="expense", amount=1, category="Food",
                date="2024-01-15", created_at=now, updated_at=now
            )
            for _ in range(1005)
        ])
        db.commit()
        assert len(client.get("/api/transactions", params={"limit": 5000}).json()) == 1000
        assert len(client.get("/api/transactions").json()) == 100

    def test_offset_beyond_integer_range(self, client, make_transaction):
        make_transaction()
        response = client.get("/api/transactions", params={"offset": "99999999999999999999"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_OFFSET"

        response = client.get("/api/transactions", params={"offset": "9223372036854775807"})
        assert response.status_code == 200
        assert response.json() == []

    def test_pagination(self, client, make_transaction):
        for day in range(1, 6):
            make_transaction(date=f"2024-01-0{day}")
        data = client.get("/api/transactions", params={"limit": 2, "offset": 1}).json()
        assert [transaction["date"] for transaction in data] == ["2024-01-04", "2024-01-03"]


class TestGetUpdateDelete:

    def test_get_by_id(self, client, make_transaction):
        created = make_transaction()
        assert client.get("/api/transactions", params={"id": created["id"]}).json() == created

    def test_get_missing(self, client):
        response = client.get("/api/transactions", params={"id": 42})
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_id_beyond_integer_range(self, client, method):
        response = getattr(client, method)("/api/transactions", params={"id": "99999999999999999999"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_update_id_beyond_integer_range(self, client):
        response = client.put("/api/transactions", params={"id": "99999999999999999999"}, json={"amount": 1})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_get_invalid_id(self, client):
        response = client.get("/api/transactions", params={"id": "x1"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_partial_update(self, client, make_transaction):
        created = make_transaction(description="lunch")
        response = client.put("/api/transactions", params={"id": created["id"]}, json={"amount": 15.25})
        assert response.status_code == 200
        data = response.json()
        assert data["amount"] == 15.25
        assert data["description"] == "lunch"
        assert data["category"] == created["category"]
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] > created["updatedAt"]

    def test_null_description_clears_it(self, client, make_transaction):
        created = make_transaction(description="lunch")
        data = client.put("/api/transactions", params={"id": created["id"]}, json={"description": None}).json()
        assert data["description"] is None

    def test_every_update_moves_updated_at(self, client, make_transaction):
        created = make_transaction()
        stamps = [created["updatedAt"]]
        for _ in range(3):
            data = client.put("/api/transactions", params={"id": created["id"]}, json={}).json()
            stamps.append(data["updatedAt"])
        assert stamps == sorted(set(stamps))
        assert all(stamp >= created["createdAt"] for stamp in stamps)

    @pytest.mark.parametrize("body, code", [
        ({"amount": 0}, "INVALID_AMOUNT"),
        ({"type": "refund"}, "INVALID_TYPE"),
        ({"category": ""}, "INVALID_CATEGORY"),
        ({"date": "31/01/2024"}, "INVALID_DATE_FORMAT"),
        ({"userId": "user-2"}, "USER_ID_NOT_ALLOWED"),
    ])
    def test_update_validation(self, client, make_transaction, body, code):
        created = make_transaction()
        response = client.put("/api/transactions", params={"id": created["id"]}, json=body)
        assert response.status_code == 400
        assert response.json()["code"] == code
        unchanged = client.get("/api/transactions", params={"id": created["id"]}).json()
        assert unchanged == created

    def test_update_missing(self, client):
        response = client.put("/api/transactions", params={"id": 7}, json={"amount": 3})
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_delete_returns_record(self, client, make_transaction):
        created = make_transaction()
        response = client.delete("/api/transactions", params={"id": created["id"]})
        assert response.status_code == 200
        assert response.json()["transaction"] == created
        assert client.get("/api/transactions", params={"id": created["id"]}).status_code == 404

    def test_delete_invalid_id(self, client):
        response = client.delete("/api/transactions", params={"id": "one"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_other_owner_cannot_touch(self, client, other_client, make_transaction):
        created = make_transaction()
        params = {"id": created["id"]}
        assert other_client.get("/api/transactions", params=params).status_code == 404
        assert other_client.put("/api/transactions", params=params, json={"amount": 1}).status_code == 404
        assert other_client.delete("/api/transactions", params=params).status_code == 404
        assert other_client.get("/api/transactions").json() == []
        assert client.get("/api/transactions", params=params).json() == created


class TestSummary:

    def test_scenario(self, client, make_transaction):
        for day in ("05", "10", "20"):
            make_transaction(type="income", amount=100, category="Salary", date=f"2024-01-{day}T00:00:00.000Z")
        for day in ("12", "25"):
            make_transaction(type="expense", amount=50, category="Food & Dining", date=f"2024-01-{day}T00:00:00.000Z")
        make_transaction(type="expense", amount=999, category="Travel", date="2024-02-02T00:00:00.000Z")

        response = client.get("/api/transactions/summary", params={"dateFrom": "2024-01-01", "dateTo": "2024-01-31"})
        assert response.status_code == 200
        data = response.json()
        assert data["totalIncome"] == 300
        assert data["totalExpenses"] == 100
        assert data["balance"] == 200
        assert data["transactionCount"] == 5
        assert data["categoryBreakdown"] == [
            {"category": "Food & Dining", "type": "expense", "total": 100, "count": 2},
            {"category": "Salary", "type": "income", "total": 300, "count": 3},
        ]

    def test_without_window(self, client, make_transaction, other_client):
        make_transaction(type="income", amount=10.10, category="Tips")
        make_transaction(type="expense", amount=0.20, category="Fees")
        other_client.post("/api/transactions", json={
            "type": "income", "amount": 500, "category": "Salary", "date": "2024-01-01",
        })
        data = client.get("/api/transactions/summary").json()
        assert data["totalIncome"] == 10.1
        assert data["totalExpenses"] == 0.2
        assert data["balance"] == 9.9
        assert data["transactionCount"] == 2

    def test_very_large_amounts(self, client, make_transaction):
        make_transaction(type="income", amount=1e26, category="Salary")
        make_transaction(type="expense", amount=1e300, category="Travel")
        response = client.get("/api/transactions/summary")
        assert response.status_code == 200
        data = response.json()
        assert data["totalIncome"] == 1e26
        assert data["totalExpenses"] == 1e300
        assert data["balance"] == 1e26 - 1e300

    def test_balance_matches_rounded_totals(self, client, make_transaction):
        make_transaction(type="income", amount=1.005, category="Tips")
        make_transaction(type="expense", amount=0.001, category="Fees")
        data = client.get("/api/transactions/summary").json()
        assert data["totalIncome"] == 1.01
        assert data["totalExpenses"] == 0
        assert data["balance"] == 1.01

    def test_invalid_date(self, client):
        response = client.get("/api/transactions/summary", params={"dateTo": "someday"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_DATE_FORMAT"


class TestUnexpectedErrors:

    def test_internal_error_is_500(self, monkeypatch):
        from fastapi.testclient import TestClient
        from budget_app.main import app

        def broken(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(transaction_store, "list_transactions", broken)
        response = TestClient(app, raise_server_exceptions=False).get("/api/transactions")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error: database unavailable"}
