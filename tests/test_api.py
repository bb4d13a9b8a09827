"""Tests for the HTTP endpoints."""
import pytest

from personal_expense.api.routers import transactions as transactions_router
from personal_expense.services.transactions import LedgerPersistenceError


def income_payload(**overrides):
    payload = {
        "type": "income",
        "category": 1,
        "amount": 1000,
        "date": "2024-01-01",
        "description": "January pay",
    }
    payload.update(overrides)
    return payload


def test_create_transaction(client):
    response = client.post("/transactions", json=income_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Transaction created successfully"
    assert body["data"]["id"] >= 1
    assert body["data"]["amount"] == 1000
    assert body["data"]["date"] == "2024-01-01"


@pytest.mark.parametrize("missing", ["type", "category", "amount", "date"])
def test_create_missing_field_is_400(client, missing):
    payload = income_payload()
    del payload[missing]

    response = client.post("/transactions", json=payload)

    assert response.status_code == 400
    assert response.json() == {
        "message": "Invalid request: type, category, amount, and date are required."
    }
    assert client.get("/transactions").json()["data"] == []


def test_create_without_description(client):
    payload = income_payload()
    del payload["description"]

    response = client.post("/transactions", json=payload)

    assert response.status_code == 201
    assert response.json()["data"]["description"] is None


def test_create_with_zero_amount(client):
    response = client.post("/transactions", json=income_payload(amount=0))

    assert response.status_code == 201
    assert response.json()["data"]["amount"] == 0


def test_create_with_malformed_body_is_400(client):
    response = client.post("/transactions", json=income_payload(type="transfer"))

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid request")


def test_list_transactions(client):
    first = client.post("/transactions", json=income_payload()).json()["data"]
    second = client.post(
        "/transactions",
        json=income_payload(type="expense", category=3, amount=300, date="2024-01-02"),
    ).json()["data"]

    response = client.get("/transactions")

    assert response.status_code == 200
    assert response.json() == {"message": "success", "data": [first, second]}


def test_get_transaction(client):
    created = client.post("/transactions", json=income_payload()).json()["data"]

    response = client.get(f"/transactions/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "success", "data": created}


def test_get_missing_transaction_is_404(client):
    response = client.get("/transactions/999999")

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction with ID 999999 not found"}


def test_update_transaction(client):
    created = client.post("/transactions", json=income_payload()).json()["data"]
    changes = income_payload(type="expense", category=4, amount=750, date="2024-02-01", description="Rent")

    response = client.put(f"/transactions/{created['id']}", json=changes)

    assert response.status_code == 200
    assert response.json() == {
        "message": "Transaction updated successfully",
        "data": {"id": created["id"], **changes},
    }
    assert client.get(f"/transactions/{created['id']}").json()["data"] == {"id": created["id"], **changes}


def test_update_missing_transaction_is_404(client):
    created = client.post("/transactions", json=income_payload()).json()["data"]

    response = client.put("/transactions/999999", json=income_payload(amount=5))

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found or no changes made", "data": None}
    assert client.get("/transactions").json()["data"] == [created]


def test_update_missing_field_is_400(client):
    created = client.post("/transactions", json=income_payload()).json()["data"]
    payload = income_payload()
    del payload["date"]

    response = client.put(f"/transactions/{created['id']}", json=payload)

    assert response.status_code == 400
    assert client.get(f"/transactions/{created['id']}").json()["data"] == created


def test_delete_transaction(client):
    created = client.post("/transactions", json=income_payload()).json()["data"]

    response = client.delete(f"/transactions/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Transaction deleted successfully", "data": {"id": created["id"]}}
    assert client.get(f"/transactions/{created['id']}").status_code == 404


def test_delete_missing_transaction_is_404(client):
    response = client.delete("/transactions/999999")

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found", "data": None}


def test_summary_on_empty_ledger(client):
    response = client.get("/summary")

    assert response.status_code == 200
    assert response.json() == {
        "message": "success",
        "data": {"total_income": 0, "total_expense": 0, "balance": 0},
    }


def test_summary_end_to_end(client):
    client.post("/transactions", json=income_payload(description=None))
    client.post(
        "/transactions",
        json={"type": "expense", "category": 3, "amount": 300, "date": "2024-01-02"},
    )

    response = client.get("/summary")

    assert response.json()["data"] == {"total_income": 1000, "total_expense": 300, "balance": 700}


def test_list_categories(client):
    response = client.get("/categories")

    assert response.status_code == 200
    names = [c["name"] for c in response.json()["data"]]
    assert names == ["Salary", "Freelance", "Groceries", "Rent", "Utilities"]


def test_get_category(client):
    response = client.get("/categories/3")

    assert response.status_code == 200
    assert response.json()["data"] == {"id": 3, "name": "Groceries", "type": "expense"}


def test_get_missing_category_is_404(client):
    assert client.get("/categories/42").status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "reachable"


def test_unmatched_route_is_404(client):
    response = client.get("/no/such/route")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_store_error_is_500_with_raw_message(client, monkeypatch):
    async def failing_list(session):
        raise LedgerPersistenceError("disk I/O error")

    monkeypatch.setattr(transactions_router, "list_transactions_service", failing_list)

    response = client.get("/transactions")

    assert response.status_code == 500
    assert response.json() == {"error": "disk I/O error"}


def test_unhandled_error_is_generic_500(app, client):
    async def boom():
        raise RuntimeError("secret internals")

    app.add_api_route("/boom", boom)

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!"}


@pytest.mark.parametrize(
    ("method", "path"),
    [("PATCH", "/transactions/1"), ("DELETE", "/transactions"), ("POST", "/summary")],
)
def test_wrong_method_on_known_path_is_not_found(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_get_non_integer_id_is_404(client):
    response = client.get("/transactions/abc")

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction with ID abc not found"}


def test_update_non_integer_id_is_404(client):
    response = client.put("/transactions/abc", json=income_payload())

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found or no changes made", "data": None}
    assert client.get("/transactions").json()["data"] == []


def test_delete_non_integer_id_is_404(client):
    response = client.delete("/transactions/abc")

    assert response.status_code == 404
    assert response.json() == {"message": "Transaction not found", "data": None}


@pytest.mark.parametrize("blank", ["type", "date", "amount"])
def test_blank_required_field_counts_as_missing(client, blank):
    response = client.post("/transactions", json=income_payload(**{blank: ""}))

    assert response.status_code == 400
    assert response.json() == {
        "message": "Invalid request: type, category, amount, and date are required."
    }


@pytest.mark.asyncio
async def test_lifespan_disposes_database_when_shutdown_fails(app):
    with pytest.raises(RuntimeError, match="shutdown"):
        async with app.router.lifespan_context(app):
            assert app.state.db._engine is not None
            raise RuntimeError("shutdown")

    assert app.state.db._engine is None
