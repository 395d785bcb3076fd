import pytest

from planner import config


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_book_status_and_recent_list(client, tmp_path):
    status = client.get("/api/books/status").json()
    assert status["is_open"]
    assert status["name"] == "Test"

    recent = client.get("/api/books/recent").json()
    assert [book["path"] for book in recent] == [str((tmp_path / "book.db").resolve())]


def test_creating_an_existing_book_is_rejected(client, tmp_path):
    response = client.post("/api/books/create", json={"path": str(tmp_path / "book.db")})
    assert response.status_code == 400


def test_account_crud(client):
    created = client.post("/api/accounts/", json={
        "name": "Savings", "starting_date": "2026-01",
    })
    assert created.status_code == 201
    account = created.json()
    # Horizon defaults to the user setting
    assert account["planning_horizon_months"] == config.ProjectionSettings().default_horizon_months

    updated = client.patch(f"/api/accounts/{account['id']}", json={"starting_balance": 250.5})
    assert updated.json()["starting_balance"] == 250.5

    assert client.delete(f"/api/accounts/{account['id']}").status_code == 204
    assert client.get(f"/api/accounts/{account['id']}").status_code == 404


def test_invalid_account_is_rejected(client):
    response = client.post("/api/accounts/", json={
        "name": "Bad", "starting_date": "2026-01", "planning_horizon_months": 0,
    })
    assert response.status_code == 422
    assert client.get("/api/accounts/").json() == []


def test_malformed_month_is_rejected(client):
    response = client.post("/api/accounts/", json={"name": "Bad", "starting_date": "2026-13"})
    assert response.status_code == 422


def test_projection_round_trip(client, account_id):
    base = f"/api/accounts/{account_id}"
    rent = client.post(f"{base}/recurring/", json={
        "type": "expense", "name": "Rent", "amount": 900.0,
        "category": "Housing", "start_date": "2026-01",
    })
    assert rent.status_code == 201
    rent_id = rent.json()["id"]

    salary = client.post(f"{base}/salary/", json={
        "name": "Day job", "gross_salary": 3000.0, "tax_rate": 20.0,
        "contributions_rate": 10.0, "other_deductions": 50.0, "start_date": "2026-01",
    })
    assert salary.status_code == 201
    assert salary.json()["net_salary"] == pytest.approx(2050.0)

    response = client.get(f"{base}/projection/", params={"current_month": "2026-01"})
    assert response.status_code == 200
    months = response.json()
    assert len(months) == 12
    assert months[0]["year_month"] == "2026-01"
    assert months[0]["is_current_month"]
    assert months[0]["ending_balance"] == pytest.approx(1000.0 + 2050.0 - 900.0)
    assert months[1]["starting_balance"] == months[0]["ending_balance"]

    override = client.put(
        f"{base}/recurring/{rent_id}/overrides/2026-02", json={"skip_occurrence": True}
    )
    assert override.status_code == 200
    months = client.get(f"{base}/projection/").json()
    assert months[1]["total_expenses"] == 0.0

    assert client.delete(f"{base}/recurring/{rent_id}/overrides/2026-02").status_code == 204
    months = client.get(f"{base}/projection/").json()
    assert months[1]["total_expenses"] == pytest.approx(900.0)

    yearly = client.get(f"{base}/projection/yearly").json()
    assert yearly[0]["year"] == 2026
    assert yearly[0]["ending_balance"] == pytest.approx(months[-1]["ending_balance"])

    assert client.get(f"{base}/projection/categories").json() == ["Housing"]


def test_projection_filters_over_http(client, account_id):
    base = f"/api/accounts/{account_id}"
    client.post(f"{base}/planned/", json={
        "type": "expense", "name": "Trip", "amount": 1200.0,
        "category": "Travel", "scheduled_date": "2026-06",
    })
    client.post(f"{base}/recurring/", json={
        "type": "expense", "name": "Rent", "amount": 900.0,
        "category": "Housing", "start_date": "2026-01",
    })

    months = client.get(f"{base}/projection/", params={
        "start_date": "2026-06", "end_date": "2026-06", "categories": ["Travel"],
    }).json()
    assert len(months) == 1
    assert [line["name"] for line in months[0]["expense_breakdown"]] == ["Trip"]
    assert months[0]["total_expenses"] == pytest.approx(2100.0)


def test_debt_with_extra_payment_and_net_worth(client, account_id):
    base = f"/api/accounts/{account_id}"
    debt = client.post(f"{base}/debts/", json={
        "name": "Car loan", "debt_type": "amortized", "initial_principal": 1200.0,
        "start_date": "2026-01", "monthly_payment": 100.0,
    })
    assert debt.status_code == 201
    debt_id = debt.json()["id"]

    with_extra = client.post(
        f"{base}/debts/{debt_id}/extra-payments", json={"date": "2026-02", "amount": 500.0}
    )
    assert with_extra.status_code == 201
    assert len(with_extra.json()["extra_payments"]) == 1

    worth = client.get(f"{base}/projection/net-worth").json()
    assert worth[1]["debts"] == pytest.approx(500.0)
    assert worth[1]["net_worth"] == pytest.approx(worth[1]["cash"] - 500.0)


def test_invalid_debt_is_rejected(client, account_id):
    response = client.post(f"/api/accounts/{account_id}/debts/", json={
        "name": "Broken", "debt_type": "fixed-installment", "initial_principal": 100.0,
        "start_date": "2026-01",
    })
    assert response.status_code == 422
    assert client.get(f"/api/accounts/{account_id}/debts/").json() == []


def test_unknown_account_projection_is_404(client):
    assert client.get("/api/accounts/999/projection/").status_code == 404


def test_settings_round_trip(client, config_dir):
    assert client.get("/api/settings/").json() == config.ProjectionSettings().model_dump()

    saved = client.put("/api/settings/", json={"max_horizon_months": 240, "default_horizon_months": 24})
    assert saved.status_code == 200
    assert (config_dir / "settings.json").exists()
    assert config.load_settings().default_horizon_months == 24

    account = client.post("/api/accounts/", json={"name": "Savings", "starting_date": "2026-01"})
    assert account.json()["planning_horizon_months"] == 24

    too_long = client.post("/api/accounts/", json={
        "name": "Long", "starting_date": "2026-01", "planning_horizon_months": 300,
    })
    assert too_long.status_code == 422


def test_settings_default_must_fit_under_maximum(client):
    response = client.put("/api/settings/", json={"max_horizon_months": 12, "default_horizon_months": 24})
    assert response.status_code == 422
    assert client.get("/api/settings/").json()["default_horizon_months"] == 120
