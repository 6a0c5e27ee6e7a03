import pytest

AS_OF = "2025-01-01"


@pytest.fixture()
def seeded(client):
    client.post("/accounts", json={
        "name": "Checking", "bank": "First", "balance": 1000, "balance_date": AS_OF,
    })
    client.post("/transactions", json={
        "description": "Salary", "amount": 5000, "type": "income", "is_recurring": True, "day": 5,
    })
    client.post("/transactions", json={
        "description": "Rent", "amount": 1200, "type": "expense",
        "expense_type": "fixed", "is_recurring": True, "day": 15,
    })
    return client


def test_current_balance(seeded):
    data = seeded.get("/balance/current").json()["data"]
    assert data["total_balance"] == 1000.0
    assert len(data["accounts"]) == 1


def test_projected_balance(seeded):
    res = seeded.get("/balance/projected", params={"projection_date": "2025-01-31", "as_of_date": AS_OF})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["projected_balance"] == 4800.0
    assert data["breakdown"]["income"] == 5000.0
    assert data["breakdown"]["fixed"] == 1200.0
    assert data["warnings"] == []


def test_projected_balance_rejects_bad_date(seeded):
    res = seeded.get("/balance/projected", params={"projection_date": "31/01/2025"})
    assert res.status_code == 400
    assert "YYYY-MM-DD" in res.json()["error"]


def test_simulate_purchase(seeded):
    res = seeded.post(
        "/simulation/purchase",
        params={"as_of_date": AS_OF},
        json={"amount": 10000, "purchase_date": "2025-01-10", "description": "Car repair"},
    )
    data = res.json()["data"]
    assert data["projection_date"] == "2025-02-10"
    assert data["can_afford"] is False
    assert data["risk_level"] == "HIGH"
    assert data["recommendation"]


def test_balance_simulate_purchase_alias(seeded):
    res = seeded.post("/balance/simulate-purchase", params={"as_of_date": AS_OF}, json={"amount": 100})
    data = res.json()["data"]
    assert data["purchase_date"] == AS_OF
    assert data["can_afford"] is True


def test_multiple_purchases_are_independent(seeded):
    res = seeded.post("/simulation/multiple-purchases", params={"as_of_date": AS_OF}, json={
        "purchases": [{"amount": 100}, {"amount": 100000}],
    })
    data = res.json()["data"]
    assert [s["can_afford"] for s in data["simulations"]] == [True, False]
    assert data["simulations"][0]["projected_balance_without_purchase"] == \
        data["simulations"][1]["projected_balance_without_purchase"]
    assert data["overall_analysis"]["risky_purchases"] == 1
    assert data["overall_analysis"]["all_affordable"] is False

    assert seeded.post("/simulation/multiple-purchases", json={"purchases": []}).status_code == 422


def test_kpis(seeded):
    res = seeded.get("/kpis", params={"period": "current", "as_of_date": "2025-01-15"})
    data = res.json()["data"]
    kpis = {k["key"]: k for k in data["kpis"]}
    assert kpis["income"]["value"] == 5000.0
    assert kpis["performance"]["value"] == 3800.0
    assert data["date_range"] == {"start": "2025-01-01", "end": "2025-01-31"}

    detail = seeded.get("/kpis/fixed", params={"as_of_date": "2025-01-15"}).json()["data"]
    assert detail["value"] == 1200.0
    assert seeded.get("/kpis/unknown").status_code == 404
    assert seeded.get("/kpis", params={"period": "custom"}).status_code == 400


def test_timeline(seeded):
    data = seeded.get("/timeline", params={"period": "3months", "as_of_date": "2025-01-15"}).json()["data"]
    assert len(data["events"]) == 6
    assert data["events"][0]["date"] == "2025-01-05"
    assert data["events"][0]["kind"] == "income"
    assert len(data["grouped"]) == 6


def test_forecast(seeded):
    data = seeded.get("/forecast", params={"days": 14, "as_of_date": AS_OF}).json()["data"]
    assert data["start_date"] == AS_OF
    assert data["end_date"] == "2025-01-15"
    assert len(data["timeline"]) == 15
    assert data["timeline"][4]["projected_balance"] == 6000.0
    assert data["timeline"][-1]["projected_balance"] == 4800.0
    assert data["lowest_balance"] == 1000.0
