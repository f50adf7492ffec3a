import pytest
from fastapi.testclient import TestClient

from riskdesk.config import SimulationConfig
from riskdesk.state import DashboardState

from main import create_app


@pytest.fixture
def dashboard(synthesizer):
    return DashboardState(synthesizer, SimulationConfig(initial_transactions=30, arrival_probability=1.0))


@pytest.fixture
def client(dashboard):
    return TestClient(create_app(state=dashboard, tick_seconds=0))


def test_root_endpoint(client):
    """Test root endpoint returns service info"""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "RiskDesk Gateway"
    assert data["status"] == "active"


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["transactions"] == 30
    assert data["alerts"] == 12
    assert data["uptime"].endswith("s")


def test_system_endpoint(client):
    """Test system metrics return expected structure"""
    response = client.get("/system")
    assert response.status_code == 200
    data = response.json()
    assert "memory_usage_mb" in data
    assert "cpu_usage_percent" in data
    assert data["transactions_loaded"] == 30
    assert data["alerts_loaded"] == 12


def test_transactions_use_wire_names(client):
    response = client.get("/transactions", params={"limit": 10})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 10
    first = data[0]
    for field in ["id", "riskScore", "riskLevel", "fromAccount", "features", "explanations", "metadata"]:
        assert field in first, f"Missing field: {field}"
    assert "velocityScore" in first["features"]
    assert "timeOfDay" in first["metadata"]


def test_transactions_limit_validation(client):
    assert client.get("/transactions", params={"limit": 0}).status_code == 422


def test_transaction_detail(client, dashboard):
    target = dashboard.transactions[2]
    response = client.get(f"/transactions/{target.id}")
    assert response.status_code == 200
    assert response.json()["id"] == target.id


def test_transaction_detail_404(client):
    response = client.get("/transactions/nonexistent_id")
    assert response.status_code == 404
    assert "detail" in response.json()


def test_apply_action(client, dashboard):
    target = dashboard.transactions[0]
    response = client.post(f"/transactions/{target.id}/action", json={"action": "reject"})
    assert response.status_code == 200
    assert response.json()["status"] == "blocked"
    assert dashboard.find(target.id).status == "blocked"


def test_apply_action_rejects_unknown_action(client, dashboard):
    target = dashboard.transactions[0]
    response = client.post(f"/transactions/{target.id}/action", json={"action": "escalate"})
    assert response.status_code == 422


def test_apply_action_unknown_transaction(client):
    response = client.post("/transactions/TXNMISSING00/action", json={"action": "approve"})
    assert response.status_code == 404


def test_alerts_and_selection(client, dashboard):
    response = client.get("/alerts")
    assert response.status_code == 200
    alerts = response.json()
    assert len(alerts) == 12
    assert all(a["status"] in {"new", "investigating"} for a in alerts)

    selected = client.post(f"/alerts/{alerts[0]['id']}/select")
    assert selected.status_code == 200
    assert selected.json()["transaction"] is None
    assert client.post("/alerts/ALRMISSING00/select").status_code == 404


def test_metrics_and_summary(client):
    metrics = client.get("/metrics").json()
    assert metrics["totalTransactions"] == 15427

    summary = client.get("/summary").json()
    assert summary["transactionCount"] == 30
    assert summary["metrics"] == metrics


def test_refresh_and_notifications(client, dashboard):
    old_first = dashboard.transactions[0].id
    response = client.post("/refresh")
    assert response.status_code == 200
    assert response.json() == {"transactions": 30, "alerts": 12}
    assert dashboard.transactions[0].id != old_first

    notes = client.get("/notifications").json()
    assert notes[-1]["title"] == "Data Refreshed"
    assert client.get("/notifications").json() == []


def test_simulated_tick(client, dashboard):
    response = client.post("/simulate/tick")
    assert response.status_code == 200
    data = response.json()
    assert data["arrived"] is True
    assert data["transaction"]["id"] == dashboard.transactions[0].id


def test_lifespan_runs_with_arrivals_enabled(dashboard):
    app = create_app(state=dashboard, tick_seconds=3600)
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
