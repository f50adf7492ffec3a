import pytest
import pandas as pd
import requests
from fastapi.testclient import TestClient

from riskdesk.client import RiskDeskApiClient
from riskdesk.config import SimulationConfig
from riskdesk.state import DashboardState

from main import create_app


@pytest.fixture
def dashboard(synthesizer):
    return DashboardState(synthesizer, SimulationConfig(initial_transactions=15))


@pytest.fixture
def api(dashboard):
    session = TestClient(create_app(state=dashboard, tick_seconds=0))
    return RiskDeskApiClient(base_url="http://testserver", session=session)


class TestRiskDeskApiClient:
    def test_backend_alive(self, api):
        assert api.is_backend_alive() is True

    def test_transactions_frame(self, api, dashboard):
        df = api.get_transactions(limit=5)
        assert len(df) == 5
        assert 'velocityScore' in df.columns
        assert 'riskLevel' in df.columns
        assert df['id'].tolist() == [t.id for t in dashboard.transactions[:5]]

    def test_alerts_frame(self, api):
        df = api.get_alerts()
        assert len(df) == 12
        assert pd.api.types.is_datetime64_any_dtype(df['timestamp'])

    def test_metrics(self, api):
        assert api.get_metrics()["reviewBacklog"] == 18

    def test_summary(self, api):
        assert api.get_summary()["transactionCount"] == 15

    def test_apply_action(self, api, dashboard):
        target = dashboard.transactions[1]
        updated = api.apply_action(target.id, "investigate")
        assert updated["status"] == "investigating"
        assert dashboard.find(target.id).status == "investigating"

    def test_refused_action_returns_none(self, api):
        assert api.apply_action("TXNMISSING00", "approve") is None

    def test_unknown_transaction_returns_none(self, api):
        assert api.get_transaction("TXNMISSING00") is None

    def test_refresh_and_notifications(self, api):
        assert api.refresh() is True
        assert [n["title"] for n in api.get_notifications()] == ["Data Refreshed"]


class _DeadSession:
    def get(self, url, **kwargs):
        raise requests.exceptions.ConnectionError(url)

    def post(self, url, **kwargs):
        raise requests.exceptions.Timeout(url)


def test_fallbacks_when_backend_down():
    api = RiskDeskApiClient(base_url="http://backend:8000", session=_DeadSession())
    assert api.is_backend_alive() is False
    assert api.get_transactions().empty
    assert api.get_alerts().empty
    assert api.get_metrics()["totalTransactions"] == 0
    assert api.get_summary() == {}
    assert api.refresh() is False
    assert api.get_notifications() == []
