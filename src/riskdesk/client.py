"""
ROLE: API Client (Adapter)
RESPONSIBILITIES:
1.  Abstracts HTTP requests to the RiskDesk gateway.
2.  Handles connection errors and timeouts gracefully.
3.  Converts raw JSON responses into Pandas DataFrames.
4.  Provides fallback data structures to prevent UI crashes.
"""
import logging
import requests
import pandas as pd
from typing import Any, Dict, Optional

from riskdesk.config import BACKEND_URL, REQUEST_TIMEOUT
from riskdesk.frames import ALERT_COLUMNS

logger = logging.getLogger("ApiClient")


class RiskDeskApiClient:
    """
    Client for the RiskDesk gateway. `session` may be any object with the
    requests.Session get/post interface.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[Any] = None):
        self.base_url = (base_url if base_url is not None else BACKEND_URL).rstrip('/')
        self.session = session or requests.Session()
        logger.info(f"🔌 API Client initialized pointing to: {self.base_url}")

    def _request(self, method: str, endpoint: str, **kwargs) -> Optional[Any]:
        """Internal helper performing a request with error handling."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = getattr(self.session, method)(url, timeout=REQUEST_TIMEOUT, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.ConnectionError:
            logger.error(f"❌ Connection Error: Could not reach {url}")
            return None
        except requests.exceptions.Timeout:
            logger.warning(f"⏳ Timeout: Backend did not respond in {REQUEST_TIMEOUT}s")
            return None
        except Exception as e:
            logger.error(f"⚠️ API Error ({method.upper()} {endpoint}): {e}")
            return None

    def _get(self, endpoint: str, params: Optional[Dict] = None) -> Optional[Any]:
        return self._request("get", endpoint, params=params)

    def _post(self, endpoint: str, payload: Optional[Dict] = None) -> Optional[Any]:
        return self._request("post", endpoint, json=payload)

    # ==========================================================================
    # SYSTEM HEALTH
    # ==========================================================================
    def is_backend_alive(self) -> bool:
        data = self._get("/health")
        return data is not None and data.get("status") == "healthy"

    # ==========================================================================
    # DATA & STATISTICS
    # ==========================================================================
    def get_transactions(self, limit: int = 100) -> pd.DataFrame:
        """
        Latest transactions, newest first, with features flattened into columns.
        Returns an empty DataFrame on failure.
        """
        data = self._get("/transactions", params={"limit": limit})
        if not data:
            return pd.DataFrame()

        df = pd.json_normalize(data, sep='.')
        df.columns = [c.split('.')[-1] for c in df.columns]
        if 'timestamp' in df.columns:
            df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
        return df

    def get_transaction(self, transaction_id: str) -> Optional[Dict[str, Any]]:
        """Full case file for one transaction, or None when unknown."""
        return self._get(f"/transactions/{transaction_id}")

    def get_alerts(self) -> pd.DataFrame:
        data = self._get("/alerts")
        if not data:
            return pd.DataFrame(columns=ALERT_COLUMNS)

        df = pd.DataFrame(data)
        if 'timestamp' in df.columns:
            df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
        return df

    def get_metrics(self) -> Dict[str, Any]:
        default = {
            "totalTransactions": 0,
            "flaggedTransactions": 0,
            "falsePositiveRate": 0.0,
            "averageRiskScore": 0.0,
            "alertsToday": 0,
            "blockedAmount": 0.0,
            "reviewBacklog": 0,
            "responseTime": 0.0,
        }
        data = self._get("/metrics")
        return data if data else default

    def get_summary(self) -> Dict[str, Any]:
        data = self._get("/summary")
        return data if data else {}

    # ==========================================================================
    # ANALYST ACTIONS
    # ==========================================================================
    def apply_action(self, transaction_id: str, action: str) -> Optional[Dict[str, Any]]:
        """Returns the updated transaction, or None if the gateway refused."""
        return self._post(f"/transactions/{transaction_id}/action", {"action": action})

    def refresh(self) -> bool:
        return self._post("/refresh") is not None

    def get_notifications(self) -> list:
        return self._get("/notifications") or []
