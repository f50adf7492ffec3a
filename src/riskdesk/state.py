"""
ROLE: Dashboard State Owner
RESPONSIBILITIES:
1. Owns the in-memory transaction, alert and metrics collections.
2. Applies analyst review actions as in-place status changes.
3. Replaces everything wholesale on refresh.
4. Simulates arrivals on each tick (prepend + truncate).
5. Queues notifications for the presentation layer.
"""
import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from riskdesk.config import SimulationConfig
from riskdesk.exceptions import AlertNotFoundError, InvalidActionError, TransactionNotFoundError
from riskdesk.frames import transactions_frame
from riskdesk.logs import log_event
from riskdesk.schemas import Alert, DashboardMetrics, DashboardSummary, Notification, Transaction
from riskdesk.synthesis import TransactionSynthesizer

logger = logging.getLogger("DashboardState")

ACTION_STATUS: Dict[str, str] = {
    "approve": "approved",
    "reject": "blocked",
    "investigate": "investigating",
}

ACTION_TOASTS = {
    "approve": ("Transaction Approved", "approved", "default"),
    "reject": ("Transaction Blocked", "blocked", "destructive"),
    "investigate": ("Transaction Under Investigation", "marked for investigation", "default"),
}

ALERTING_LEVELS = {"high", "critical"}
REVIEW_STATUSES = {"flagged", "investigating"}


class DashboardState:
    """
    Single owner of the dashboard collections. Not thread-safe: callers
    run every operation on one thread (or one event loop).
    """

    def __init__(self, synthesizer: Optional[TransactionSynthesizer] = None, config: Optional[SimulationConfig] = None):
        self.synthesizer = synthesizer or TransactionSynthesizer()
        self.config = config or SimulationConfig()

        self._transactions: List[Transaction] = []
        self._alerts: List[Alert] = []
        self._metrics: Optional[DashboardMetrics] = None
        self._selected: Optional[Transaction] = None

        self._notifications: Deque[Notification] = deque(maxlen=self.config.notification_buffer)
        self._listeners: List[Callable[[Notification], None]] = []

        self.refresh(announce=False)

    # ==========================================================================
    # READ-ONLY VIEWS
    # ==========================================================================
    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def alerts(self) -> List[Alert]:
        return list(self._alerts)

    @property
    def metrics(self) -> DashboardMetrics:
        return self._metrics

    @property
    def selected(self) -> Optional[Transaction]:
        return self._selected

    def find(self, transaction_id: str) -> Transaction:
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        raise TransactionNotFoundError(transaction_id)

    def find_alert(self, alert_id: str) -> Alert:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        raise AlertNotFoundError(alert_id)

    # ==========================================================================
    # NOTIFICATIONS
    # ==========================================================================
    def subscribe(self, callback: Callable[[Notification], None]) -> None:
        self._listeners.append(callback)

    def _notify(self, title: str, description: str, variant: str = "default") -> Notification:
        note = Notification(
            title=title,
            description=description,
            variant=variant,
            timestamp=self.synthesizer.clock(),
        )
        self._notifications.append(note)
        for listener in self._listeners:
            try:
                listener(note)
            except Exception as e:
                logger.error(f"❌ Notification listener failed: {e}", exc_info=e)
        return note

    def drain_notifications(self) -> List[Notification]:
        pending = list(self._notifications)
        self._notifications.clear()
        return pending

    # ==========================================================================
    # MUTATIONS
    # ==========================================================================
    def refresh(self, announce: bool = True) -> None:
        """Replaces all three collections with freshly synthesized data."""
        self._transactions = self.synthesizer.synthesize_transactions(self.config.initial_transactions)
        self._alerts = self.synthesizer.synthesize_alerts()
        self._metrics = self.synthesizer.synthesize_metrics()
        self._selected = self._transactions[0] if self._transactions else None

        log_event(logger, "🔄 Dashboard data refreshed",
                  transactions=len(self._transactions), alerts=len(self._alerts))
        if announce:
            self._notify("Data Refreshed", "Dashboard data has been updated")

    def apply_action(self, transaction_id: str, action: str) -> Transaction:
        """Sets the review status of exactly one transaction."""
        if action not in ACTION_STATUS:
            log_event(logger, "⚠️ Rejected review action", logging.WARNING,
                      transaction_id=transaction_id, action=action)
            raise InvalidActionError(action)

        txn = self.find(transaction_id)
        previous = txn.status
        txn.status = ACTION_STATUS[action]

        log_event(logger, "✅ Review action applied",
                  transaction_id=transaction_id, action=action, previous=previous, status=txn.status)

        title, verb, variant = ACTION_TOASTS[action]
        self._notify(title, f"Transaction {transaction_id} has been {verb}", variant)
        return txn

    def tick(self) -> Optional[Transaction]:
        """
        Simulated arrival. With `arrival_probability` a new transaction is
        prepended and the collection truncated to `max_transactions`.
        """
        if self.synthesizer.rng.random() >= self.config.arrival_probability:
            return None

        txn = self.synthesizer.synthesize_transaction()
        self._transactions = [txn] + self._transactions[:self.config.max_transactions - 1]

        log_event(logger, "📥 Transaction arrived",
                  transaction_id=txn.id, risk_level=txn.risk_level, risk_score=txn.risk_score)

        if txn.risk_level in ALERTING_LEVELS:
            self._notify("High Risk Transaction Detected",
                         f"Transaction {txn.id} flagged for review", "destructive")
        return txn

    # ==========================================================================
    # SELECTION
    # ==========================================================================
    def select(self, transaction_id: str) -> Transaction:
        self._selected = self.find(transaction_id)
        return self._selected

    def select_alert(self, alert_id: str) -> Optional[Transaction]:
        """
        Selects the transaction an alert points at, when it is loaded.
        Alerts may reference transactions that are not in the collection.
        """
        alert = self.find_alert(alert_id)
        match = next((t for t in self._transactions if t.id == alert.transaction_id), None)
        if match is not None:
            self._selected = match
        self._notify("Alert Selected", f"Viewing details for {alert.title}")
        return match

    # ==========================================================================
    # SUMMARY
    # ==========================================================================
    def summary(self) -> DashboardSummary:
        """Live KPIs next to the (static) metrics snapshot."""
        df = transactions_frame(self._transactions)
        total = len(df)

        if total:
            flagged = int(df['status'].isin(REVIEW_STATUSES).sum())
            critical = int((df['riskLevel'] == 'critical').sum())
            avg_score = round(float(df['riskScore'].mean()), 3)
        else:
            flagged, critical, avg_score = 0, 0, 0.0

        return DashboardSummary(
            transaction_count=total,
            flagged_count=flagged,
            flagged_share=round(flagged / total, 3) if total else 0.0,
            critical_count=critical,
            active_alerts=sum(1 for a in self._alerts if a.status == 'new'),
            average_risk_score=avg_score,
            metrics=self._metrics,
        )
