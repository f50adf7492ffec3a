"""
Synthetic data generators for the fraud review dashboard.
Every draw goes through an injectable `random.Random`, so a seeded
synthesizer reproduces the exact same transactions, alerts and tiers.
"""
import random
import string
import operator
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from riskdesk.schemas import (
    ALERT_SEVERITIES, ALERT_TYPES,
    Alert, DashboardMetrics, Transaction, TransactionFeatures, TransactionMetadata,
)
from riskdesk.scoring import SCORE_DECIMALS, classify, composite_score, draw_status, explain

logger = logging.getLogger("Synthesizer")

# ============================================================================
# REFERENCE DATA
# ============================================================================
ACCOUNTS = [
    'AC001234567', 'AC002345678', 'AC003456789', 'AC004567890', 'AC005678901',
    'AC006789012', 'AC007890123', 'AC008901234', 'AC009012345', 'AC010123456'
]

DESCRIPTIONS = [
    'Wire Transfer', 'ACH Payment', 'International Wire', 'Cash Deposit',
    'Card Payment', 'ATM Withdrawal', 'Check Payment', 'Online Transfer',
    'Merchant Payment', 'Cryptocurrency Exchange', 'Investment Transfer'
]

LOCATIONS = [
    'New York, NY', 'London, UK', 'Hong Kong', 'Singapore', 'Dubai, UAE',
    'Zurich, Switzerland', 'Cayman Islands', 'Panama City', 'Luxembourg'
]

CURRENCIES = ['USD', 'GBP', 'EUR']
CURRENCY_WEIGHTS = [0.6, 0.2, 0.2]

MERCHANT_CATEGORIES = ['Financial Services', 'Retail']
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

TRANSACTION_WINDOW = timedelta(hours=24)
ALERT_WINDOW = timedelta(hours=6)
MIN_AMOUNT = 1000.0
AMOUNT_SPAN = 1_000_000.0

ALERT_BATCH_SIZE = 12
ALERT_ASSIGNEE = 'analyst@bank.com'
ALERT_DESCRIPTION = 'Automated ML model flagged this transaction for manual review based on risk patterns.'

_BASE36 = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def time_of_day(ts: datetime) -> str:
    if ts.hour < 12:
        return 'morning'
    if ts.hour < 18:
        return 'afternoon'
    return 'evening'


class TransactionSynthesizer:
    """
    Produces independent synthetic transactions, alerts and the metrics snapshot.

    Args:
        rng: source of uniform randomness; seed it for reproducible output.
        clock: zero-argument callable returning the current aware datetime.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Optional[Callable[[], datetime]] = None):
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock or utc_now

    def _token(self, prefix: str, length: int, upper: bool = True) -> str:
        token = ''.join(self.rng.choice(_BASE36) for _ in range(length))
        return prefix + (token.upper() if upper else token)

    def _pick(self, options):
        return options[int(self.rng.random() * len(options))]

    # ------------------------------------------------------------------------
    # TRANSACTIONS
    # ------------------------------------------------------------------------
    def synthesize_transaction(self) -> Transaction:
        rng = self.rng
        timestamp = self.clock() - rng.random() * TRANSACTION_WINDOW
        amount = rng.random() * AMOUNT_SPAN + MIN_AMOUNT

        raw = TransactionFeatures(
            velocity_score=rng.random(),
            amount_anomaly=rng.random(),
            time_anomaly=rng.random(),
            location_anomaly=rng.random() * 0.8,
            network_risk=rng.random() * 0.6,
            behavior_score=rng.random() * 0.7,
            frequency_score=rng.random(),
        )

        # Tier and status use the un-rounded score
        score = composite_score(raw)
        level = classify(score)
        status = draw_status(level, rng)
        explanations = explain(raw)

        features = TransactionFeatures(**{
            name: round(value, SCORE_DECIMALS) for name, value in raw.model_dump().items()
        })
        currency = rng.choices(CURRENCIES, weights=CURRENCY_WEIGHTS)[0]

        return Transaction(
            id=self._token('TXN', 9),
            timestamp=timestamp,
            amount=round(amount, 2),
            currency=currency,
            from_account=self._pick(ACCOUNTS),
            to_account=self._pick(ACCOUNTS),
            description=self._pick(DESCRIPTIONS),
            risk_score=round(score, SCORE_DECIMALS),
            risk_level=level,
            status=status,
            features=features,
            explanations=explanations,
            metadata=TransactionMetadata(
                location=self._pick(LOCATIONS),
                device_fingerprint=self._token('DEV', 8, upper=False),
                merchant_category=MERCHANT_CATEGORIES[0] if rng.random() < 0.5 else MERCHANT_CATEGORIES[1],
                time_of_day=time_of_day(timestamp),
                day_of_week=DAY_NAMES[timestamp.weekday()],
            ),
        )

    def synthesize_transactions(self, n: int = 50) -> List[Transaction]:
        """`n` independent transactions, newest first."""
        if isinstance(n, bool):
            raise TypeError("Transaction count must be an int, got bool")
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"Transaction count must be >= 0, got {n}")

        batch = [self.synthesize_transaction() for _ in range(n)]
        batch.sort(key=lambda txn: txn.timestamp, reverse=True)
        logger.debug(f"Synthesized {n} transactions")
        return batch

    # ------------------------------------------------------------------------
    # ALERTS
    # ------------------------------------------------------------------------
    def synthesize_alert(self) -> Alert:
        """
        One alert. Its transaction id is drawn independently and need not
        match any transaction held by the dashboard.
        """
        rng = self.rng
        return Alert(
            id=self._token('ALR', 9),
            transaction_id=self._token('TXN', 9),
            type=self._pick(ALERT_TYPES),
            severity=self._pick(ALERT_SEVERITIES),
            title=f"Suspicious {self._pick(ALERT_TYPES)} activity detected",
            description=ALERT_DESCRIPTION,
            timestamp=self.clock() - rng.random() * ALERT_WINDOW,
            status='new' if rng.random() < 0.4 else 'investigating',
            assigned_to=ALERT_ASSIGNEE if rng.random() < 0.5 else None,
        )

    def synthesize_alerts(self) -> List[Alert]:
        return [self.synthesize_alert() for _ in range(ALERT_BATCH_SIZE)]

    # ------------------------------------------------------------------------
    # METRICS
    # ------------------------------------------------------------------------
    def synthesize_metrics(self) -> DashboardMetrics:
        return synthesize_metrics()


def synthesize_metrics() -> DashboardMetrics:
    """Static snapshot; not derived from any live collection."""
    return DashboardMetrics(
        total_transactions=15427,
        flagged_transactions=342,
        false_positive_rate=0.12,
        average_risk_score=0.23,
        alerts_today=23,
        blocked_amount=2847392.45,
        review_backlog=18,
        response_time=4.2,
    )


# ============================================================================
# MODULE-LEVEL SHORTCUTS (unseeded)
# ============================================================================
_default = TransactionSynthesizer()


def synthesize_transaction() -> Transaction:
    return _default.synthesize_transaction()


def synthesize_transactions(n: int = 50) -> List[Transaction]:
    return _default.synthesize_transactions(n)


def synthesize_alerts() -> List[Alert]:
    return _default.synthesize_alerts()
