from typing import Iterable, List

import pandas as pd

from riskdesk.schemas import (
    ALERT_SEVERITIES, ALERT_STATUSES, RISK_LEVELS, TRANSACTION_STATUSES,
    Alert, Transaction,
)

TRANSACTION_COLUMNS: List[str] = [
    'id', 'timestamp', 'amount', 'currency', 'fromAccount', 'toAccount', 'description',
    'riskScore', 'riskLevel', 'status',
    'velocityScore', 'amountAnomaly', 'timeAnomaly', 'locationAnomaly',
    'frequencyScore', 'networkRisk', 'behaviorScore',
    'explanationCount',
    'location', 'deviceFingerprint', 'merchantCategory', 'timeOfDay', 'dayOfWeek',
]

ALERT_COLUMNS: List[str] = [
    'id', 'transactionId', 'type', 'severity', 'title', 'description',
    'timestamp', 'status', 'assignedTo',
]


def _flatten(txn: Transaction) -> dict:
    row = txn.model_dump(by_alias=True, exclude={'features', 'explanations', 'metadata'})
    row.update(txn.features.model_dump(by_alias=True))
    row.update(txn.metadata.model_dump(by_alias=True))
    row['explanationCount'] = len(txn.explanations)
    return row


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """
    One row per transaction, features and metadata flattened.
    Column order is fixed, so an empty input still has the full schema.
    """
    df = pd.DataFrame([_flatten(t) for t in transactions], columns=TRANSACTION_COLUMNS)
    if not df.empty:
        df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    return df.reset_index(drop=True)


def alerts_frame(alerts: Iterable[Alert]) -> pd.DataFrame:
    df = pd.DataFrame([a.model_dump(by_alias=True) for a in alerts], columns=ALERT_COLUMNS)
    if not df.empty:
        df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    return df.reset_index(drop=True)


def _breakdown(series: pd.Series, values) -> pd.Series:
    return series.value_counts().reindex(list(values), fill_value=0).astype(int)


def status_breakdown(df: pd.DataFrame) -> pd.Series:
    """Transactions per workflow status, zero-filled."""
    return _breakdown(df['status'], TRANSACTION_STATUSES)


def risk_breakdown(df: pd.DataFrame) -> pd.Series:
    """Transactions per risk level, low -> critical."""
    return _breakdown(df['riskLevel'], RISK_LEVELS)


def severity_breakdown(df: pd.DataFrame) -> pd.Series:
    return _breakdown(df['severity'], ALERT_SEVERITIES)


def alert_status_breakdown(df: pd.DataFrame) -> pd.Series:
    return _breakdown(df['status'], ALERT_STATUSES)
