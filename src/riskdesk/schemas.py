from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

# ==============================================================================
# 1. CLOSED SETS
# ==============================================================================
RiskLevel = Literal["low", "medium", "high", "critical"]
TransactionStatus = Literal["pending", "approved", "flagged", "investigating", "blocked"]
ExplanationCategory = Literal["velocity", "amount", "behavior", "network", "temporal", "location"]
Currency = Literal["USD", "GBP", "EUR"]

AlertType = Literal["fraud", "aml", "velocity", "behavioral"]
AlertSeverity = Literal["low", "medium", "high", "critical"]
AlertStatus = Literal["new", "investigating", "resolved", "false_positive"]

ReviewAction = Literal["approve", "reject", "investigate"]
NotificationVariant = Literal["default", "destructive"]

# Ordered low -> critical
RISK_LEVELS = ("low", "medium", "high", "critical")
TRANSACTION_STATUSES = ("pending", "approved", "flagged", "investigating", "blocked")
ALERT_TYPES = ("fraud", "aml", "velocity", "behavioral")
ALERT_SEVERITIES = ("low", "medium", "high", "critical")
ALERT_STATUSES = ("new", "investigating", "resolved", "false_positive")


def risk_rank(level: str) -> int:
    """Position of a risk level in the low -> critical ordering."""
    return RISK_LEVELS.index(level)


class _Record(BaseModel):
    class Config:
        populate_by_name = True


# ==============================================================================
# 2. TRANSACTIONS
# ==============================================================================
class TransactionFeatures(_Record):
    velocity_score: float = Field(alias="velocityScore", ge=0, le=1)
    amount_anomaly: float = Field(alias="amountAnomaly", ge=0, le=1)
    time_anomaly: float = Field(alias="timeAnomaly", ge=0, le=1)
    location_anomaly: float = Field(alias="locationAnomaly", ge=0, le=1)
    frequency_score: float = Field(alias="frequencyScore", ge=0, le=1)
    network_risk: float = Field(alias="networkRisk", ge=0, le=1)
    behavior_score: float = Field(alias="behaviorScore", ge=0, le=1)


class RiskExplanation(_Record):
    feature: str
    impact: float = Field(ge=0, le=1)
    description: str
    category: ExplanationCategory


class TransactionMetadata(_Record):
    location: Optional[str] = None
    device_fingerprint: Optional[str] = Field(default=None, alias="deviceFingerprint")
    merchant_category: Optional[str] = Field(default=None, alias="merchantCategory")
    time_of_day: str = Field(alias="timeOfDay")
    day_of_week: str = Field(alias="dayOfWeek")


class Transaction(_Record):
    id: str
    timestamp: datetime
    amount: float = Field(gt=0)
    currency: Currency
    from_account: str = Field(alias="fromAccount")
    to_account: str = Field(alias="toAccount")
    description: str
    risk_score: float = Field(alias="riskScore", ge=0, le=1)
    risk_level: RiskLevel = Field(alias="riskLevel")
    status: TransactionStatus
    features: TransactionFeatures
    explanations: List[RiskExplanation] = Field(default_factory=list)
    metadata: TransactionMetadata


# ==============================================================================
# 3. ALERTS & METRICS
# ==============================================================================
class Alert(_Record):
    id: str
    transaction_id: str = Field(alias="transactionId")
    type: AlertType
    severity: AlertSeverity
    title: str
    description: str
    timestamp: datetime
    status: AlertStatus
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")


class DashboardMetrics(_Record):
    total_transactions: int = Field(alias="totalTransactions")
    flagged_transactions: int = Field(alias="flaggedTransactions")
    false_positive_rate: float = Field(alias="falsePositiveRate")
    average_risk_score: float = Field(alias="averageRiskScore")
    alerts_today: int = Field(alias="alertsToday")
    blocked_amount: float = Field(alias="blockedAmount")
    review_backlog: int = Field(alias="reviewBacklog")
    response_time: float = Field(alias="responseTime")


# ==============================================================================
# 4. DASHBOARD FEEDBACK
# ==============================================================================
class Notification(_Record):
    title: str
    description: str
    variant: NotificationVariant = "default"
    timestamp: datetime


class DashboardSummary(_Record):
    """KPIs derived from the live collections, next to the static snapshot."""
    transaction_count: int = Field(alias="transactionCount")
    flagged_count: int = Field(alias="flaggedCount")
    flagged_share: float = Field(alias="flaggedShare")
    critical_count: int = Field(alias="criticalCount")
    active_alerts: int = Field(alias="activeAlerts")
    average_risk_score: float = Field(alias="averageRiskScore")
    metrics: DashboardMetrics
