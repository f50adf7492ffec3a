"""
Risk classification for synthetic transactions.

The composite score is a convex combination of six sub-scores. The tier
thresholds below were tuned against exactly these weights and the sampling
ranges used in `riskdesk.synthesis`; change one and the other must follow.
"""
import random
from typing import Dict, List, NamedTuple

from riskdesk.schemas import RiskExplanation, TransactionFeatures

# ==============================================================================
# 1. WEIGHTS & THRESHOLDS
# ==============================================================================
RISK_WEIGHTS: Dict[str, float] = {
    "velocity_score": 0.25,
    "amount_anomaly": 0.20,
    "time_anomaly": 0.15,
    "location_anomaly": 0.15,
    "network_risk": 0.15,
    "behavior_score": 0.10,
}

# (lower bound, exclusive) -> level, checked top to bottom
TIER_THRESHOLDS = (
    (0.8, "critical"),
    (0.6, "high"),
    (0.4, "medium"),
)

# level -> (probability of the escalated status, escalated, fallback)
STATUS_DRAWS = {
    "critical": (0.5, "blocked", "investigating"),
    "high": (0.7, "flagged", "investigating"),
    "medium": (0.3, "flagged", "pending"),
}

SCORE_DECIMALS = 3


class ExplanationRule(NamedTuple):
    field: str
    threshold: float
    feature: str
    description: str
    category: str


EXPLANATION_RULES = (
    ExplanationRule("velocity_score", 0.7, "Transaction Velocity",
                    "High frequency of transactions in short time period", "velocity"),
    ExplanationRule("amount_anomaly", 0.6, "Amount Anomaly",
                    "Transaction amount significantly higher than usual pattern", "amount"),
    ExplanationRule("location_anomaly", 0.5, "Location Risk",
                    "Transaction from high-risk jurisdiction", "location"),
    ExplanationRule("network_risk", 0.4, "Network Analysis",
                    "Connected to accounts with suspicious activity", "network"),
)

# ==============================================================================
# 2. SCORING
# ==============================================================================
def composite_score(features: TransactionFeatures) -> float:
    """Weighted sum of the sub-scores. `frequency_score` does not contribute."""
    return sum(getattr(features, name) * weight for name, weight in RISK_WEIGHTS.items())


def classify(score: float) -> str:
    """Maps an (un-rounded) composite score to its risk level."""
    for lower_bound, level in TIER_THRESHOLDS:
        if score > lower_bound:
            return level
    return "low"


def draw_status(level: str, rng: random.Random) -> str:
    """
    Initial workflow status for a freshly scored transaction.
    Low-risk transactions are auto-approved and consume no randomness.
    """
    if level not in STATUS_DRAWS:
        return "approved"
    probability, escalated, fallback = STATUS_DRAWS[level]
    return escalated if rng.random() < probability else fallback


def explain(features: TransactionFeatures) -> List[RiskExplanation]:
    """
    One explanation per sub-score above its rule threshold, in rule order.
    Pure: identical features always give an identical list.
    """
    explanations = []
    for rule in EXPLANATION_RULES:
        value = getattr(features, rule.field)
        if value > rule.threshold:
            explanations.append(RiskExplanation(
                feature=rule.feature,
                impact=round(value, SCORE_DECIMALS),
                description=rule.description,
                category=rule.category,
            ))
    return explanations
