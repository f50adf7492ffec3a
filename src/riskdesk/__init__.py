from riskdesk.synthesis import (
    TransactionSynthesizer,
    synthesize_alerts,
    synthesize_metrics,
    synthesize_transaction,
    synthesize_transactions,
)
from riskdesk.state import DashboardState

__all__ = [
    "TransactionSynthesizer",
    "DashboardState",
    "synthesize_transaction",
    "synthesize_transactions",
    "synthesize_alerts",
    "synthesize_metrics",
]
