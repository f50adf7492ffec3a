"""
Errors raised by the dashboard state owner.

    RiskDeskError
    ├── TransactionNotFoundError (LookupError)
    ├── AlertNotFoundError (LookupError)
    └── InvalidActionError (ValueError)
"""


class RiskDeskError(Exception):
    """Base class for every error raised by riskdesk."""


class TransactionNotFoundError(RiskDeskError, LookupError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class AlertNotFoundError(RiskDeskError, LookupError):
    def __init__(self, alert_id: str):
        self.alert_id = alert_id
        super().__init__(f"Alert {alert_id} not found")


class InvalidActionError(RiskDeskError, ValueError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unsupported review action: {action!r}")
