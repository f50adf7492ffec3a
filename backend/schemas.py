from typing import Optional
from pydantic import BaseModel, Field

from riskdesk.schemas import ReviewAction, Transaction


class ActionRequest(BaseModel):
    action: ReviewAction


class TickResponse(BaseModel):
    arrived: bool
    transaction: Optional[Transaction] = None


class AlertSelection(BaseModel):
    alert_id: str
    transaction: Optional[Transaction] = None


class SystemMetrics(BaseModel):
    memory_usage_mb: float
    cpu_usage_percent: float
    transactions_loaded: int
    alerts_loaded: int
    uptime_seconds: int = Field(ge=0)
