"""
ROLE: The Gateway (API)
RESPONSIBILITIES:
1. Owns one DashboardState per app instance (app.state.dashboard).
2. Serves the transaction feed, alerts, metrics and derived KPIs.
3. Accepts analyst review actions and refresh requests.
4. Runs the simulated-arrival tick on the event loop.
"""
import os
import sys
import time
import random
import asyncio
import logging
import psutil
from typing import List, Optional
from contextlib import asynccontextmanager
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

# Add src to path so the gateway runs without an installed package
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from riskdesk.config import ALLOWED_ORIGINS, RANDOM_SEED, SIMULATION_TICK_SECONDS
from riskdesk.exceptions import AlertNotFoundError, InvalidActionError, TransactionNotFoundError
from riskdesk.logs import configure_logging, log_event
from riskdesk.schemas import Alert, DashboardMetrics, DashboardSummary, Notification, Transaction
from riskdesk.state import DashboardState
from riskdesk.synthesis import TransactionSynthesizer

from schemas import ActionRequest, AlertSelection, SystemMetrics, TickResponse

# ==============================================================================
# 1. STRUCTURED LOGGING
# ==============================================================================
configure_logging("riskdesk-gateway")
logger = logging.getLogger("Gateway")

# ==============================================================================
# 2. SIMULATED ARRIVALS
# ==============================================================================
async def simulate_arrivals(state: DashboardState, interval: float):
    """Ticks the state owner every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            state.tick()
        except Exception as e:
            logger.error(f"❌ Arrival tick failed: {e}", exc_info=e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ----Startup----------
    logger.info("🚀 Gateway starting...")
    task = None
    interval = app.state.tick_seconds
    if interval > 0:
        task = asyncio.create_task(simulate_arrivals(app.state.dashboard, interval))
        log_event(logger, "⏱️ Arrival simulation enabled", interval_seconds=interval)
    else:
        logger.info("Arrival simulation disabled")

    yield

    # ----Shutdown----------
    logger.info("🛑 Gateway shutting down...")
    if task is not None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

# ==============================================================================
# 3. ENDPOINTS
# ==============================================================================
router = APIRouter()


def get_state(request: Request) -> DashboardState:
    return request.app.state.dashboard


@router.get("/", tags=["System"])
async def root():
    return {"service": "RiskDesk Gateway", "status": "active"}


@router.get("/health", tags=["System"])
async def health(request: Request, state: DashboardState = Depends(get_state)):
    return {
        "status": "healthy",
        "transactions": len(state.transactions),
        "alerts": len(state.alerts),
        "uptime": f"{int(time.time() - request.app.state.startup_time)}s",
    }


@router.get("/system", response_model=SystemMetrics, tags=["System"])
async def get_system_metrics(request: Request, state: DashboardState = Depends(get_state)):
    process = psutil.Process()
    return SystemMetrics(
        memory_usage_mb=round(process.memory_info().rss / 1024 / 1024, 2),
        cpu_usage_percent=process.cpu_percent(),
        transactions_loaded=len(state.transactions),
        alerts_loaded=len(state.alerts),
        uptime_seconds=int(time.time() - request.app.state.startup_time),
    )


@router.get("/transactions", response_model=List[Transaction], tags=["Dashboard"])
async def list_transactions(limit: int = Query(100, ge=1, le=1000), state: DashboardState = Depends(get_state)):
    return state.transactions[:limit]


@router.get("/transactions/{transaction_id}", response_model=Transaction, tags=["Forensics"])
async def get_transaction(transaction_id: str, state: DashboardState = Depends(get_state)):
    try:
        return state.find(transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/transactions/{transaction_id}/action", response_model=Transaction, tags=["Review"])
async def apply_action(transaction_id: str, body: ActionRequest, state: DashboardState = Depends(get_state)):
    try:
        return state.apply_action(transaction_id, body.action)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidActionError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/alerts", response_model=List[Alert], tags=["Dashboard"])
async def list_alerts(state: DashboardState = Depends(get_state)):
    return state.alerts


@router.post("/alerts/{alert_id}/select", response_model=AlertSelection, tags=["Review"])
async def select_alert(alert_id: str, state: DashboardState = Depends(get_state)):
    try:
        txn = state.select_alert(alert_id)
    except AlertNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AlertSelection(alert_id=alert_id, transaction=txn)


@router.get("/metrics", response_model=DashboardMetrics, tags=["Dashboard"])
async def get_metrics(state: DashboardState = Depends(get_state)):
    return state.metrics


@router.get("/summary", response_model=DashboardSummary, tags=["Dashboard"])
async def get_summary(state: DashboardState = Depends(get_state)):
    return state.summary()


@router.get("/notifications", response_model=List[Notification], tags=["Dashboard"])
async def drain_notifications(state: DashboardState = Depends(get_state)):
    return state.drain_notifications()


@router.post("/refresh", tags=["Dashboard"])
async def refresh(state: DashboardState = Depends(get_state)):
    state.refresh()
    return {"transactions": len(state.transactions), "alerts": len(state.alerts)}


@router.post("/simulate/tick", response_model=TickResponse, tags=["Simulation"])
async def simulate_tick(state: DashboardState = Depends(get_state)):
    txn = state.tick()
    return TickResponse(arrived=txn is not None, transaction=txn)

# ==============================================================================
# 4. APP FACTORY
# ==============================================================================
def create_app(state: Optional[DashboardState] = None, tick_seconds: Optional[float] = None) -> FastAPI:
    application = FastAPI(title="RiskDesk Gateway", version="1.0.0", lifespan=lifespan)

    if state is None:
        rng = random.Random(RANDOM_SEED) if RANDOM_SEED is not None else None
        state = DashboardState(TransactionSynthesizer(rng=rng))

    application.state.dashboard = state
    application.state.tick_seconds = SIMULATION_TICK_SECONDS if tick_seconds is None else tick_seconds
    application.state.startup_time = time.time()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(router)
    return application


app = create_app()
