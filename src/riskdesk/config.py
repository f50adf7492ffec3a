import os
from typing import Final, List, Optional
from dataclasses import dataclass

# ==============================================================================
# 1. SYSTEM & CONNECTION
# ==============================================================================
ENVIRONMENT: Final = os.getenv("ENVIRONMENT", "development").lower()
LOG_LEVEL: Final = os.getenv("LOG_LEVEL", "INFO").upper()
BACKEND_URL: Final = os.getenv("BACKEND_URL", "http://backend:8000").rstrip('/')
REQUEST_TIMEOUT: Final = float(os.getenv("REQUEST_TIMEOUT", "3.0"))
ALLOWED_ORIGINS: Final[List[str]] = os.getenv("ALLOWED_ORIGINS", "*").split(',')

# Quick validation
if ENVIRONMENT not in {"development", "staging", "production"}:
    raise ValueError(f"Invalid ENVIRONMENT: {ENVIRONMENT}")

# ==============================================================================
# 2. SIMULATION
# ==============================================================================
INITIAL_TRANSACTIONS: Final = int(os.getenv("INITIAL_TRANSACTIONS", "100"))
MAX_TRANSACTIONS: Final = int(os.getenv("MAX_TRANSACTIONS", "100"))
ARRIVAL_PROBABILITY: Final = float(os.getenv("ARRIVAL_PROBABILITY", "0.3"))
SIMULATION_TICK_SECONDS: Final = float(os.getenv("SIMULATION_TICK_SECONDS", "15"))
NOTIFICATION_BUFFER: Final = int(os.getenv("NOTIFICATION_BUFFER", "50"))

_seed = os.getenv("RANDOM_SEED")
RANDOM_SEED: Final[Optional[int]] = int(_seed) if _seed else None


@dataclass(frozen=True)
class SimulationConfig:
    """Sizing and pacing of the in-memory dashboard state."""
    initial_transactions: int = INITIAL_TRANSACTIONS
    max_transactions: int = MAX_TRANSACTIONS
    arrival_probability: float = ARRIVAL_PROBABILITY
    notification_buffer: int = NOTIFICATION_BUFFER

    def __post_init__(self):
        if self.initial_transactions < 0:
            raise ValueError(f"initial_transactions must be >= 0, got {self.initial_transactions}")
        if self.max_transactions < 1:
            raise ValueError(f"max_transactions must be >= 1, got {self.max_transactions}")
        if not 0.0 <= self.arrival_probability <= 1.0:
            raise ValueError(f"arrival_probability must be in [0, 1], got {self.arrival_probability}")
        if self.notification_buffer < 1:
            raise ValueError(f"notification_buffer must be >= 1, got {self.notification_buffer}")
