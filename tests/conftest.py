import random
import sys
import os
from datetime import datetime, timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from riskdesk.config import SimulationConfig
from riskdesk.state import DashboardState
from riskdesk.synthesis import TransactionSynthesizer

FIXED_NOW = datetime(2024, 3, 6, 15, 30, tzinfo=timezone.utc)  # a Wednesday


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def synthesizer(rng, clock):
    return TransactionSynthesizer(rng=rng, clock=clock)


@pytest.fixture
def small_config():
    return SimulationConfig(initial_transactions=20, max_transactions=25, arrival_probability=0.3)


@pytest.fixture
def state(synthesizer, small_config):
    return DashboardState(synthesizer, small_config)
