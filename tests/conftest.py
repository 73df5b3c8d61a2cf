# tests/conftest.py
import logging
import pytest
import structlog
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from wagerbook.betting import BetLedger, Mode, Side
from wagerbook.core.storage import InMemoryRepository
from wagerbook.utils.observability import MetricsRegistry

# Configure pytest
pytest_plugins = []

# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers and structlog config bound to a test's captured streams."""
    yield
    structlog.reset_defaults()
    logger = logging.getLogger("wagerbook")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


class RecordingNotifier:
    """Notifier double that records warnings and answers confirmations."""

    def __init__(self, confirm: bool = True):
        self.confirm = confirm
        self.warnings = []
        self.prompts = []

    def warn(self, message):
        self.warnings.append(message)

    def confirm_destructive(self, prompt):
        self.prompts.append(prompt)
        return self.confirm


class FixedClock:
    """Deterministic clock: each call advances one minute."""

    def __init__(self, start=datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def clock():
    return FixedClock()


def sequential_ids(last_id):
    """Small predictable ids: 1, 2, 3, ..."""
    return last_id + 1


class TickingTime:
    """Stand-in for the ``time`` module whose clock advances on every read."""

    def __init__(self, start=1_714_586_400.0, step=1.0):
        self.now = start
        self.step = step

    def time(self):
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def ticking_time(monkeypatch):
    """Drive millisecond wager ids from a clock that moves one second per id."""
    from wagerbook.betting import ledger as ledger_module

    fake = TickingTime()
    monkeypatch.setattr(ledger_module, "time", fake)
    return fake


@pytest.fixture
def ledger(clock):
    """Empty ledger with a deterministic clock and sequential ids."""
    return BetLedger(clock=clock, id_factory=sequential_ids)


@pytest.fixture
def populated_ledger(ledger):
    """Five wagers over two matches, oldest placed first."""
    ledger.place("A vs B", Side.SIDE_A, Mode.BACK, 2, 100)     # 5/4
    ledger.place("C vs D", Side.SIDE_B, Mode.LAY, 4, 50)       # 3/2
    ledger.place("A vs B", Side.SIDE_B, Mode.LAY, 7, 20)       # 2/1
    ledger.place("C vs D", Side.SIDE_A, Mode.BACK, 0, "10.50") # 10/10
    ledger.place("A vs B", Side.SIDE_A, Mode.BACK, 9, 30)      # 7/2
    return ledger


@pytest.fixture
def gateway():
    return InMemoryRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def metrics():
    return MetricsRegistry()


@pytest.fixture
def money():
    """Shorthand for building Decimal amounts in assertions."""
    return lambda value: Decimal(str(value))
