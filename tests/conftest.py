"""Shared pytest fixtures for the island booking tests."""
import sys
sys.dont_write_bytecode = True

import itertools  # noqa: E402

import pytest  # noqa: E402

from islandbook.domain.booking import BookingService  # noqa: E402
from islandbook.domain.policy import BookingPolicy  # noqa: E402

from .helpers import TODAY, InMemoryLedger  # noqa: E402


@pytest.fixture
def policy():
    return BookingPolicy(min_days_ahead=1, max_consecutive_days=3, max_days_ahead=30)


@pytest.fixture
def ledger():
    ledger = InMemoryLedger()
    with ledger.installed():
        yield ledger


@pytest.fixture
def service(policy, ledger):
    ids = itertools.count(1)
    return BookingService(
        policy,
        today=lambda: TODAY,
        id_factory=lambda: f"res-{next(ids)}",
        txn_factory=ledger.txn,
    )
