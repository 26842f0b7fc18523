"""
Shared fixtures for Split Ledger tests.
"""

from datetime import datetime, timedelta

import pytest
from loguru import logger

from splitledger.models import MemberProfile

from factories import make_expense


@pytest.fixture
def members():
    """Alice, Bob and Carol as the member directory would supply them."""
    return [
        MemberProfile(member_id="alice", name="Alice", email="alice@example.com"),
        MemberProfile(member_id="bob", name="Bob", email="bob@example.com"),
        MemberProfile(member_id="carol", name="Carol", email="carol@example.com"),
    ]


@pytest.fixture
def dinner_expense():
    """Alice pays 90.00, split equally three ways."""
    return make_expense(
        "exp-dinner", "90.00",
        {"alice": "30.00", "bob": "30.00", "carol": "30.00"},
        payer="alice",
    )


@pytest.fixture
def base_time():
    return datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def later(base_time):
    def _later(minutes):
        return base_time + timedelta(minutes=minutes)
    return _later


@pytest.fixture
def log_messages():
    """Capture loguru output emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)
