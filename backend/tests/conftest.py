"""
Shared test fixtures for the Stumbnail backend test suite.
"""

import pytest
import structlog

from app.config import get_settings
from app.models.billing import AccountBalance


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear the lru_cache so settings pick up per-test env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _configure_structlog_for_tests():
    """Configure structlog for tests using a simple, deterministic setup."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def creator_account() -> AccountBalance:
    """Creator subscriber with a top-up and leftover trial credits."""
    return AccountBalance(
        subscription_credits=1100,
        topped_up_balance=250,
        trial_credits=20,
        plan_id="creator",
    )


@pytest.fixture
def free_account() -> AccountBalance:
    """Free user who only has trial credits."""
    return AccountBalance(
        subscription_credits=0,
        topped_up_balance=0,
        trial_credits=30,
        plan_id="free",
    )
