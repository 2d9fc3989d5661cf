"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites.

Fixtures:
    - db_session: SQLAlchemy session on an in-memory SQLite database
    - make_order: factory persisting an Order with its associations
    - status_cache: in-memory stand-in for the Redis status cache
    - test_client: FastAPI TestClient for API testing

Usage:
    def test_something(db_session, make_order):
        order = make_order(order_number="ORD-1")
        ...
"""

import logging
from datetime import datetime
from typing import Any, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from eventreg.api.main import create_app
from eventreg.domain.orders import OrderStatus
from eventreg.infrastructure.persistence.database import Base
from eventreg.infrastructure.persistence.models import (
    AddOn,
    Order,
    Participant,
    Refund,
    Tier,
    User,
)

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """
    Session bound to a fresh in-memory SQLite database.

    Scope: function (every test gets an empty schema)
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_order(db_session):
    """
    Factory persisting an order.

    Keyword arguments override Order columns. Extra keywords:
        buyer: (name, email) tuple or None (default: generated buyer)
        tier_name: tier name or None
        participants: number of participants (default 1)
        add_ons: number of add-ons (default 0)
        refunds: list of (amount, RefundStatus)

    Examples:
        >>> order = make_order(order_number="ORD-1", total_amount=10000)
    """
    counter = {"n": 0}

    def _make(
        buyer: Optional[tuple] = ("Alice Tan", "alice@example.com"),
        tier_name: Optional[str] = "Early Bird",
        participants: int = 1,
        add_ons: int = 0,
        refunds: Optional[list] = None,
        **columns: Any,
    ) -> Order:
        counter["n"] += 1
        n = counter["n"]

        user = None
        if buyer is not None:
            name, email = buyer
            user = db_session.query(User).filter_by(email=email).one_or_none()
            if user is None:
                user = User(name=name, email=email, mobile_no="+6591234567")

        defaults: Dict[str, Any] = {
            "order_number": f"ORD-{n:04d}",
            "types": ["registration"],
            "status": OrderStatus.PAID,
            "total_amount": 10000,
            "created_at": datetime(2025, 1, 1, 9, 0),
        }
        defaults.update(columns)

        order = Order(
            user=user,
            tier=Tier(name=tier_name) if tier_name else None,
            **defaults,
        )
        order.participants = [Participant(name=f"P{i}") for i in range(participants)]
        order.add_ons = [AddOn(name=f"Tee {i}", amount=2500) for i in range(add_ons)]
        order.refunds = [
            Refund(amount=amount, status=refund_status)
            for amount, refund_status in (refunds or [])
        ]
        db_session.add(order)
        db_session.commit()
        return order

    return _make


# ============================================================================
# STATUS CACHE FIXTURES
# ============================================================================


class InMemoryStatusCache:
    """Dict-backed status cache recording every write."""

    def __init__(self) -> None:
        self.data: Dict[str, Dict[str, Any]] = {}
        self.writes: list = []

    def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        self.writes.append((key, value, ttl_seconds))
        self.data[key] = value

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        return self.data.get(key)


@pytest.fixture
def status_cache() -> InMemoryStatusCache:
    return InMemoryStatusCache()


# ============================================================================
# FASTAPI FIXTURES
# ============================================================================


@pytest.fixture(scope="session")
def test_client() -> Generator[TestClient, None, None]:
    """
    Provide FastAPI TestClient for API testing.

    Scope: session (shared across all tests)
    """
    app = create_app()
    with TestClient(app) as client:
        logger.info("FastAPI TestClient created")
        yield client
    logger.info("FastAPI TestClient closed")


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Registers custom markers for test categorization.

    Markers:
        - e2e: End-to-end tests (require Docker services)
        - integration: Integration tests (may require external services)
        - unit: Unit tests (no external dependencies)
        - slow: Slow tests (>1s execution time)
    """
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (require Docker services)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (may require external services)"
    )
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests (>1s execution time)")
