"""
Test configuration and fixtures.

Provides:
- A controllable clock
- A fresh application context per test, seeded with the sample amenities
- Actors for every role
- A TestClient bound to the same context
"""

import pytest
from fastapi.testclient import TestClient

from societydesk.context import build_context
from societydesk.main import create_app
from societydesk.models.enums import Role
from societydesk.models.schemas import Actor
from tests.helpers import FakeClock


# =============================================================================
# Context
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ctx(clock):
    return build_context(clock=clock, seed=True)


@pytest.fixture
def visitor_service(ctx):
    return ctx.visitor_service


@pytest.fixture
def amenity_service(ctx):
    return ctx.amenity_service


@pytest.fixture
def booking_service(ctx):
    return ctx.booking_service


@pytest.fixture
def alert_service(ctx):
    return ctx.alert_service


@pytest.fixture
def client(ctx):
    return TestClient(create_app(ctx))


# =============================================================================
# Actors
# =============================================================================

@pytest.fixture
def admin() -> Actor:
    return Actor(user_id="1", role=Role.ADMIN, name="Sarah Wilson", apartment_no="ADMIN")


@pytest.fixture
def resident() -> Actor:
    return Actor(user_id="2", role=Role.RESIDENT, name="Michael Chen", apartment_no="A-101")


@pytest.fixture
def other_resident() -> Actor:
    return Actor(user_id="7", role=Role.RESIDENT, name="Priya Sharma", apartment_no="B-204")


@pytest.fixture
def security() -> Actor:
    return Actor(user_id="3", role=Role.SECURITY, name="David Rodriguez")


@pytest.fixture
def facility_manager() -> Actor:
    return Actor(user_id="4", role=Role.FACILITY_MANAGER, name="Emma Thompson")


@pytest.fixture
def guest() -> Actor:
    return Actor(user_id="5", role=Role.VISITOR, name="Alice Johnson")

