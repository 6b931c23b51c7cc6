"""Shared fixtures: a file-backed SQLite database per test plus seeded actors."""

from datetime import datetime

import pytest

from rewards.core.admin_registry import AdminRegistry
from rewards.core.database import Base, build_engine, build_session_factory
from rewards.core.unit_of_work import UnitOfWork
from rewards.services import event_service, points_service, product_catalog_service, user_service

ADMIN_EMAIL = "admin@example.com"


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'rewards.db'}"


@pytest.fixture
def engine(database_url):
    engine = build_engine(database_url)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def make_uow(session_factory):
    def _make():
        return UnitOfWork(session_factory)

    return _make


@pytest.fixture
def registry():
    return AdminRegistry([ADMIN_EMAIL])


@pytest.fixture
def make_user(make_uow):
    """Factory creating an active user, optionally credited with points."""

    counter = {"n": 0}

    def _make(points=0, *, name=None, email=None, employee_id=None):
        counter["n"] += 1
        n = counter["n"]
        with make_uow() as uow:
            user = user_service.create_user(
                uow,
                name=name or f"Employee {n}",
                email=email or f"employee{n}@example.com",
                employee_id=employee_id or f"EMP-{n:04d}",
            )
        if points:
            with make_uow() as uow:
                points_service.credit_points(uow, user_id=user.user_id, points=points)
        return user.user_id

    return _make


@pytest.fixture
def admin_id(make_user):
    return make_user(name="Site Admin", email=ADMIN_EMAIL, employee_id="ADM-0001")


@pytest.fixture
def make_product(make_uow, registry, admin_id):
    def _make(points_cost=100, stock=None, *, name="Coffee mug", is_active=True):
        with make_uow() as uow:
            product = product_catalog_service.create_product(
                uow,
                registry,
                admin_id=admin_id,
                name=name,
                points_cost=points_cost,
                stock=stock,
                is_active=is_active,
            )
        return product.product_id

    return _make


@pytest.fixture
def make_event(make_uow, registry, admin_id):
    def _make(name="Quarterly hackathon", occurs_at=datetime(2025, 3, 14, 9, 0), is_active=True):
        with make_uow() as uow:
            event = event_service.create_event(
                uow, registry, admin_id=admin_id, name=name, occurs_at=occurs_at, is_active=is_active
            )
        return event.event_id

    return _make


@pytest.fixture
def balance_of(make_uow):
    def _balance(user_id):
        with make_uow() as uow:
            return points_service.get_balance(uow, user_id=user_id)

    return _balance
