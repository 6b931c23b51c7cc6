"""
Concurrency tests.

Tests cover:
1. Competing redemption requests against one balance
2. Competing deliveries against the last unit of stock
3. Product deletion racing a redemption request
4. Optimistic conflict detection at commit
5. Retrying a use case after a conflict
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from rewards.core.database import build_engine, build_session_factory
from rewards.core.errors import (
    ConflictError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
)
from rewards.core.unit_of_work import UnitOfWork
from rewards.models import RedemptionStatus
from rewards.repositories import ProductStore
from rewards.services import points_service, product_catalog_service, redemption_service


class TestCompetingRequests:
    """Five simultaneous requests against a balance that covers one."""

    def test_only_one_request_reserves(self, make_uow, make_user, make_product, balance_of):
        user_id = make_user(points=250)
        product_id = make_product(points_cost=150)
        start = threading.Barrier(5)

        def attempt(_):
            start.wait()
            with make_uow() as uow:
                try:
                    uow.run(
                        lambda unit: redemption_service.request_redemption(
                            unit, user_id=user_id, product_id=product_id
                        )
                    )
                except InsufficientFundsError as exc:
                    return exc
            return None

        with ThreadPoolExecutor(max_workers=5) as pool:
            outcomes = list(pool.map(attempt, range(5)))

        failures = [outcome for outcome in outcomes if outcome is not None]
        assert len(failures) == 4
        assert all(isinstance(failure, InsufficientFundsError) for failure in failures)
        assert balance_of(user_id) == (250, 150, 100)

        with make_uow() as uow:
            assert len(redemption_service.list_user_redemptions(uow, user_id=user_id)) == 1


class TestCompetingDeliveries:
    """Four approved requests delivered at once against a single unit of stock."""

    def test_only_one_delivery_takes_the_last_unit(
        self, make_uow, registry, admin_id, make_user, make_product
    ):
        product_id = make_product(points_cost=100, stock=1)
        user_ids = [make_user(points=100) for _ in range(4)]
        request_ids = []
        for user_id in user_ids:
            with make_uow() as uow:
                request = redemption_service.request_redemption(uow, user_id=user_id, product_id=product_id)
            with make_uow() as uow:
                redemption_service.approve_redemption(
                    uow, registry, admin_id=admin_id, request_id=request.request_id
                )
            request_ids.append(request.request_id)
        start = threading.Barrier(len(request_ids))

        def deliver(request_id):
            start.wait()
            with make_uow() as uow:
                try:
                    uow.run(
                        lambda unit: redemption_service.deliver_redemption(
                            unit, registry, admin_id=admin_id, request_id=request_id
                        )
                    )
                except InsufficientStockError as exc:
                    return exc
            return None

        with ThreadPoolExecutor(max_workers=len(request_ids)) as pool:
            outcomes = list(pool.map(deliver, request_ids))

        failures = [outcome for outcome in outcomes if outcome is not None]
        assert len(failures) == 3
        assert all(isinstance(failure, InsufficientStockError) for failure in failures)

        with make_uow() as uow:
            assert product_catalog_service.get_product(uow, product_id=product_id).stock == 0
            statuses = [redemption_service.get_redemption(uow, request_id=rid).status for rid in request_ids]
            redeem_entries = sum(points_service.get_ledger_history(uow, user_id=uid)[1] for uid in user_ids)

        assert statuses.count(RedemptionStatus.DELIVERED) == 1
        assert statuses.count(RedemptionStatus.APPROVED) == 3
        assert redeem_entries == 1


class TestDeleteAgainstRequest:
    """A product deletion and a redemption request racing on the same product."""

    def test_request_locks_the_product_row(self, make_uow, make_user, make_product, monkeypatch):
        user_id = make_user(points=500)
        product_id = make_product(points_cost=100)
        locked = []
        original = ProductStore.get_for_update

        def recording_get_for_update(store, wanted_id):
            locked.append(wanted_id)
            return original(store, wanted_id)

        monkeypatch.setattr(ProductStore, "get_for_update", recording_get_for_update)
        with make_uow() as uow:
            redemption_service.request_redemption(uow, user_id=user_id, product_id=product_id)

        assert locked == [product_id]

    def test_no_pending_request_outlives_its_product(self, make_uow, registry, admin_id, make_user, make_product):
        user_id = make_user(points=500)
        product_id = make_product(points_cost=100)
        start = threading.Barrier(2)

        def delete():
            start.wait()
            with make_uow() as uow:
                try:
                    product_catalog_service.delete_product(
                        uow, registry, admin_id=admin_id, product_id=product_id
                    )
                except InvalidStateError as exc:
                    return exc
            return None

        def request():
            start.wait()
            with make_uow() as uow:
                try:
                    uow.run(
                        lambda unit: redemption_service.request_redemption(
                            unit, user_id=user_id, product_id=product_id
                        )
                    )
                except NotFoundError as exc:
                    return exc
            return None

        with ThreadPoolExecutor(max_workers=2) as pool:
            deleted = pool.submit(delete)
            requested = pool.submit(request)
            delete_error, request_error = deleted.result(), requested.result()

        with make_uow() as uow:
            pending = redemption_service.list_user_redemptions(uow, user_id=user_id)
            product_exists = uow.products.get(product_id) is not None

        if delete_error is None:
            assert isinstance(request_error, NotFoundError)
            assert not product_exists
            assert pending == []
        else:
            assert request_error is None
            assert product_exists
            assert [r.status for r in pending] == [RedemptionStatus.PENDING]


class TestOptimisticConflicts:
    """Interleaved units of work on an engine that does not serialize transactions."""

    @pytest.fixture
    def loose_uow(self, engine, database_url):
        loose_engine = build_engine(database_url, serialize_sqlite=False)
        factory = build_session_factory(loose_engine)
        yield lambda: UnitOfWork(factory)
        loose_engine.dispose()

    def test_stale_write_raises_retryable_conflict(self, loose_uow, make_user, balance_of):
        user_id = make_user(points=150)

        with loose_uow() as first, loose_uow() as second:
            mine = first.users.get_for_update(user_id)
            theirs = second.users.get_for_update(user_id)

            mine.reserve_points(100)
            first.commit()

            theirs.reserve_points(100)
            with pytest.raises(ConflictError) as caught:
                second.commit()

        assert caught.value.retryable
        assert balance_of(user_id) == (150, 100, 50)

    def test_run_retries_then_reports_business_failure(self, loose_uow, make_user, balance_of):
        user_id = make_user(points=150)
        attempts = []

        def reserve(uow):
            attempts.append(1)
            user = uow.users.get_for_update(user_id)
            if len(attempts) == 1:
                with loose_uow() as other:
                    other.users.get_for_update(user_id).reserve_points(100)
                    other.commit()
            user.reserve_points(100)
            uow.commit()

        with loose_uow() as uow:
            with pytest.raises(InsufficientFundsError):
                uow.run(reserve, attempts=3, backoff_ms=0)

        assert len(attempts) == 2
        assert balance_of(user_id) == (150, 100, 50)

    def test_run_gives_up_after_attempts(self, make_uow):
        calls = []

        def always_conflicts(uow):
            calls.append(1)
            raise ConflictError("The record was modified by another operation.", retryable=True)

        with make_uow() as uow:
            with pytest.raises(ConflictError):
                uow.run(always_conflicts, attempts=3, backoff_ms=0)

        assert len(calls) == 3

    def test_duplicate_email_is_not_retried(self, make_uow):
        calls = []

        def duplicate(uow):
            calls.append(1)
            raise ConflictError("A user with this email already exists.")

        with make_uow() as uow:
            with pytest.raises(ConflictError):
                uow.run(duplicate, attempts=3, backoff_ms=0)

        assert len(calls) == 1
