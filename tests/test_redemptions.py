"""
Unit tests for the redemption workflow.

Tests cover:
1. Request, approve and deliver flow
2. Reject and cancel releasing reserved points
3. Invalid transitions
4. Stock boundaries at delivery
5. Request guards and admin authorization
"""

from uuid import uuid4

import pytest

from rewards.core.errors import (
    AuthorizationError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
)
from rewards.models import LedgerEntryType, RedemptionStatus
from rewards.services import (
    points_service,
    product_catalog_service,
    redemption_service,
    user_service,
)


@pytest.fixture
def request_for(make_uow):
    def _request(user_id, product_id):
        with make_uow() as uow:
            return redemption_service.request_redemption(uow, user_id=user_id, product_id=product_id)

    return _request


@pytest.fixture
def transition(make_uow, registry, admin_id):
    def _transition(action, request_id):
        handler = getattr(redemption_service, f"{action}_redemption")
        with make_uow() as uow:
            return handler(uow, registry, admin_id=admin_id, request_id=request_id)

    return _transition


def _stock_of(make_uow, product_id):
    with make_uow() as uow:
        return product_catalog_service.get_product(uow, product_id=product_id).stock


def _status_of(make_uow, request_id):
    with make_uow() as uow:
        return redemption_service.get_redemption(uow, request_id=request_id).status


class TestRedemptionFlow:
    """Tests for the happy path."""

    def test_request_reserves_cost(self, make_user, make_product, request_for, balance_of):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=500)

        request = request_for(user_id, product_id)

        assert request.status == RedemptionStatus.PENDING
        assert request.points_reserved == 500
        assert balance_of(user_id) == (1000, 500, 500)

    def test_approve_then_deliver_captures_points(
        self, make_uow, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=500, stock=2)
        request = request_for(user_id, product_id)

        approved = transition("approve", request.request_id)
        assert approved.status == RedemptionStatus.APPROVED
        assert approved.approved_at is not None

        delivered = transition("deliver", request.request_id)
        assert delivered.status == RedemptionStatus.DELIVERED
        assert delivered.delivered_at >= delivered.approved_at

        assert balance_of(user_id) == (500, 0, 500)
        assert _stock_of(make_uow, product_id) == 1

        with make_uow() as uow:
            entries, total = points_service.get_ledger_history(uow, user_id=user_id)
        assert total == 1
        assert entries[0].entry_type == LedgerEntryType.REDEEM
        assert entries[0].points == 500
        assert entries[0].redemption_request_id == request.request_id
        assert entries[0].event_id is None

    def test_delivery_uses_cost_reserved_at_request(
        self, make_uow, registry, admin_id, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=300)
        request = request_for(user_id, product_id)
        with make_uow() as uow:
            product_catalog_service.update_product(
                uow, registry, admin_id=admin_id, product_id=product_id, points_cost=900
            )

        transition("approve", request.request_id)
        transition("deliver", request.request_id)

        assert balance_of(user_id) == (700, 0, 700)

    def test_user_may_redeem_again_after_delivery(
        self, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=200)
        first = request_for(user_id, product_id)
        transition("approve", first.request_id)
        transition("deliver", first.request_id)

        second = request_for(user_id, product_id)

        assert second.request_id != first.request_id
        assert balance_of(user_id) == (800, 200, 600)


class TestReleasingTransitions:
    """Tests for reject and cancel."""

    def test_reject_releases_points(self, make_uow, make_user, make_product, request_for, transition, balance_of):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=400)
        request = request_for(user_id, product_id)

        rejected = transition("reject", request.request_id)

        assert rejected.status == RedemptionStatus.REJECTED
        assert balance_of(user_id) == (1000, 0, 1000)

        with pytest.raises(InvalidStateError):
            transition("reject", request.request_id)
        assert _status_of(make_uow, request.request_id) == RedemptionStatus.REJECTED
        assert balance_of(user_id) == (1000, 0, 1000)

    def test_cancel_releases_points(self, make_user, make_product, request_for, transition, balance_of):
        user_id = make_user(points=600)
        product_id = make_product(points_cost=600)
        request = request_for(user_id, product_id)
        assert balance_of(user_id).available == 0

        canceled = transition("cancel", request.request_id)

        assert canceled.status == RedemptionStatus.CANCELED
        assert balance_of(user_id) == (600, 0, 600)

    def test_cancel_after_reject_fails(self, make_user, make_product, request_for, transition, balance_of):
        user_id = make_user(points=500)
        request = request_for(user_id, make_product(points_cost=200))
        transition("reject", request.request_id)

        with pytest.raises(InvalidStateError):
            transition("cancel", request.request_id)
        assert balance_of(user_id) == (500, 0, 500)


class TestInvalidTransitions:
    """Tests for transitions that are never allowed."""

    def test_deliver_pending_fails_without_side_effects(
        self, make_uow, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=500, stock=3)
        request = request_for(user_id, product_id)

        with pytest.raises(InvalidStateError):
            transition("deliver", request.request_id)

        assert _status_of(make_uow, request.request_id) == RedemptionStatus.PENDING
        assert balance_of(user_id) == (1000, 500, 500)
        assert _stock_of(make_uow, product_id) == 3

    @pytest.mark.parametrize("action", ["approve", "reject", "cancel"])
    def test_approved_request_only_delivers(
        self, action, make_uow, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        request = request_for(user_id, make_product(points_cost=300))
        transition("approve", request.request_id)

        with pytest.raises(InvalidStateError):
            transition(action, request.request_id)

        assert _status_of(make_uow, request.request_id) == RedemptionStatus.APPROVED
        assert balance_of(user_id) == (1000, 300, 700)

    @pytest.mark.parametrize("action", ["approve", "deliver", "reject", "cancel"])
    def test_terminal_states_are_final(self, action, make_user, make_product, request_for, transition):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=100)
        request = request_for(user_id, product_id)
        transition("approve", request.request_id)
        transition("deliver", request.request_id)

        with pytest.raises(InvalidStateError):
            transition(action, request.request_id)

    def test_unknown_request(self, transition):
        with pytest.raises(NotFoundError):
            transition("approve", uuid4())


class TestDeliveryStock:
    """Tests for stock boundaries at delivery."""

    def test_zero_stock_blocks_delivery(
        self, make_uow, registry, admin_id, make_user, make_product, request_for, transition, balance_of
    ):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=100, stock=1)
        request = request_for(user_id, product_id)
        transition("approve", request.request_id)
        with make_uow() as uow:
            product_catalog_service.update_product(
                uow, registry, admin_id=admin_id, product_id=product_id, stock=0
            )

        with pytest.raises(InsufficientStockError):
            transition("deliver", request.request_id)

        assert _status_of(make_uow, request.request_id) == RedemptionStatus.APPROVED
        assert balance_of(user_id) == (1000, 100, 900)
        assert _stock_of(make_uow, product_id) == 0

    def test_untracked_stock_never_blocks(self, make_uow, make_user, make_product, request_for, transition):
        product_id = make_product(points_cost=50, stock=None)
        for _ in range(3):
            user_id = make_user(points=50)
            request = request_for(user_id, product_id)
            transition("approve", request.request_id)
            assert transition("deliver", request.request_id).status == RedemptionStatus.DELIVERED

        assert _stock_of(make_uow, product_id) is None


class TestRequestGuards:
    """Tests for the checks made before reserving points."""

    def test_insufficient_funds(self, make_uow, make_user, make_product, request_for, balance_of):
        user_id = make_user(points=100)
        product_id = make_product(points_cost=101)

        with pytest.raises(InsufficientFundsError):
            request_for(user_id, product_id)

        assert balance_of(user_id) == (100, 0, 100)
        with make_uow() as uow:
            assert redemption_service.list_user_redemptions(uow, user_id=user_id) == []

    def test_duplicate_pending_request_rejected(self, make_user, make_product, request_for, balance_of):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=100)
        request_for(user_id, product_id)

        with pytest.raises(InvalidStateError):
            request_for(user_id, product_id)
        assert balance_of(user_id) == (1000, 100, 900)

    def test_inactive_product_rejected(self, make_user, make_product, request_for):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=100, is_active=False)

        with pytest.raises(InvalidStateError):
            request_for(user_id, product_id)

    def test_inactive_user_rejected(self, make_uow, make_user, make_product, request_for):
        user_id = make_user(points=1000)
        product_id = make_product(points_cost=100)
        with make_uow() as uow:
            user_service.deactivate_user(uow, user_id=user_id)

        with pytest.raises(InvalidStateError):
            request_for(user_id, product_id)

    def test_missing_user_or_product(self, make_user, make_product, request_for):
        with pytest.raises(NotFoundError):
            request_for(uuid4(), make_product())
        with pytest.raises(NotFoundError):
            request_for(make_user(points=10), uuid4())

    def test_non_admin_cannot_approve(self, make_uow, registry, make_user, make_product, request_for):
        user_id = make_user(points=1000)
        request = request_for(user_id, make_product(points_cost=100))

        with make_uow() as uow:
            with pytest.raises(AuthorizationError):
                redemption_service.approve_redemption(
                    uow, registry, admin_id=user_id, request_id=request.request_id
                )
        assert _status_of(make_uow, request.request_id) == RedemptionStatus.PENDING

    def test_inactive_admin_cannot_approve(self, make_uow, registry, admin_id, make_user, make_product, request_for):
        user_id = make_user(points=1000)
        request = request_for(user_id, make_product(points_cost=100))
        with make_uow() as uow:
            user_service.deactivate_user(uow, user_id=admin_id)

        with make_uow() as uow:
            with pytest.raises(AuthorizationError, match="inactive"):
                redemption_service.approve_redemption(
                    uow, registry, admin_id=admin_id, request_id=request.request_id
                )
