"""Error taxonomy shared by models, services and the HTTP layer."""

from __future__ import annotations


class RewardsRuleViolation(Exception):
    """Raised when a rewards business rule is violated."""

    kind = "rule_violation"
    default_status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code if status_code is not None else self.default_status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.detail!r})"


class ValidationError(RewardsRuleViolation):
    """Malformed input: non-positive amount, blank name, negative stock and so on."""

    kind = "validation"
    default_status_code = 400


class NotFoundError(RewardsRuleViolation):
    kind = "not_found"
    default_status_code = 404


class InvalidStateError(RewardsRuleViolation):
    """The entity exists but its current state forbids the operation."""

    kind = "invalid_state"
    default_status_code = 409


class InsufficientFundsError(RewardsRuleViolation):
    kind = "insufficient_funds"
    default_status_code = 422


class InsufficientStockError(RewardsRuleViolation):
    kind = "insufficient_stock"
    default_status_code = 422


class AuthorizationError(RewardsRuleViolation):
    kind = "authorization"
    default_status_code = 403


class ConflictError(RewardsRuleViolation):
    """Concurrent modification or uniqueness violation detected at commit.

    ``retryable`` is true when re-running the whole use case may succeed.
    """

    kind = "conflict"
    default_status_code = 409

    def __init__(self, detail: str, *, retryable: bool = False, status_code: int | None = None) -> None:
        super().__init__(detail, status_code=status_code)
        self.retryable = retryable


class PointsOverflowError(RewardsRuleViolation):
    kind = "overflow"
    default_status_code = 422
