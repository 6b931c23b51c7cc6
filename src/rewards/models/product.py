"""Catalog product model with optional tracked stock."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Uuid
from sqlalchemy.orm import validates

from ..core.database import Base
from ..core.errors import InsufficientStockError, ValidationError
from ..utils.datetime import advance, utcnow
from ..utils.validation import checked_add, normalize_optional, require_positive, require_text


def _validate_stock(stock: int | None) -> int | None:
    if stock is not None and stock < 0:
        raise ValidationError("Stock cannot be negative.")
    return stock


def _validate_quantity(quantity: int) -> int:
    return require_positive(quantity, "Quantity must be positive.")


class Product(Base):
    """Reward users can redeem points for.

    ``stock`` of ``None`` means untracked (unlimited) inventory.
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("points_cost > 0", name="products_points_cost_positive"),
        CheckConstraint("stock IS NULL OR stock >= 0", name="products_stock_non_negative"),
    )

    product_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(String(1000))
    image_url = Column(String(500))
    points_cost = Column(Integer, nullable=False)
    stock = Column(Integer)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("product_id", uuid.uuid4())
        kwargs.setdefault("is_active", True)
        kwargs.setdefault("created_at", utcnow())
        kwargs.setdefault("updated_at", kwargs["created_at"])
        if "points_cost" not in kwargs:
            raise ValidationError("Points cost must be a positive number.")
        super().__init__(**kwargs)

    @validates("name")
    def _validate_name(self, key, value):
        return require_text(value, "Product name is required.")

    @validates("description", "image_url")
    def _validate_optional_text(self, key, value):
        return normalize_optional(value)

    @validates("points_cost")
    def _validate_points_cost(self, key, value):
        return require_positive(value, "Points cost must be a positive number.")

    @validates("stock")
    def _validate_stock(self, key, value):
        return _validate_stock(value)

    @property
    def is_stock_tracked(self) -> bool:
        return self.stock is not None

    def touch(self) -> None:
        self.updated_at = advance(self.updated_at)

    def update_details(
        self,
        *,
        name: str,
        points_cost: int,
        stock: int | None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> None:
        # Validate everything up front so a bad field leaves the product untouched.
        name = require_text(name, "Product name is required.")
        require_positive(points_cost, "Points cost must be a positive number.")
        _validate_stock(stock)

        self.name = name
        self.points_cost = points_cost
        self.stock = stock
        self.description = description
        self.image_url = image_url
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    def is_available(self, quantity: int = 1) -> bool:
        _validate_quantity(quantity)
        return self.stock is None or self.stock >= quantity

    def decrement_stock(self, quantity: int = 1) -> None:
        _validate_quantity(quantity)
        if self.stock is None:
            return
        if self.stock < quantity:
            raise InsufficientStockError("Insufficient stock.")
        self.stock -= quantity
        self.touch()

    def increment_stock(self, quantity: int = 1) -> None:
        _validate_quantity(quantity)
        if self.stock is None:
            return
        self.stock = checked_add(self.stock, quantity, "Restocking would overflow the stock count.")
        self.touch()

    def __repr__(self) -> str:
        stock = "unlimited" if self.stock is None else self.stock
        return f"<Product {self.product_id} {self.name!r} cost={self.points_cost} stock={stock}>"
