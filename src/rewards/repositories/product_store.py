"""Product persistence."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Product


class ProductStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, product_id: UUID) -> Optional[Product]:
        return self.session.get(Product, product_id)

    def get_for_update(self, product_id: UUID) -> Optional[Product]:
        stmt = (
            select(Product)
            .where(Product.product_id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list(self, *, only_active: bool = False) -> Sequence[Product]:
        stmt = select(Product).order_by(Product.name.asc(), Product.product_id.asc())
        if only_active:
            stmt = stmt.where(Product.is_active.is_(True))
        return self.session.execute(stmt).scalars().all()

    def add(self, product: Product) -> None:
        self.session.add(product)

    def update(self, product: Product) -> None:
        if product not in self.session:
            self.session.merge(product)

    def delete(self, product: Product) -> None:
        self.session.delete(product)
