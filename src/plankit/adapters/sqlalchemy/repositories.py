"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from plankit.domain.model import MirrorPrice, MirrorProduct

from .mappings import price_table, product_table

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, product_id: str) -> MirrorProduct | None:
        return self.session.get(MirrorProduct, product_id)

    def add(self, product: MirrorProduct) -> None:
        self.session.add(product)

    def get_all(self) -> list[MirrorProduct]:
        stmt = select(MirrorProduct).order_by(product_table.c.id)
        return list(self.session.execute(stmt).scalars())

    def delete_all(self) -> int:
        result = self.session.execute(delete(product_table))
        return result.rowcount or 0


class SqlAlchemyPriceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, price_id: str) -> MirrorPrice | None:
        return self.session.get(MirrorPrice, price_id)

    def add(self, price: MirrorPrice) -> None:
        self.session.add(price)

    def get_all(self) -> list[MirrorPrice]:
        stmt = select(MirrorPrice).order_by(price_table.c.id)
        return list(self.session.execute(stmt).scalars())

    def delete_all(self) -> int:
        result = self.session.execute(delete(price_table))
        return result.rowcount or 0
