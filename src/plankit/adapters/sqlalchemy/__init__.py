"""SQLAlchemy adapter package for the catalog mirror."""

from __future__ import annotations

from .adapter import SqlAlchemyDatabaseAdapter
from .mappings import create_all_tables, mapper_registry, price_table, product_table, start_mappers
from .repositories import SqlAlchemyPriceRepository, SqlAlchemyProductRepository
from .unit_of_work import (
    MirrorRepositories,
    SqlAlchemyMirrorUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    prepare_engine,
    shutdown,
    startup,
)

__all__ = [
    "MirrorRepositories",
    "SqlAlchemyDatabaseAdapter",
    "SqlAlchemyMirrorUnitOfWork",
    "SqlAlchemyPriceRepository",
    "SqlAlchemyProductRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "prepare_engine",
    "price_table",
    "product_table",
    "shutdown",
    "start_mappers",
    "startup",
]
