"""Database session and unit-of-work helpers."""

from .session import Base, SessionLocal, create_tables, drop_tables, engine, get_db
from .unit_of_work import UnitOfWork, run_in_unit_of_work

__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "create_tables",
    "drop_tables",
    "UnitOfWork",
    "run_in_unit_of_work",
]
