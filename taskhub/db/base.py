"""
Declarative base for all ORM models.

Alembic reads Base.metadata to detect schema changes.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
