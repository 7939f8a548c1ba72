"""
SQLAlchemy declarative base. Alembic and the test fixtures build the schema from its metadata.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
