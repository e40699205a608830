"""Declarative base shared by the knowledge store ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Every knowledge table model derives from this; create_all uses its metadata."""

    pass
