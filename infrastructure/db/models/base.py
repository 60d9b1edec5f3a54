"""
Shared declarative base for the rental back-office tables.
Every model imports Base from here so they share one registry and one MetaData.
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
