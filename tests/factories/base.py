"""Base factory configuration for polyfactory."""

from uuid import uuid7

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.taskflow.models.base import utc_now

__all__ = ["BaseFactory", "generate_uuid7", "utc_now"]


def generate_uuid7():
    return uuid7()


class BaseFactory(SQLAlchemyFactory):
    """Base factory for all models.

    Foreign keys are never generated: tests pass owner ids explicitly so the
    ownership chain is always deliberate.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
