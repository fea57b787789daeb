"""User factory."""

from polyfactory import Use

from src.taskflow.core.security import hash_password
from src.taskflow.models import User
from tests.factories.base import BaseFactory, generate_uuid7, utc_now

DEFAULT_TEST_PASSWORD = "correct-horse-battery-staple-42"


class UserFactory(BaseFactory):
    __model__ = User

    id = Use(generate_uuid7)
    email = Use(lambda: f"user_{generate_uuid7().hex[-8:]}@example.com")
    hashed_password = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    full_name = "Test User"
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)
