"""Refresh token factory."""

from datetime import timedelta

from polyfactory import Use

from src.taskflow.core.security import hash_token
from src.taskflow.models import RefreshToken
from tests.factories.base import BaseFactory, generate_uuid7, utc_now


class RefreshTokenFactory(BaseFactory):
    __model__ = RefreshToken

    id = Use(generate_uuid7)
    user_id = None  # must be set explicitly
    token_hash = Use(lambda: hash_token(generate_uuid7().hex))
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    created_at = Use(utc_now)
    revoked = False

    @classmethod
    def expired(cls, **kwargs):
        return cls.build(expires_at=utc_now() - timedelta(days=1), **kwargs)
