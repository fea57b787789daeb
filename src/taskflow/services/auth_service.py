"""Authentication service - registration, login, token refresh and logout."""

import hmac
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.cache import (
    is_token_revoked,
    remember_revoked_token,
    remember_revoked_tokens,
)
from src.taskflow.core.config import get_settings
from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.logging import get_logger
from src.taskflow.core.security import (
    DUMMY_PASSWORD_HASH,
    TokenType,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.taskflow.models import RefreshToken, User
from src.taskflow.repositories import RefreshTokenRepository, UserRepository
from src.taskflow.schemas.auth import RegisterRequest, TokenPair

logger = get_logger(__name__)


def _revocation_ttl() -> int:
    return get_settings().refresh_token_expire_days * 86400


class AuthService:
    """Issues and rotates tokens.

    The database is authoritative for refresh-token state. Redis only caches
    revoked hashes so replays are rejected without a database round trip.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.session = session

    async def register(self, data: RegisterRequest) -> User | None:
        """Create an account. Returns None if the email is already taken."""
        if await self.user_repo.get_by_email(data.email) is not None:
            return None

        user = User(
            email=data.email.lower(),
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
        )
        try:
            self.user_repo.add(user)
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            await self.session.rollback()
            return None
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("auth.register") from e

        logger.info("User registered", user_id=str(user.id))
        return user

    async def _issue_tokens(self, user_id: UUID) -> TokenPair:
        """Create a token pair and stage the refresh token (caller commits)."""
        access_token = create_access_token(user_id)
        refresh_token, expires_at = create_refresh_token(user_id)
        self.token_repo.add(
            RefreshToken(
                user_id=user_id,
                token_hash=hash_token(refresh_token),
                expires_at=expires_at,
            )
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def authenticate(self, email: str, password: str) -> TokenPair | None:
        """Check credentials and issue tokens. Returns None on any failure."""
        try:
            user = await self.user_repo.get_by_email(email)

            # Always verify a hash so response time does not reveal whether
            # the email exists
            password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
            password_valid = verify_password(password, password_hash)

            if user is None or not password_valid or not user.is_active:
                return None

            tokens = await self._issue_tokens(user.id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("auth.login") from e

        logger.info("User logged in", user_id=str(user.id))
        return tokens

    async def refresh(self, refresh_token: str) -> TokenPair | None:
        """Rotate a refresh token: revoke it and issue a new pair.

        Returns None when the token is malformed, expired, revoked or not a
        refresh token.
        """
        payload = decode_token(refresh_token)
        if payload is None or payload.get("type") != TokenType.REFRESH:
            return None

        subject = payload.get("sub")
        if not subject:
            return None
        try:
            user_id = UUID(subject)
        except ValueError:
            return None

        token_hash = hash_token(refresh_token)
        if await is_token_revoked(token_hash) is True:
            return None

        try:
            # FOR UPDATE: parallel refreshes of one token must not both succeed
            db_token = await self.token_repo.get_valid_by_hash(token_hash, for_update=True)
            if db_token is None or not hmac.compare_digest(token_hash, db_token.token_hash):
                await self.session.rollback()
                return None

            user = await self.user_repo.get_by_id(user_id)
            if user is None or not user.is_active:
                await self.session.rollback()
                return None

            db_token.revoked = True
            tokens = await self._issue_tokens(user_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("auth.refresh") from e

        await self._cache_revoked(token_hash)
        return tokens

    async def revoke_refresh_token(self, refresh_token: str) -> bool:
        """Revoke a refresh token. Returns False if it is unknown."""
        token_hash = hash_token(refresh_token)
        try:
            db_token = await self.token_repo.get_by_hash(token_hash)
            if db_token is None:
                return False
            db_token.revoked = True
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("auth.logout") from e

        await self._cache_revoked(token_hash)
        return True

    async def revoke_all_tokens_for_user(self, user_id: UUID) -> int:
        """Revoke every active refresh token of a user (e.g. after a password change)."""
        try:
            token_hashes = await self.token_repo.get_active_hashes_for_user(user_id)
            count = await self.token_repo.revoke_all_for_user(user_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("auth.revoke_all") from e

        if token_hashes:
            try:
                await remember_revoked_tokens(token_hashes, _revocation_ttl())
            except Exception as e:
                logger.warning(
                    "Failed to cache revoked tokens", error=str(e), token_count=len(token_hashes)
                )
        return count

    async def _cache_revoked(self, token_hash: str) -> None:
        # Runs after commit; failures are logged only
        try:
            await remember_revoked_token(token_hash, _revocation_ttl())
        except Exception as e:
            logger.warning("Failed to cache revoked token", error=str(e))
