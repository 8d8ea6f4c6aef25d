"""Session/identity authority: the user directory and every access decision."""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from app.auth.security import MAX_PASSWORD_BYTES, TokenService, hash_password, verify_password
from app.config import Settings
from app.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    MissingFieldsError,
    PasswordTooLongError,
    PendingApprovalError,
    UserNotFoundError,
)
from app.models.user import Identity, UserProfile, UserRecord, UserRole
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserRegistration
from app.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_REGISTRATION_FIELDS = (
    "username",
    "password",
    "first_name",
    "last_name",
    "email",
    "department",
)

RoleSpec = UserRole | str | Iterable[UserRole | str]


def authorize(identity: Identity | None, allowed_roles: RoleSpec) -> bool:
    """Return True iff the identity's role is one of ``allowed_roles``.

    ``allowed_roles`` may be a single role or any iterable of roles; plain
    strings compare equal to their ``UserRole`` members.
    """
    if identity is None:
        return False
    if isinstance(allowed_roles, str):
        return identity.role == allowed_roles
    return identity.role in set(allowed_roles)


class SessionAuthority:
    """Owns the user directory, credential checks, and token lifecycle.

    Every directory read and read-modify-write happens under one re-entrant
    lock so the username and email uniqueness invariants hold when the
    authority is called from worker threads.
    """

    def __init__(
        self,
        tokens: TokenService,
        *,
        password_rounds: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.tokens = tokens
        self._directory = UserRepository()
        self._lock = threading.RLock()
        self._password_rounds = password_rounds
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionAuthority:
        return cls(
            TokenService.from_settings(settings),
            password_rounds=settings.bcrypt_rounds,
        )

    @property
    def user_count(self) -> int:
        with self._lock:
            return len(self._directory)

    # ------------------------------------------------------------------
    # Credentials and tokens
    # ------------------------------------------------------------------

    def authenticate(self, username: str, password: str) -> UserProfile:
        with self._lock:
            user = self._directory.get_by_username(username)

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise InvalidCredentialsError()

        # Checked after the credential match, so a pending account's
        # password validity is observable to the caller.
        if not user.approved:
            logger.info("Login refused for pending account username=%s", username)
            raise PendingApprovalError()

        logger.info("Login succeeded for username=%s role=%s", username, user.role)
        return user.to_profile()

    def issue_token(self, subject: Identity | UserProfile) -> str:
        identity = subject if isinstance(subject, Identity) else Identity.from_profile(subject)
        return self.tokens.issue(identity)

    def login(self, username: str, password: str) -> tuple[str, UserProfile]:
        """Authenticate and issue a token in one step."""
        profile = self.authenticate(username, password)
        return self.issue_token(profile), profile

    def verify_token(self, token: str) -> Identity:
        return self.tokens.verify(token)

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    def register(self, data: UserRegistration) -> UserProfile:
        missing = [f for f in REQUIRED_REGISTRATION_FIELDS if not getattr(data, f)]
        if missing:
            raise MissingFieldsError()

        profile = self._create(
            user_id=str(uuid.uuid4()),
            username=data.username,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            email=str(data.email),
            department=data.department,
            role=data.role or UserRole.officer,
            approved=False,
        )
        logger.info("Registered username=%s role=%s (pending approval)", profile.username, profile.role)
        return profile

    def seed(
        self,
        *,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        department: str,
        role: UserRole | str = UserRole.officer,
        approved: bool = True,
        user_id: str | None = None,
    ) -> UserProfile:
        """Bootstrap a directory entry, optionally pre-approved."""
        return self._create(
            user_id=user_id or str(uuid.uuid4()),
            username=username,
            password=password,
            first_name=first_name,
            last_name=last_name,
            email=email,
            department=department,
            role=UserRole(role),
            approved=approved,
        )

    def _create(self, *, user_id: str, password: str, **fields) -> UserProfile:
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError()

        # Hash outside the lock.
        password_hash = hash_password(password, rounds=self._password_rounds)

        with self._lock:
            if self._directory.get_by_username(fields["username"]) is not None:
                raise DuplicateUsernameError()
            if self._directory.get_by_email(fields["email"]) is not None:
                raise DuplicateEmailError()
            user = self._directory.add(
                UserRecord(
                    id=user_id,
                    password_hash=password_hash,
                    created_at=self._clock(),
                    **fields,
                )
            )
            return user.to_profile()

    def get_user(self, user_id: str) -> UserProfile:
        with self._lock:
            user = self._directory.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError()
            return user.to_profile()

    def list_users(self) -> list[UserProfile]:
        with self._lock:
            return [u.to_profile() for u in self._directory.get_all()]

    def list_pending_users(self) -> list[UserProfile]:
        with self._lock:
            return [u.to_profile() for u in self._directory.get_all() if not u.approved]

    def approve(self, user_id: str) -> UserProfile:
        with self._lock:
            user = self._directory.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError()
            user.approved = True
            logger.info("Approved username=%s", user.username)
            return user.to_profile()

    def delete(self, user_id: str) -> bool:
        """Remove a user. Returns False, without raising, when the id is unknown."""
        with self._lock:
            removed = self._directory.remove(user_id)
        if removed:
            logger.info("Deleted user id=%s", user_id)
        return removed

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    @staticmethod
    def authorize(identity: Identity | None, allowed_roles: RoleSpec) -> bool:
        return authorize(identity, allowed_roles)
