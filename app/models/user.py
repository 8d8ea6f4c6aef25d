"""User directory records and the identity snapshot carried by tokens."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from datetime import datetime


class UserRole(enum.StrEnum):
    officer = "officer"
    supervisor = "supervisor"
    detective = "detective"
    admin = "admin"


@dataclass(slots=True)
class UserRecord:
    """A registered operator as held in the directory."""

    id: str
    username: str
    password_hash: str
    first_name: str
    last_name: str
    email: str
    department: str
    role: UserRole
    approved: bool
    created_at: datetime

    def to_profile(self) -> UserProfile:
        data = asdict(self)
        data.pop("password_hash")
        return UserProfile(**data)


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Public view of a user record (no credential material)."""

    id: str
    username: str
    first_name: str
    last_name: str
    email: str
    department: str
    role: UserRole
    approved: bool
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated claims for one caller, frozen at token issuance."""

    id: str
    username: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_profile(cls, profile: UserProfile | UserRecord) -> Identity:
        return cls(
            id=profile.id,
            username=profile.username,
            role=profile.role,
            first_name=profile.first_name,
            last_name=profile.last_name,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
