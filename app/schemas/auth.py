"""Pydantic schemas for authentication and user management."""

from datetime import datetime

from pydantic import BaseModel, EmailStr

from app.models.user import UserRole


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    username: str | None = None
    password: str | None = None


class UserRegistration(BaseModel):
    """Self-service registration request.

    Fields are optional at the schema level so that the directory can report
    missing fields with its own error instead of a generic validation failure.
    """

    username: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None
    department: str | None = None
    role: UserRole | None = None


class UserResponse(BaseModel):
    """Response schema for a directory entry (never includes the password hash)."""

    id: str
    username: str
    first_name: str
    last_name: str
    email: str
    department: str
    role: UserRole
    approved: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenUser(BaseModel):
    """Identity decoded from a bearer token."""

    id: str
    username: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class RegisterResponse(BaseModel):
    message: str = "Registration successful. Your account is pending admin approval."
    user: UserResponse


class UserListResponse(BaseModel):
    users: list[UserResponse]


class UserActionResponse(BaseModel):
    message: str
    user: UserResponse | None = None


class MeResponse(BaseModel):
    user: TokenUser
