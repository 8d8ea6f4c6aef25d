"""Authentication and user management endpoints."""

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import CurrentUser, require_role
from app.config import get_settings
from app.dependencies import Authority
from app.exceptions import (
    InvalidCredentialsError,
    MissingFieldsError,
    PendingApprovalError,
    UserNotFoundError,
)
from app.models.user import UserRole
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisterResponse,
    TokenUser,
    UserActionResponse,
    UserListResponse,
    UserRegistration,
    UserResponse,
)
from app.utils.audit import audit_logged

router = APIRouter()

admin_only = Depends(require_role(UserRole.admin))


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, authority: Authority) -> LoginResponse:
    """Authenticate a user and return a bearer token."""
    if not body.username or not body.password:
        raise MissingFieldsError("Username and password are required")

    try:
        token, user = authority.login(body.username, body.password)
    except PendingApprovalError as err:
        if get_settings().mask_pending_approval:
            raise InvalidCredentialsError() from err
        raise

    return LoginResponse(
        token=token,
        expires_in=authority.tokens.expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(body: UserRegistration, authority: Authority) -> RegisterResponse:
    """Register a new account; it stays pending until an admin approves it."""
    user = authority.register(body)
    return RegisterResponse(user=UserResponse.model_validate(user))


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: CurrentUser) -> MeResponse:
    """Return the identity carried by the caller's token."""
    return MeResponse(user=TokenUser.model_validate(current_user))


@router.get("/users", response_model=UserListResponse, dependencies=[admin_only])
async def list_users(authority: Authority) -> UserListResponse:
    return UserListResponse(users=[UserResponse.model_validate(u) for u in authority.list_users()])


@router.get("/users/pending", response_model=UserListResponse, dependencies=[admin_only])
async def list_pending_users(authority: Authority) -> UserListResponse:
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in authority.list_pending_users()]
    )


@router.get("/users/{user_id}", response_model=UserResponse, dependencies=[admin_only])
async def get_user(user_id: str, authority: Authority) -> UserResponse:
    return UserResponse.model_validate(authority.get_user(user_id))


@router.put(
    "/users/{user_id}/approve",
    response_model=UserActionResponse,
    dependencies=[admin_only, Depends(audit_logged("approve_user"))],
)
async def approve_user(user_id: str, authority: Authority) -> UserActionResponse:
    user = authority.approve(user_id)
    return UserActionResponse(
        message="User approved successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete(
    "/users/{user_id}",
    response_model=UserActionResponse,
    dependencies=[admin_only, Depends(audit_logged("delete_user"))],
)
async def delete_user(user_id: str, authority: Authority) -> UserActionResponse:
    if not authority.delete(user_id):
        raise UserNotFoundError()
    return UserActionResponse(message="User deleted successfully")
