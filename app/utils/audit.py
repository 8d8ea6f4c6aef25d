"""Audit trail for privileged directory and evidence actions."""

from fastapi import Request

from app.auth.dependencies import CurrentUser
from app.utils.logging import get_logger

logger = get_logger("audit")

# Path parameters that name the record an action is aimed at.
TARGET_PARAMS = ("user_id", "evidence_id")


def audit_target(request: Request) -> str:
    """Return ``<param>=<value>`` for the targeted record, or ``-`` if none."""
    for name in TARGET_PARAMS:
        value = request.path_params.get(name)
        if value is not None:
            return f"{name}={value}"
    return "-"


def audit_logged(action: str):
    """Dependency factory recording who acted on which user or evidence record.

    Runs after role checks listed before it in ``dependencies=[...]``, so only
    permitted attempts reach the trail.
    """

    async def _log(request: Request, current_user: CurrentUser) -> None:
        client_ip = request.client.host if request.client else "unknown"
        logger.info(
            "AUDIT action=%s actor_id=%s actor=%s role=%s target=%s ip=%s request_id=%s",
            action,
            current_user.id,
            current_user.username,
            current_user.role,
            audit_target(request),
            client_ip,
            getattr(request.state, "request_id", "n/a"),
        )

    return _log
