"""In-memory user directory."""

from app.models.user import UserRecord


class UserRepository:
    """Data access layer for user records.

    Records are kept in insertion order. The repository does no locking of
    its own; callers that share it across threads must serialize access.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def __len__(self) -> int:
        return len(self._users)

    def get_by_id(self, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> UserRecord | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_all(self) -> list[UserRecord]:
        return list(self._users.values())

    def add(self, user: UserRecord) -> UserRecord:
        if user.id in self._users:
            raise KeyError(f"Duplicate user id: {user.id}")
        self._users[user.id] = user
        return user

    def remove(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None
