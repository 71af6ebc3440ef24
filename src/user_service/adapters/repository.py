from __future__ import annotations

from typing import Dict, List, Optional

from user_service.domain.user import User

from .base import IRepository


class UserRepository(IRepository):
    """In-memory id to user map. Callers are responsible for locking."""

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}

    def add(self, data: User) -> None:  # type: ignore[override]
        if data.id is None:
            raise ValueError("User must have an id before it is stored")
        self._users[data.id] = data.copy()

    def get(self, object_id: int) -> Optional[User]:
        user = self._users.get(object_id)
        if user is None:
            return None
        return user.copy()

    def contains(self, object_id: int) -> bool:
        return object_id in self._users

    def delete(self, object_id: int) -> None:
        self._users.pop(object_id, None)

    def list(self) -> List[User]:  # type: ignore[override]
        return [self._users[user_id].copy() for user_id in sorted(self._users)]

    def __len__(self) -> int:
        return len(self._users)
