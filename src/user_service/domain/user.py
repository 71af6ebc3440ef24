from __future__ import annotations

from typing import Optional

from user_service.domain.base import IDomain


class User(IDomain):
    def __init__(
        self,
        user_name: str,
        id: Optional[int] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        user_status: Optional[int] = None,
    ) -> None:
        self.id = id
        self.user_name = user_name
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.phone = phone
        self.user_status = user_status

    def with_id(self, user_id: int) -> User:
        assigned = self.copy()
        assigned.id = user_id
        return assigned
