from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Iterable, List

from user_service.adapters.repository import UserRepository
from user_service.domain.outcome import (
    Deleted,
    DeleteOutcome,
    FetchOutcome,
    Found,
    NotFound,
    ReplaceOutcome,
    Updated,
)
from user_service.domain.user import User
from user_service.entrypoints.schemas.user import MAX_USER_ID, MIN_USER_ID
from user_service.services.config import settings

logging.basicConfig(stream=sys.stdout, level=settings.USER_SERVICE_LOG_LEVEL)
logger = logging.getLogger(__name__)


def is_valid_id(user_id: Any) -> bool:
    return isinstance(user_id, int) and not isinstance(user_id, bool) and MIN_USER_ID <= user_id <= MAX_USER_ID


class IdSpaceExhausted(RuntimeError):
    pass


def _next_id(current_id: int) -> int:
    if current_id >= MAX_USER_ID:
        raise IdSpaceExhausted(f"No user ids left after {current_id}")
    return current_id + 1


class UserStore:
    """Owns every stored user and the id counter.

    All operations run under a single lock, so concurrent creates never share
    an id and readers never see a half-applied mutation. Absence is reported
    as a :class:`NotFound` outcome, never raised.
    """

    def __init__(self, id_seed: int = 123, repository: UserRepository | None = None) -> None:
        if not is_valid_id(id_seed):
            raise ValueError(f"Invalid id seed: {id_seed!r}")
        self._lock = threading.Lock()
        self._current_id = id_seed
        self._users = repository if repository is not None else UserRepository()

    @property
    def current_id(self) -> int:
        with self._lock:
            return self._current_id

    def fetch(self, user_id: Any) -> FetchOutcome:
        logger.info("Invoking fetch, user id is: %s", user_id)
        if not is_valid_id(user_id):
            return NotFound(user_id)
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            return NotFound(user_id)
        return Found(user)

    def create(self, candidate: User) -> User:
        """Store ``candidate`` under a fresh id.

        Raises :class:`IdSpaceExhausted` without storing anything once the
        counter has reached the largest 64-bit id.
        """
        logger.info("Invoking create, user name is: %s", candidate.user_name)
        with self._lock:
            user_id = _next_id(self._current_id)
            user = candidate.with_id(user_id)
            self._users.add(user)
            self._current_id = user_id
        logger.info("user created with id %s", user.id)
        return user.copy()

    def replace(self, candidate: User) -> ReplaceOutcome:
        logger.info("Invoking replace, user name is: %s", candidate.user_name)
        if not is_valid_id(candidate.id):
            return NotFound(candidate.id)
        with self._lock:
            if not self._users.contains(candidate.id):
                logger.info("user %s not found, nothing replaced", candidate.id)
                return NotFound(candidate.id)
            self._users.add(candidate)
        return Updated(candidate.id)

    def delete(self, user_id: Any) -> DeleteOutcome:
        logger.info("Invoking delete, user id is: %s", user_id)
        if not is_valid_id(user_id):
            return NotFound(user_id)
        with self._lock:
            if not self._users.contains(user_id):
                logger.info("user %s not found, nothing deleted", user_id)
                return NotFound(user_id)
            self._users.delete(user_id)
        return Deleted(user_id)

    def seed(self, users: Iterable[User]) -> None:
        """Insert initial users, keeping explicit ids and allocating missing ones.

        The whole batch is checked first; on any invalid id nothing is stored.
        """
        with self._lock:
            current_id = self._current_id
            prepared: List[User] = []
            for user in users:
                if user.id is None:
                    current_id = _next_id(current_id)
                    user = user.with_id(current_id)
                elif not is_valid_id(user.id):
                    raise ValueError(f"Invalid seed user id: {user.id!r}")
                else:
                    current_id = max(current_id, user.id)
                prepared.append(user)
            for user in prepared:
                self._users.add(user)
            self._current_id = current_id
        logger.info("seeded %s users", len(prepared))

    def list(self) -> List[User]:
        with self._lock:
            return self._users.list()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
