from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from user_service.domain.user import User


@dataclass(frozen=True)
class Found:
    user: User


@dataclass(frozen=True)
class NotFound:
    user_id: Any


@dataclass(frozen=True)
class Updated:
    user_id: int


@dataclass(frozen=True)
class Deleted:
    user_id: int


FetchOutcome = Union[Found, NotFound]
ReplaceOutcome = Union[Updated, NotFound]
DeleteOutcome = Union[Deleted, NotFound]
