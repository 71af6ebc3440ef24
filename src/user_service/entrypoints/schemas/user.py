from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from user_service.domain.user import User

MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1

# code points outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile(r"[^\t\n\r\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class UserPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Optional[int] = Field(default=None, ge=MIN_USER_ID, le=MAX_USER_ID, description="Server assigned identifier")
    user_name: str = Field(..., description="Login name")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    user_status: Optional[int] = Field(default=None, description="Opaque status code")

    @field_validator("user_name", "first_name", "last_name", "email", "phone")
    @classmethod
    def xml_safe(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and _XML_ILLEGAL.search(value):
            raise ValueError("contains characters that cannot be represented in XML")
        return value

    @classmethod
    def from_domain(cls, user: User) -> UserPayload:
        return cls(**user.to_dict())

    def to_domain(self) -> User:
        return User(**self.model_dump())

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
