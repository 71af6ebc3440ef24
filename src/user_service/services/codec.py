"""Wire codec for user payloads.

Users travel as either XML (``<User><id>124</id><userName>alice</userName></User>``)
or JSON (``{"id": 124, "userName": "alice"}``). Both formats are validated
through :class:`UserPayload`, so field names, optional fields and the id range
are defined in one place.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ElementTree
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from user_service.domain.user import User
from user_service.entrypoints.schemas.user import UserPayload

XML_MEDIA_TYPE = "application/xml"
JSON_MEDIA_TYPE = "application/json"
XML_ROOT = "User"


class PayloadError(ValueError):
    pass


class UnsupportedMediaType(ValueError):
    pass


def select_media_type(content_type: Optional[str]) -> str:
    """Map a request ``Content-Type`` header onto XML or JSON.

    A missing header falls back to XML. Parameters such as ``charset`` are
    ignored.
    """
    if not content_type or not content_type.strip():
        return XML_MEDIA_TYPE
    essence = content_type.split(";", 1)[0].strip().lower()
    if essence == JSON_MEDIA_TYPE or essence.endswith("+json"):
        return JSON_MEDIA_TYPE
    if essence in (XML_MEDIA_TYPE, "text/xml") or essence.endswith("+xml"):
        return XML_MEDIA_TYPE
    raise UnsupportedMediaType(f"Unsupported media type: {essence}")


def user_from_mapping(data: Mapping[str, Any]) -> User:
    try:
        return UserPayload.model_validate(dict(data)).to_domain()
    except ValidationError as error:
        raise PayloadError(_describe(error)) from error


def decode_user(body: bytes, media_type: str) -> User:
    if not body or not body.strip():
        raise PayloadError("Request body is empty")
    if media_type == JSON_MEDIA_TYPE:
        return user_from_mapping(_parse_json(body))
    if media_type == XML_MEDIA_TYPE:
        return user_from_mapping(_parse_xml(body))
    raise UnsupportedMediaType(f"Unsupported media type: {media_type}")


def encode_user(user: User, media_type: str) -> bytes:
    fields = UserPayload.from_domain(user).to_wire()
    if media_type == JSON_MEDIA_TYPE:
        return json.dumps(fields, ensure_ascii=False).encode("utf-8")
    if media_type == XML_MEDIA_TYPE:
        root = ElementTree.Element(XML_ROOT)
        for name, value in fields.items():
            ElementTree.SubElement(root, name).text = str(value)
        return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)
    raise UnsupportedMediaType(f"Unsupported media type: {media_type}")


def _parse_json(body: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise PayloadError(f"Malformed JSON body: {error}") from error
    if not isinstance(data, dict):
        raise PayloadError("JSON body must be an object")
    return data


def _parse_xml(body: bytes) -> Dict[str, Any]:
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as error:
        raise PayloadError(f"Malformed XML body: {error}") from error
    if root.tag.lower() != XML_ROOT.lower():
        raise PayloadError(f"Unexpected XML root element: {root.tag}")
    # empty elements count as absent; repeated elements: last one wins
    return {child.tag: child.text for child in root if child.text}


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "body"
        problems.append(f"{location}: {item.get('msg')}")
    return "Invalid user payload: " + "; ".join(problems)
