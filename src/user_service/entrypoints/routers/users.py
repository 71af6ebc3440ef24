from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from user_service.domain.outcome import Deleted, Found, Updated
from user_service.domain.user import User
from user_service.entrypoints.schemas.user import UserPayload
from user_service.services.codec import (
    JSON_MEDIA_TYPE,
    XML_MEDIA_TYPE,
    UnsupportedMediaType,
    decode_user,
    encode_user,
    select_media_type,
)
from user_service.services.user_store import IdSpaceExhausted, UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

_ID_PATTERN = re.compile(r"[+-]?\d+")

_USER_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            XML_MEDIA_TYPE: {"schema": UserPayload.model_json_schema(by_alias=True)},
            JSON_MEDIA_TYPE: {"schema": UserPayload.model_json_schema(by_alias=True)},
        },
    }
}
_INVALID_ID = {500: {"description": "Invalid ID supplied"}}


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def parse_user_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Invalid ID supplied")
    return int(raw)


async def read_user(request: Request) -> tuple[User, str]:
    try:
        media_type = select_media_type(request.headers.get("content-type"))
        user = decode_user(await request.body(), media_type)
    except UnsupportedMediaType as error:
        logger.warning("rejected request body: %s", error)
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(error))
    except ValueError as error:
        logger.warning("rejected request body: %s", error)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    return user, media_type


@router.get(
    "/users/{user_id}",
    summary="Find User by ID",
    response_class=Response,
    responses={
        200: {"content": {XML_MEDIA_TYPE: {}}, "description": "User found"},
        204: {"description": "User not found"},
        **_INVALID_ID,
    },
)
@router.get("/users/{user_id}/", include_in_schema=False)
async def get_user(user_id: str, store: UserStore = Depends(get_store)) -> Response:
    outcome = store.fetch(parse_user_id(user_id))
    if isinstance(outcome, Found):
        return Response(content=encode_user(outcome.user, XML_MEDIA_TYPE), media_type=XML_MEDIA_TYPE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/users",
    summary="Update an existing User",
    response_class=Response,
    openapi_extra=_USER_BODY,
    responses={
        200: {"description": "User updated"},
        304: {"description": "User not found"},
        400: {"description": "Malformed user payload"},
        415: {"description": "Unsupported media type"},
    },
)
@router.put("/users/", include_in_schema=False)
async def update_user(request: Request, store: UserStore = Depends(get_store)) -> Response:
    user, _ = await read_user(request)
    outcome = store.replace(user)
    if isinstance(outcome, Updated):
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_304_NOT_MODIFIED)


@router.post(
    "/users",
    summary="Add a new User",
    response_class=Response,
    openapi_extra=_USER_BODY,
    responses={
        200: {"content": {XML_MEDIA_TYPE: {}, JSON_MEDIA_TYPE: {}}, "description": "Created user with its new id"},
        400: {"description": "Malformed user payload"},
        415: {"description": "Unsupported media type"},
        507: {"description": "No user ids left"},
    },
)
@router.post("/users/", include_in_schema=False)
async def create_user(request: Request, store: UserStore = Depends(get_store)) -> Response:
    user, media_type = await read_user(request)
    try:
        created = store.create(user)
    except IdSpaceExhausted as error:
        logger.error("create rejected: %s", error)
        raise HTTPException(status_code=status.HTTP_507_INSUFFICIENT_STORAGE, detail=str(error))
    return Response(content=encode_user(created, media_type), media_type=media_type)


@router.delete(
    "/users/{user_id}",
    summary="Delete User",
    response_class=Response,
    responses={
        200: {"description": "User deleted"},
        304: {"description": "User not found"},
        **_INVALID_ID,
    },
)
@router.delete("/users/{user_id}/", include_in_schema=False)
async def delete_user(user_id: str, store: UserStore = Depends(get_store)) -> Response:
    outcome = store.delete(parse_user_id(user_id))
    if isinstance(outcome, Deleted):
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_304_NOT_MODIFIED)
