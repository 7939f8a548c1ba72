"""
User resource endpoints - GET/HEAD/POST/PUT/PATCH/DELETE/OPTIONS on /users.
Thin controller: UserService holds the rules; this module shapes status codes and headers.
"""

import logging
import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Request, Response, status

from app.api.negotiation import content_type_for, render
from app.config import get_settings
from app.db.repositories.user_repository import UserRepository
from app.db.session import DbSession
from app.schemas.page import PaginationHeader, normalize_paging
from app.schemas.user import UserDto
from app.services.json_patch import MalformedPatchError, parse_patch_document
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

NIL_ID = uuid.UUID(int=0)
ALLOWED_METHODS = "POST, GET, OPTIONS"

RequestBody = Annotated[Any, Body()]


def _get_user_service(session: DbSession) -> UserService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return UserService(UserRepository(session))


def _user_location(request: Request, user_id: uuid.UUID) -> str:
    return str(request.url_for("get_user_by_id", user_id=str(user_id)))


def _page_link(request: Request, page_number: int, page_size: int) -> str:
    return str(request.url_for("get_users").include_query_params(pageNumber=page_number, pageSize=page_size))


@router.api_route("/{user_id}", methods=["GET", "HEAD"], response_model=UserDto)
async def get_user_by_id(request: Request, session: DbSession, user_id: uuid.UUID):
    """Single user. HEAD answers with headers only."""
    svc = _get_user_service(session)
    user = await svc.get_by_id(user_id)
    if user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    if request.method == "HEAD":
        return Response(status_code=status.HTTP_200_OK, headers={"content-type": content_type_for(request)})
    return render(request, user)


@router.get("", response_model=list[UserDto])
async def get_users(
    request: Request,
    session: DbSession,
    page_number: int = Query(1, alias="pageNumber"),
    page_size: int = Query(settings.default_page_size, alias="pageSize"),
):
    """Paged list. Out-of-range paging is clamped; page metadata goes in X-Pagination."""
    page_number, page_size = normalize_paging(page_number, page_size, settings.max_page_size)
    svc = _get_user_service(session)
    page = await svc.get_page(page_number, page_size)
    pagination = PaginationHeader(
        previous_page_link=_page_link(request, page_number - 1, page_size) if page.has_previous else None,
        next_page_link=_page_link(request, page_number + 1, page_size) if page.has_next else None,
        total_count=page.total_count,
        page_size=page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
    )
    return render(request, page.items, headers={"X-Pagination": pagination.to_header()}, root="ArrayOfUserDto")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=uuid.UUID)
async def create_user(request: Request, session: DbSession, payload: RequestBody = None):
    """Create user; the server assigns the id. 400 on empty body, 422 on invalid fields."""
    if payload is None:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    svc = _get_user_service(session)
    user_id = await svc.create(payload)
    return render(
        request,
        user_id,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": _user_location(request, user_id)},
        root="guid",
    )


@router.put("/{user_id}")
async def upsert_user(request: Request, session: DbSession, user_id: uuid.UUID, payload: RequestBody = None):
    """Create or replace the user at a client-chosen id: 201 when created, 204 when replaced."""
    if user_id == NIL_ID or payload is None:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    svc = _get_user_service(session)
    inserted = await svc.upsert(user_id, payload)
    if inserted:
        return render(
            request,
            {"guid": user_id},
            status_code=status.HTTP_201_CREATED,
            headers={"Location": _user_location(request, user_id)},
            root="guid",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}")
async def partially_update_user(session: DbSession, user_id: uuid.UUID, payload: RequestBody = None):
    """Apply a JSON Patch document. Always 204 on success, even if the repository inserted."""
    if payload is None:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    try:
        operations = parse_patch_document(payload)
    except MalformedPatchError as exc:
        logger.warning("Malformed patch for user %s: %s", user_id, exc)
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    svc = _get_user_service(session)
    outcome = await svc.patch(user_id, operations)
    if outcome is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(session: DbSession, user_id: uuid.UUID):
    """Delete user. 404 for the nil id or an unknown user."""
    if user_id == NIL_ID:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    svc = _get_user_service(session)
    if not await svc.delete(user_id):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.options("")
async def options():
    """Methods supported on the collection."""
    return Response(status_code=status.HTTP_200_OK, headers={"Allow": ALLOWED_METHODS})
