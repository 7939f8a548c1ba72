"""
Paging tests - normalization, page metadata, header JSON, repository slices.
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import UserEntity
from app.db.repositories.user_repository import UserRepository
from app.schemas.page import Page, PaginationHeader, normalize_paging


@pytest.mark.parametrize(
    "requested, expected",
    [
        ((1, 10), (1, 10)),
        ((0, 100), (1, 20)),
        ((-5, 5), (1, 5)),
        ((3, 0), (3, 1)),
        ((2, -7), (2, 1)),
        ((10**18, 5), (2**31 - 1, 5)),
    ],
)
def test_normalize_paging(requested, expected):
    assert normalize_paging(*requested, max_page_size=20) == expected


def test_page_metadata():
    first = Page(items=[1, 2], current_page=1, page_size=2, total_count=5)
    assert first.total_pages == 3
    assert not first.has_previous
    assert first.has_next

    last = Page(items=[5], current_page=3, page_size=2, total_count=5)
    assert last.has_previous
    assert not last.has_next


def test_page_map_keeps_metadata():
    page = Page(items=[1, 2], current_page=2, page_size=2, total_count=4).map(str)
    assert page.items == ["1", "2"]
    assert (page.current_page, page.page_size, page.total_count) == (2, 2, 4)


def test_pagination_header_json():
    header = PaginationHeader(
        previous_page_link=None,
        next_page_link="http://x/users?pageNumber=2&pageSize=10",
        total_count=25,
        page_size=10,
        current_page=1,
        total_pages=3,
    )
    assert header.to_header() == (
        '{"previousPageLink":null,"nextPageLink":"http://x/users?pageNumber=2&pageSize=10",'
        '"totalCount":25,"pageSize":10,"currentPage":1,"totalPages":3}'
    )


@pytest.mark.asyncio
async def test_repository_page_is_ordered_by_login(session: AsyncSession):
    repo = UserRepository(session)
    for login in ("charlie", "alice", "bob"):
        await repo.insert(UserEntity(login=login))

    page = await repo.get_page(1, 2)
    assert [u.login for u in page.items] == ["alice", "bob"]
    assert page.total_count == 3
    assert page.has_next

    page = await repo.get_page(2, 2)
    assert [u.login for u in page.items] == ["charlie"]
    assert not page.has_next


@pytest.mark.asyncio
async def test_repository_update_or_insert(session: AsyncSession):
    repo = UserRepository(session)
    entity = await repo.insert(UserEntity(login="first"))

    entity.login = "second"
    assert await repo.update_or_insert(entity) is False
    assert (await repo.find_by_id(entity.id)).login == "second"

    fresh = UserEntity(login="fresh")
    fresh.id = uuid.uuid4()
    assert await repo.update_or_insert(fresh) is True
    assert (await repo.find_by_id(fresh.id)).login == "fresh"

    await repo.delete_by_id(entity.id)
    assert await repo.find_by_id(entity.id) is None
