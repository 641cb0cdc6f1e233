# core/paging.py - Offset pagination over SQL statements
import json
import math
from typing import Any, Dict, Iterator, Optional, Sequence, TypeVar, overload

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel.sql.expression import SelectOfScalar

T = TypeVar("T")

PAGINATION_HEADER = "X-Pagination"

class PagedList(Sequence[T]):
    """
    One page of a filtered, ordered result set plus the numbers needed to
    navigate the rest of it. Never modified after construction.
    """

    def __init__(self, items: Sequence[T], total_count: int, page_number: int, page_size: int):
        if page_number < 1:
            raise ValueError("page_number must be at least 1")
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._items = tuple(items)
        self.total_count = total_count
        self.page_size = page_size
        self.current_page = page_number
        self.total_pages = math.ceil(total_count / page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return (
            f"PagedList(page={self.current_page}/{self.total_pages}, "
            f"size={self.page_size}, total={self.total_count}, items={len(self._items)})"
        )

    @classmethod
    async def create(
        cls,
        session: AsyncSession,
        statement: SelectOfScalar,
        page_number: int,
        page_size: int
    ) -> "PagedList[T]":
        """
        Count the filtered statement, then fetch the requested window of it.
        Filtering and ordering must already be part of ``statement``.
        """
        count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
        total_count = (await session.exec(count_statement)).one()
        offset = (page_number - 1) * page_size
        if offset >= total_count:
            # Past the last page, nothing to fetch
            return cls([], total_count, page_number, page_size)

        window = statement.offset(offset).limit(page_size)
        items = (await session.exec(window)).all()

        return cls(items, total_count, page_number, page_size)

    def pagination_metadata(
        self,
        previous_page_link: Optional[str] = None,
        next_page_link: Optional[str] = None
    ) -> Dict[str, Any]:
        return {
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "previousPageLink": previous_page_link,
            "nextPageLink": next_page_link,
        }

def encode_pagination_header(metadata: Dict[str, Any]) -> str:
    return json.dumps(metadata, separators=(",", ":"))

def decode_pagination_header(value: str) -> Dict[str, Any]:
    metadata = json.loads(value)
    for key in ("totalCount", "pageSize", "currentPage", "totalPages"):
        if not isinstance(metadata.get(key), int):
            raise ValueError(f"Pagination header is missing numeric field '{key}'")
    return metadata
