# services/course_library_repository.py - Authors and courses persistence
"""
Repository over the author and course tables.

Mutations (``add_*`` / ``delete_*``) only stage changes on the request's
session; ``save()`` commits them as one unit of work.
"""
import uuid
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from core.db import get_async_session
from core.logger import get_logger
from core.paging import PagedList
from core.plugin import get_property_mappings
from core.property_mapping import PropertyMappingRegistry, describe_sort_keys
from models.author_models import AuthorDto
from models.db_models import Author, Course
from models.resource_parameters import AuthorsResourceParameters

logger = get_logger(__name__)

def _require_id(value: uuid.UUID, name: str) -> None:
    if value is None or value == uuid.UUID(int=0):
        raise ValueError(f"{name} must be a non-empty id")

class CourseLibraryRepository:
    def __init__(self, session: AsyncSession, property_mappings: PropertyMappingRegistry):
        self.session = session
        self.property_mappings = property_mappings

    # ===== AUTHORS =====

    def add_author(self, author: Author) -> None:
        """Stage a new author. The repository assigns the ids, not the caller."""
        if author is None:
            raise ValueError("author is required")

        author.id = uuid.uuid4()
        for course in author.courses:
            course.id = uuid.uuid4()
            course.author_id = author.id
        self.session.add(author)

    async def delete_author(self, author: Author) -> None:
        if author is None:
            raise ValueError("author is required")
        await self.session.delete(author)

    async def get_author(self, author_id: uuid.UUID) -> Optional[Author]:
        _require_id(author_id, "author_id")
        return await self.session.get(Author, author_id)

    async def author_exists(self, author_id: uuid.UUID) -> bool:
        _require_id(author_id, "author_id")
        result = await self.session.exec(select(Author.id).where(Author.id == author_id))
        return result.first() is not None

    async def get_authors(self, params: AuthorsResourceParameters) -> PagedList[Author]:
        """
        Filter, order and window the authors table for a listing request.
        The order-by clause must already have been validated.
        """
        if params is None:
            raise ValueError("params is required")

        statement = select(Author)
        conditions = []

        if params.main_category and params.main_category.strip():
            conditions.append(Author.main_category == params.main_category.strip())

        if params.search_query and params.search_query.strip():
            search_query = params.search_query.strip()
            conditions.append(or_(
                Author.main_category.contains(search_query, autoescape=True),
                Author.first_name.contains(search_query, autoescape=True),
                Author.last_name.contains(search_query, autoescape=True)
            ))

        if conditions:
            statement = statement.where(and_(*conditions))

        sort_keys = self.property_mappings.map_fields(AuthorDto, Author, params.order_by)
        for key in sort_keys:
            column = getattr(Author, key.field)
            statement = statement.order_by(column.desc() if key.descending else column.asc())

        logger.debug(
            f"Listing authors page={params.page_number} size={params.page_size} "
            f"order=[{describe_sort_keys(sort_keys)}]"
        )
        return await PagedList.create(self.session, statement, params.page_number, params.page_size)

    # ===== COURSES =====

    def add_course(self, author_id: uuid.UUID, course: Course) -> None:
        _require_id(author_id, "author_id")
        if course is None:
            raise ValueError("course is required")

        course.id = uuid.uuid4()
        course.author_id = author_id
        self.session.add(course)

    async def delete_course(self, course: Course) -> None:
        await self.session.delete(course)

    async def get_courses(self, author_id: uuid.UUID) -> List[Course]:
        _require_id(author_id, "author_id")
        result = await self.session.exec(
            select(Course).where(Course.author_id == author_id).order_by(Course.title)
        )
        return list(result.all())

    async def get_course(self, author_id: uuid.UUID, course_id: uuid.UUID) -> Optional[Course]:
        _require_id(author_id, "author_id")
        _require_id(course_id, "course_id")
        result = await self.session.exec(
            select(Course).where(
                (Course.author_id == author_id) &
                (Course.id == course_id)
            )
        )
        return result.first()

    # ===== UNIT OF WORK =====

    async def save(self) -> bool:
        """Commit staged changes. Failures roll back and propagate."""
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error("Commit failed, staged changes rolled back")
            raise
        return True

def get_course_library_repository(
    session: AsyncSession = Depends(get_async_session),
    property_mappings: PropertyMappingRegistry = Depends(get_property_mappings)
) -> CourseLibraryRepository:
    """Dependency: a repository bound to this request's session"""
    return CourseLibraryRepository(session, property_mappings)
