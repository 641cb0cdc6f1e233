# tests/services/test_course_library_repository.py
"""
Repository tests against an in-memory database.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from core.property_mapping import InvalidOrderByError
from core.dates import get_current_age
from models.author_models import AuthorForCreationWithDateOfDeathDto
from models.db_models import Author, Course
from models.resource_parameters import AuthorsResourceParameters
from services.course_library_repository import CourseLibraryRepository
from services.property_mapping_service import create_property_mapping_registry

# ===== TEST SETUP =====

@pytest_asyncio.fixture
async def session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()

@pytest.fixture
def repository(session) -> CourseLibraryRepository:
    return CourseLibraryRepository(session, create_property_mapping_registry())

def make_author(first_name: str, last_name: str = "Doe", category: str = "Ships", born: int = 1700, courses=None) -> Author:
    return Author(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=datetime(born, 1, 1),
        main_category=category,
        courses=courses or []
    )

async def add_all(repository: CourseLibraryRepository, *authors: Author):
    for author in authors:
        repository.add_author(author)
    await repository.save()

# ===== AUTHORS =====

@pytest.mark.asyncio
async def test_add_author_assigns_ids_to_author_and_courses(repository):
    caller_id = uuid.uuid4()
    author = make_author("Jane", courses=[Course(title="Knots"), Course(title="Sails")])
    author.id = caller_id

    await add_all(repository, author)

    assert author.id != caller_id
    assert all(course.author_id == author.id for course in author.courses)
    assert len({course.id for course in author.courses}) == 2

    stored = await repository.get_author(author.id)
    assert stored is not None
    assert stored.first_name == "Jane"
    assert await repository.author_exists(author.id)
    assert not await repository.author_exists(uuid.uuid4())

@pytest.mark.asyncio
async def test_get_author_missing_returns_none(repository):
    assert await repository.get_author(uuid.uuid4()) is None

@pytest.mark.asyncio
async def test_nil_ids_are_rejected(repository):
    with pytest.raises(ValueError):
        await repository.get_author(uuid.UUID(int=0))
    with pytest.raises(ValueError):
        await repository.get_courses(None)

@pytest.mark.asyncio
async def test_delete_author_removes_courses(repository, session):
    author = make_author("Jane", courses=[Course(title="Knots")])
    await add_all(repository, author)

    await repository.delete_author(await repository.get_author(author.id))
    await repository.save()

    assert await repository.get_author(author.id) is None
    remaining = (await session.exec(select(Course))).all()
    assert remaining == []

# ===== LISTING =====

@pytest.mark.asyncio
async def test_get_authors_pages_in_order(repository):
    await add_all(repository, *[make_author(f"Author {n:02d}") for n in range(25, 0, -1)])

    page = await repository.get_authors(AuthorsResourceParameters(page_number=2, page_size=10))

    assert [a.first_name for a in page] == [f"Author {n:02d}" for n in range(11, 21)]
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_previous and page.has_next

@pytest.mark.asyncio
async def test_get_authors_category_filter_is_exact_and_trimmed(repository):
    await add_all(
        repository,
        make_author("A", category="Rum"),
        make_author("B", category="Rum Running"),
        make_author("C", category="Ships"),
    )

    page = await repository.get_authors(AuthorsResourceParameters(main_category="  Rum "))
    assert [a.first_name for a in page] == ["A"]

@pytest.mark.asyncio
async def test_get_authors_search_matches_category_or_names(repository):
    await add_all(
        repository,
        make_author("Sea", last_name="Dog", category="Maps"),
        make_author("Tom", last_name="Seaman", category="Maps"),
        make_author("Ann", last_name="Bonny", category="Seafaring"),
        make_author("Bob", last_name="Ross", category="Painting"),
    )

    page = await repository.get_authors(AuthorsResourceParameters(search_query="Sea"))
    assert sorted(a.first_name for a in page) == ["Ann", "Sea", "Tom"]

    # Category and search both apply
    page = await repository.get_authors(AuthorsResourceParameters(main_category="Maps", search_query="Sea"))
    assert sorted(a.first_name for a in page) == ["Sea", "Tom"]
    assert page.total_count == 2

@pytest.mark.asyncio
@pytest.mark.parametrize("search_query", ["_", "%", "J%e", "D_e"])
async def test_get_authors_search_treats_wildcards_literally(repository, search_query):
    await add_all(repository, make_author("Jane", last_name="Doe"))

    page = await repository.get_authors(AuthorsResourceParameters(search_query=search_query))
    assert page.total_count == 0
    assert len(page) == 0

@pytest.mark.asyncio
async def test_get_authors_search_matches_wildcard_characters_as_text(repository):
    await add_all(
        repository,
        make_author("Jane", category="100% Rum"),
        make_author("John", category="1000 Rums"),
    )

    page = await repository.get_authors(AuthorsResourceParameters(search_query="0%"))
    assert [a.first_name for a in page] == ["Jane"]

@pytest.mark.asyncio
async def test_get_authors_orders_by_age(repository):
    await add_all(
        repository,
        make_author("Young", born=1750),
        make_author("Old", born=1650),
        make_author("Middle", born=1700),
    )

    page = await repository.get_authors(AuthorsResourceParameters(order_by="Age desc"))
    assert [a.first_name for a in page] == ["Old", "Middle", "Young"]

    page = await repository.get_authors(AuthorsResourceParameters(order_by="Age"))
    assert [a.first_name for a in page] == ["Young", "Middle", "Old"]

@pytest.mark.asyncio
async def test_get_authors_rejects_unmappable_order_by(repository):
    with pytest.raises(InvalidOrderByError):
        await repository.get_authors(AuthorsResourceParameters(order_by="unknownField"))

@pytest.mark.asyncio
async def test_page_size_above_maximum_is_clamped(repository):
    await add_all(repository, *[make_author(f"Author {n:02d}") for n in range(1, 31)])

    page = await repository.get_authors(AuthorsResourceParameters(page_size=50))
    assert page.page_size == 20
    assert len(page) == 20
    assert page.total_pages == 2

# ===== COURSES =====

@pytest.mark.asyncio
async def test_courses_are_scoped_to_their_author(repository):
    jane = make_author("Jane")
    john = make_author("John")
    await add_all(repository, jane, john)

    course = Course(title="Knots", description="Tying them")
    repository.add_course(jane.id, course)
    await repository.save()

    assert course.author_id == jane.id
    assert (await repository.get_course(jane.id, course.id)).title == "Knots"
    assert await repository.get_course(john.id, course.id) is None
    assert [c.title for c in await repository.get_courses(jane.id)] == ["Knots"]
    assert await repository.get_courses(john.id) == []

@pytest.mark.asyncio
async def test_courses_are_listed_by_title(repository):
    jane = make_author("Jane")
    await add_all(repository, jane)
    for title in ("Sails", "Anchors", "Knots"):
        repository.add_course(jane.id, Course(title=title))
    await repository.save()

    assert [c.title for c in await repository.get_courses(jane.id)] == ["Anchors", "Knots", "Sails"]

@pytest.mark.asyncio
async def test_delete_course(repository):
    jane = make_author("Jane", courses=[Course(title="Knots")])
    await add_all(repository, jane)
    course_id = jane.courses[0].id

    await repository.delete_course(await repository.get_course(jane.id, course_id))
    await repository.save()

    assert await repository.get_course(jane.id, course_id) is None
    assert await repository.author_exists(jane.id)

# ===== PAGING EDGES =====

@pytest.mark.asyncio
@pytest.mark.parametrize("page_number", [4, 4611686018427387904])
async def test_page_past_the_end_is_empty(repository, page_number):
    await add_all(repository, *[make_author(f"Author {n:02d}") for n in range(1, 26)])

    page = await repository.get_authors(AuthorsResourceParameters(page_number=page_number, page_size=10))

    assert len(page) == 0
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_previous
    assert not page.has_next

# ===== DATES =====

@pytest.mark.asyncio
async def test_aware_dates_are_stored_as_naive_utc(repository):
    author_for_creation = AuthorForCreationWithDateOfDeathDto.model_validate({
        "firstName": "Old",
        "lastName": "Salt",
        "dateOfBirth": datetime(1650, 7, 23, 1, 0, tzinfo=timezone(timedelta(hours=2))),
        "dateOfDeath": "1700-01-01T00:00:00Z",
        "mainCategory": "Ships",
    })
    author = author_for_creation.to_author()
    await add_all(repository, author)

    repository.session.expunge_all()
    stored = await repository.get_author(author.id)

    assert stored.date_of_birth == datetime(1650, 7, 22, 23, 0)
    assert stored.date_of_birth.tzinfo is None
    assert Author.__table__.c.date_of_birth.type.timezone is False
    assert stored.date_of_death == datetime(1700, 1, 1)
    assert get_current_age(stored.date_of_birth, stored.date_of_death) == 50

@pytest.mark.asyncio
async def test_living_author_age_from_stored_date(repository):
    await add_all(repository, make_author("Jane", born=1990))
    page = await repository.get_authors(AuthorsResourceParameters())

    stored = page[0]
    now = datetime(2024, 6, 15, tzinfo=timezone.utc)
    assert get_current_age(stored.date_of_birth, now=now) == 34
