# api/courses.py
import uuid

from fastapi import APIRouter, HTTPException, Depends, Path, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core.links import link_to, links_for_course, links_for_courses
from core.logger import get_logger
from core.media_types import ParsedMediaType
from core.plugin import ensure_known_id, get_requested_media_type
from models.course_models import CourseDto, CourseForCreationDto, CourseForUpdateDto
from services.course_library_repository import CourseLibraryRepository, get_course_library_repository

router = APIRouter()
logger = get_logger(__name__)

async def _ensure_author_exists(repository: CourseLibraryRepository, author_id: uuid.UUID) -> None:
    ensure_known_id(author_id, "Author")
    if not await repository.author_exists(author_id):
        raise HTTPException(status_code=404, detail=f"Author {author_id} not found")

def _course_to_return(request: Request, course, include_links: bool) -> dict:
    course_to_return = CourseDto.from_course(course).model_dump(by_alias=True)
    if include_links:
        course_to_return["links"] = links_for_course(request, course.author_id, course.id)
    return course_to_return

# ===== COURSE COLLECTION ENDPOINTS =====
# Scoped to a single author

@router.get("", name="get_courses_for_author")
async def get_courses_for_author(
    request: Request,
    author_id: uuid.UUID = Path(...),
    media_type: ParsedMediaType = Depends(get_requested_media_type),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    await _ensure_author_exists(repository, author_id)

    courses = await repository.get_courses(author_id)
    courses_to_return = [_course_to_return(request, c, media_type.includes_links) for c in courses]
    if not media_type.includes_links:
        return courses_to_return

    return {
        "value": courses_to_return,
        "links": links_for_courses(request, author_id)
    }

@router.post("", status_code=201, name="create_course_for_author")
async def create_course_for_author(
    request: Request,
    course: CourseForCreationDto,
    author_id: uuid.UUID = Path(...),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    await _ensure_author_exists(repository, author_id)

    course_entity = course.to_course()
    repository.add_course(author_id, course_entity)
    await repository.save()
    logger.info(f"Created course {course_entity.id} for author {author_id}")

    return JSONResponse(
        status_code=201,
        content=jsonable_encoder(_course_to_return(request, course_entity, include_links=True)),
        headers={
            "Location": link_to(
                request, "get_course_for_author", author_id=author_id, course_id=course_entity.id
            )
        }
    )

# ===== SINGLE COURSE ENDPOINTS =====

async def _get_course_or_404(repository: CourseLibraryRepository, author_id: uuid.UUID, course_id: uuid.UUID):
    await _ensure_author_exists(repository, author_id)
    ensure_known_id(course_id, "Course")
    course = await repository.get_course(author_id, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    return course

@router.get("/{course_id}", name="get_course_for_author")
async def get_course_for_author(
    request: Request,
    author_id: uuid.UUID = Path(...),
    course_id: uuid.UUID = Path(...),
    media_type: ParsedMediaType = Depends(get_requested_media_type),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    course = await _get_course_or_404(repository, author_id, course_id)
    return _course_to_return(request, course, media_type.includes_links)

@router.put("/{course_id}", status_code=204, name="update_course_for_author")
async def update_course_for_author(
    course: CourseForUpdateDto,
    author_id: uuid.UUID = Path(...),
    course_id: uuid.UUID = Path(...),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    course_entity = await _get_course_or_404(repository, author_id, course_id)
    course.apply_to(course_entity)
    await repository.save()
    logger.info(f"Updated course {course_id} for author {author_id}")
    return Response(status_code=204)

@router.delete("/{course_id}", status_code=204, name="delete_course_for_author")
async def delete_course_for_author(
    author_id: uuid.UUID = Path(...),
    course_id: uuid.UUID = Path(...),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    course_entity = await _get_course_or_404(repository, author_id, course_id)
    await repository.delete_course(course_entity)
    await repository.save()
    logger.info(f"Deleted course {course_id} for author {author_id}")
    return Response(status_code=204)
