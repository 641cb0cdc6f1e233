# api/authors.py
import uuid
from typing import Optional, Type

from fastapi import APIRouter, HTTPException, Depends, Path, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from core.data_shaping import shape, shape_collection
from core.links import (
    ResourceUriType,
    create_authors_resource_uri,
    link_to,
    links_for_author,
    links_for_authors
)
from core.logger import get_logger
from core.media_types import InvalidMediaTypeError, ParsedMediaType, parse_media_type, vendor_media_type
from core.paging import PAGINATION_HEADER, encode_pagination_header
from core.plugin import (
    ensure_acceptable,
    ensure_fields_exist,
    ensure_known_id,
    ensure_valid_order_by,
    get_authors_resource_parameters,
    get_property_mappings,
    get_requested_media_type
)
from core.property_mapping import PropertyMappingRegistry
from core.settings import settings
from models.author_models import (
    AuthorDto,
    AuthorFullDto,
    AuthorForCreationDto,
    AuthorForCreationWithDateOfDeathDto
)
from models.db_models import Author
from models.resource_parameters import AuthorsResourceParameters
from services.course_library_repository import CourseLibraryRepository, get_course_library_repository

router = APIRouter()
logger = get_logger(__name__)

# export environment variables
API_VENDOR = settings.API_VENDOR

# ===== MEDIA TYPES =====

HATEOAS_MEDIA_TYPE = vendor_media_type(API_VENDOR, "hateoas")
AUTHOR_FULL_SUBTYPE = f"vnd.{API_VENDOR}.author.full"

AUTHORS_PRODUCES = ("application/json", HATEOAS_MEDIA_TYPE)
AUTHOR_PRODUCES = (
    "application/json",
    HATEOAS_MEDIA_TYPE,
    vendor_media_type(API_VENDOR, "author.full"),
    vendor_media_type(API_VENDOR, "author.full.hateoas"),
    vendor_media_type(API_VENDOR, "author.friendly"),
    vendor_media_type(API_VENDOR, "author.friendly.hateoas"),
)

AUTHOR_CREATION_CONSUMES = {
    "application/json": AuthorForCreationDto,
    vendor_media_type(API_VENDOR, "authorforcreation"): AuthorForCreationDto,
    vendor_media_type(API_VENDOR, "authorforcreationwithdateofdeath"): AuthorForCreationWithDateOfDeathDto,
}

ALLOWED_COLLECTION_METHODS = "GET,HEAD,OPTIONS,POST"

def _response_media_type(media_type: ParsedMediaType) -> str:
    return "application/json" if media_type.is_wildcard else media_type.media_type

def _creation_dto_for(content_type: Optional[str]) -> Type[AuthorForCreationDto]:
    try:
        parsed = parse_media_type(content_type)
    except InvalidMediaTypeError:
        parsed = None

    dto_type = AUTHOR_CREATION_CONSUMES.get(parsed.media_type) if parsed else None
    if dto_type is None:
        raise HTTPException(
            status_code=415,
            detail=f"Content type '{content_type}' is not supported for creating an author."
        )
    return dto_type

# ===== AUTHOR COLLECTION ENDPOINTS =====

@router.api_route("", methods=["GET", "HEAD"], name="get_authors")
async def get_authors(
    request: Request,
    response: Response,
    params: AuthorsResourceParameters = Depends(get_authors_resource_parameters),
    media_type: ParsedMediaType = Depends(get_requested_media_type),
    property_mappings: PropertyMappingRegistry = Depends(get_property_mappings),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    """
    List authors with filtering, searching, ordering, paging and data shaping.
    Pagination metadata goes to the X-Pagination header.
    """
    ensure_acceptable(media_type, *AUTHORS_PRODUCES)
    ensure_valid_order_by(property_mappings, AuthorDto, Author, params.order_by)
    ensure_fields_exist(AuthorDto, params.fields)

    authors = await repository.get_authors(params)

    previous_page_link = (
        create_authors_resource_uri(request, params, ResourceUriType.PREVIOUS_PAGE)
        if authors.has_previous else None
    )
    next_page_link = (
        create_authors_resource_uri(request, params, ResourceUriType.NEXT_PAGE)
        if authors.has_next else None
    )
    response.headers[PAGINATION_HEADER] = encode_pagination_header(
        authors.pagination_metadata(previous_page_link, next_page_link)
    )

    shaped_authors = shape_collection([AuthorDto.from_author(a) for a in authors], params.fields)
    if not media_type.includes_links:
        return shaped_authors

    for author in shaped_authors:
        # Item links need the id; a shape without it gets none
        if "id" in author:
            author["links"] = links_for_author(request, author["id"])

    return {
        "value": shaped_authors,
        "links": links_for_authors(request, params, authors.has_next, authors.has_previous)
    }

@router.post("", status_code=201, name="create_author")
async def create_author(
    request: Request,
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    """
    Create an author, optionally with courses. The Content-Type picks the
    payload: the ...authorforcreationwithdateofdeath+json variant also binds
    dateOfDeath.
    """
    dto_type = _creation_dto_for(request.headers.get("content-type"))
    try:
        author_for_creation = dto_type.model_validate_json(await request.body())
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))

    author = author_for_creation.to_author()
    repository.add_author(author)
    await repository.save()
    logger.info(f"Created author {author.id} ({dto_type.__name__})")

    author_to_return = shape(AuthorDto.from_author(author))
    author_to_return["links"] = links_for_author(request, author.id)

    return JSONResponse(
        status_code=201,
        content=jsonable_encoder(author_to_return),
        headers={"Location": link_to(request, "get_author", author_id=author.id)}
    )

@router.options("", name="get_authors_options")
async def get_authors_options():
    return Response(status_code=200, headers={"Allow": ALLOWED_COLLECTION_METHODS})

# ===== SINGLE AUTHOR ENDPOINTS =====

@router.get("/{author_id}", name="get_author")
async def get_author(
    request: Request,
    author_id: uuid.UUID = Path(...),
    fields: Optional[str] = Query(None, description="Comma-separated fields to return"),
    media_type: ParsedMediaType = Depends(get_requested_media_type),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    """
    Get one author. The Accept header selects the friendly or full
    representation and whether links are included.
    """
    ensure_acceptable(media_type, *AUTHOR_PRODUCES)

    dto_type = AuthorFullDto if media_type.primary_subtype == AUTHOR_FULL_SUBTYPE else AuthorDto
    ensure_fields_exist(dto_type, fields)

    ensure_known_id(author_id, "Author")
    author = await repository.get_author(author_id)
    if author is None:
        raise HTTPException(status_code=404, detail=f"Author {author_id} not found")

    author_to_return = shape(dto_type.from_author(author), fields)
    if media_type.includes_links:
        author_to_return["links"] = links_for_author(request, author_id, fields)

    return JSONResponse(
        content=jsonable_encoder(author_to_return),
        media_type=_response_media_type(media_type)
    )

@router.delete("/{author_id}", status_code=204, name="delete_author")
async def delete_author(
    author_id: uuid.UUID = Path(...),
    repository: CourseLibraryRepository = Depends(get_course_library_repository)
):
    """
    Delete an author together with their courses.
    """
    ensure_known_id(author_id, "Author")
    author = await repository.get_author(author_id)
    if author is None:
        raise HTTPException(status_code=404, detail=f"Author {author_id} not found")

    await repository.delete_author(author)
    await repository.save()
    logger.info(f"Deleted author {author_id}")
    return Response(status_code=204)
