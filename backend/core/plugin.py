# core/plugin.py - API layer helpers for query binding, content negotiation and validation
import uuid
from typing import Optional, Type

from fastapi import Header, HTTPException, Query, Request

from core.media_types import InvalidMediaTypeError, ParsedMediaType, parse_media_type
from core.property_checker import missing_properties
from core.property_mapping import PropertyMappingRegistry
from core.settings import settings
from models.resource_parameters import AuthorsResourceParameters

# export environment variables
DEFAULT_PAGE_SIZE = settings.DEFAULT_PAGE_SIZE

DEFAULT_ACCEPT = "application/json"
NIL_ID = uuid.UUID(int=0)

# Standard query parameters (reusable)
def get_authors_resource_parameters(
    main_category: Optional[str] = Query(None, alias="mainCategory", description="Exact category filter"),
    search_query: Optional[str] = Query(None, alias="searchQuery", description="Substring search on category and names"),
    page_number: int = Query(1, alias="pageNumber", ge=1, description="Page number"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, description="Items per page, capped at the maximum"),
    order_by: str = Query("Name", alias="orderBy", description="Comma-separated fields, each optionally followed by 'desc'"),
    fields: Optional[str] = Query(None, description="Comma-separated fields to return")
) -> AuthorsResourceParameters:
    return AuthorsResourceParameters(
        main_category=main_category,
        search_query=search_query,
        page_number=page_number,
        page_size=page_size,
        order_by=order_by,
        fields=fields
    )

def get_requested_media_type(accept: Optional[str] = Header(None)) -> ParsedMediaType:
    """Parsed Accept header; a missing header means application/json"""
    try:
        return parse_media_type(accept if accept is not None else DEFAULT_ACCEPT)
    except InvalidMediaTypeError:
        raise HTTPException(
            status_code=400,
            detail="Accept header media type value is not a valid media type."
        )

def get_property_mappings(request: Request) -> PropertyMappingRegistry:
    return request.app.state.property_mappings

# Validation shared by endpoints (reject before touching storage)
def ensure_valid_order_by(
    property_mappings: PropertyMappingRegistry,
    source: Type,
    destination: Type,
    order_by: Optional[str]
) -> None:
    if not property_mappings.valid_mapping_exists(source, destination, order_by):
        raise HTTPException(
            status_code=400,
            detail=f"Not all requested order by fields can be mapped on the resource: {order_by}"
        )

def ensure_fields_exist(dto_type: Type, fields: Optional[str]) -> None:
    if missing_properties(dto_type, fields):
        raise HTTPException(
            status_code=400,
            detail=f"Not all requested data shaping fields exist on the resource: {fields}"
        )

def ensure_acceptable(media_type: ParsedMediaType, *produces: str) -> None:
    """Raise 406 unless the requested media type is a wildcard or one we produce"""
    if media_type.is_wildcard or any(media_type.matches(candidate) for candidate in produces):
        return
    raise HTTPException(
        status_code=406,
        detail=f"Media type '{media_type.media_type}' is not supported by this resource."
    )

def ensure_known_id(resource_id: uuid.UUID, resource_name: str) -> None:
    """404 for the nil id, which never names a stored resource"""
    if resource_id == NIL_ID:
        raise HTTPException(status_code=404, detail=f"{resource_name} {resource_id} not found")
