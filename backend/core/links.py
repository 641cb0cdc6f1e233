# core/links.py - HATEOAS link construction
"""
Builds the navigation links attached to responses when a ``hateoas`` media
type is requested. Links depend only on the incoming request's base URL and
the parameters given here; nothing is looked up in storage.
"""
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import Request

from models.common_models import ResourceLink
from models.resource_parameters import AuthorsResourceParameters

class ResourceUriType(str, Enum):
    CURRENT = "current"
    PREVIOUS_PAGE = "previous_page"
    NEXT_PAGE = "next_page"

def link_to(request: Request, route_name: str, query: Optional[Dict[str, Any]] = None, **path_params: Any) -> str:
    url = request.url_for(route_name, **{name: str(value) for name, value in path_params.items()})
    if query:
        url = url.include_query_params(**{name: value for name, value in query.items() if value is not None})
    return str(url)

def create_authors_resource_uri(
    request: Request,
    params: AuthorsResourceParameters,
    uri_type: ResourceUriType = ResourceUriType.CURRENT
) -> str:
    page_number = params.page_number
    if uri_type == ResourceUriType.PREVIOUS_PAGE:
        page_number -= 1
    elif uri_type == ResourceUriType.NEXT_PAGE:
        page_number += 1

    return link_to(request, "get_authors", query={
        "fields": params.fields,
        "orderBy": params.order_by,
        "pageNumber": page_number,
        "pageSize": params.page_size,
        "mainCategory": params.main_category,
        "searchQuery": params.search_query,
    })

def links_for_authors(
    request: Request,
    params: AuthorsResourceParameters,
    has_next: bool,
    has_previous: bool
) -> List[ResourceLink]:
    links = [
        ResourceLink(href=create_authors_resource_uri(request, params), rel="self", method="GET")
    ]
    if has_next:
        links.append(ResourceLink(
            href=create_authors_resource_uri(request, params, ResourceUriType.NEXT_PAGE),
            rel="nextPage",
            method="GET"
        ))
    if has_previous:
        links.append(ResourceLink(
            href=create_authors_resource_uri(request, params, ResourceUriType.PREVIOUS_PAGE),
            rel="previousPage",
            method="GET"
        ))
    return links

def links_for_author(request: Request, author_id: uuid.UUID, fields: Optional[str] = None) -> List[ResourceLink]:
    if fields is None or not fields.strip():
        self_href = link_to(request, "get_author", author_id=author_id)
    else:
        self_href = link_to(request, "get_author", query={"fields": fields}, author_id=author_id)

    return [
        ResourceLink(href=self_href, rel="self", method="GET"),
        ResourceLink(href=link_to(request, "delete_author", author_id=author_id), rel="delete_author", method="DELETE"),
        ResourceLink(
            href=link_to(request, "create_course_for_author", author_id=author_id),
            rel="create_course_for_author",
            method="POST"
        ),
        ResourceLink(href=link_to(request, "get_courses_for_author", author_id=author_id), rel="courses", method="GET"),
    ]

def links_for_courses(request: Request, author_id: uuid.UUID) -> List[ResourceLink]:
    return [
        ResourceLink(href=link_to(request, "get_courses_for_author", author_id=author_id), rel="self", method="GET"),
    ]

def links_for_course(request: Request, author_id: uuid.UUID, course_id: uuid.UUID) -> List[ResourceLink]:
    ids = {"author_id": author_id, "course_id": course_id}
    return [
        ResourceLink(href=link_to(request, "get_course_for_author", **ids), rel="self", method="GET"),
        ResourceLink(href=link_to(request, "update_course_for_author", **ids), rel="update_course", method="PUT"),
        ResourceLink(href=link_to(request, "delete_course_for_author", **ids), rel="delete_course", method="DELETE"),
        ResourceLink(href=link_to(request, "get_author", author_id=author_id), rel="author", method="GET"),
    ]

def links_for_root(request: Request) -> List[ResourceLink]:
    return [
        ResourceLink(href=link_to(request, "get_root"), rel="self", method="GET"),
        ResourceLink(href=link_to(request, "get_authors"), rel="authors", method="GET"),
        ResourceLink(href=link_to(request, "create_author"), rel="create_author", method="POST"),
    ]
