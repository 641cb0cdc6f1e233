# api/root.py
from fastapi import APIRouter, Depends, Request, Response

from core.links import links_for_root
from core.media_types import ParsedMediaType, vendor_media_type
from core.plugin import get_requested_media_type
from core.settings import settings

# export environment variables
API_VENDOR = settings.API_VENDOR

HATEOAS_MEDIA_TYPE = vendor_media_type(API_VENDOR, "hateoas")

router = APIRouter()

@router.get("", name="get_root")
async def get_root(
    request: Request,
    media_type: ParsedMediaType = Depends(get_requested_media_type)
):
    """
    Entry point of the API. Lists the top-level links for HATEOAS clients,
    returns 204 for everyone else.
    """
    if media_type.matches(HATEOAS_MEDIA_TYPE):
        return [link.model_dump() for link in links_for_root(request)]
    return Response(status_code=204)
