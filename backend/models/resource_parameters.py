# models/resource_parameters.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.settings import settings

# export environment variables
DEFAULT_PAGE_SIZE = settings.DEFAULT_PAGE_SIZE
MAX_PAGE_SIZE = settings.MAX_PAGE_SIZE

class AuthorsResourceParameters(BaseModel):
    """
    Query parameters of the author listing.
    A page size above MAX_PAGE_SIZE is clamped, not rejected.
    """
    model_config = ConfigDict(validate_assignment=True)

    main_category: Optional[str] = None
    search_query: Optional[str] = None
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    order_by: str = "Name"
    fields: Optional[str] = None

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, value: int) -> int:
        return min(value, MAX_PAGE_SIZE)
