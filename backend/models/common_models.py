# models/common_models.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base for API models: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ResourceLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    href: str
    rel: str
    method: str
