# services/property_mapping_service.py
from core.property_mapping import PropertyMappingRegistry, mapping_value
from models.author_models import AuthorDto
from models.db_models import Author

AUTHOR_PROPERTY_MAPPING = {
    "Id": mapping_value("id"),
    "MainCategory": mapping_value("main_category"),
    "Age": mapping_value("date_of_birth", revert=True),
    "Name": mapping_value("first_name", "last_name"),
}

def create_property_mapping_registry() -> PropertyMappingRegistry:
    """
    Build the sort mappings once at startup. The returned registry is frozen.
    """
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, AUTHOR_PROPERTY_MAPPING)
    return registry.freeze()
