# tests/core/test_property_mapping.py
"""
Tests for the order-by -> sort key mapping registry.
"""
import pytest

from core.property_mapping import (
    InvalidOrderByError,
    PropertyMappingNotFoundError,
    PropertyMappingRegistry,
    SortKey,
    describe_sort_keys,
    mapping_value
)
from models.author_models import AuthorDto
from models.db_models import Author, Course
from services.property_mapping_service import create_property_mapping_registry

@pytest.fixture
def registry() -> PropertyMappingRegistry:
    return create_property_mapping_registry()

# ===== VALIDATION =====

@pytest.mark.parametrize("order_by", [
    "Name",
    "name",
    "Age desc",
    "MainCategory, Id desc",
    "  id  ,  name asc  ",
    "AGE DESC",
    "",
    "   ",
    None,
])
def test_valid_clauses_are_accepted(registry, order_by):
    assert registry.valid_mapping_exists(AuthorDto, Author, order_by)

@pytest.mark.parametrize("order_by", [
    "unknownField",
    "Name, unknownField",
    "Name,",
    "Name sideways",
    "Name desc extra",
    "first_name",
])
def test_clauses_with_unmappable_tokens_are_rejected(registry, order_by):
    assert not registry.valid_mapping_exists(AuthorDto, Author, order_by)
    with pytest.raises(InvalidOrderByError):
        registry.map_fields(AuthorDto, Author, order_by)

# ===== MAPPING =====

def test_composite_field_maps_to_every_destination_column(registry):
    assert registry.map_fields(AuthorDto, Author, "Name") == [
        SortKey("first_name", False),
        SortKey("last_name", False),
    ]

def test_desc_applies_to_every_destination_column(registry):
    assert registry.map_fields(AuthorDto, Author, "name desc") == [
        SortKey("first_name", True),
        SortKey("last_name", True),
    ]

def test_revert_flips_direction(registry):
    # Older authors have earlier birth dates
    assert registry.map_fields(AuthorDto, Author, "Age") == [SortKey("date_of_birth", True)]
    assert registry.map_fields(AuthorDto, Author, "Age desc") == [SortKey("date_of_birth", False)]

def test_clause_order_is_preserved(registry):
    sort_keys = registry.map_fields(AuthorDto, Author, "MainCategory desc, Id")
    assert sort_keys == [SortKey("main_category", True), SortKey("id", False)]
    assert describe_sort_keys(sort_keys) == "main_category desc, id asc"

def test_blank_clause_maps_to_no_ordering(registry):
    assert registry.map_fields(AuthorDto, Author, "") == []

# ===== REGISTRY LIFECYCLE =====

def test_unregistered_type_pair_raises():
    registry = PropertyMappingRegistry()
    with pytest.raises(PropertyMappingNotFoundError):
        registry.map_fields(AuthorDto, Course, "Name")

def test_frozen_registry_rejects_registration(registry):
    with pytest.raises(RuntimeError):
        registry.register(AuthorDto, Course, {"Title": mapping_value("title")})

def test_registration_is_case_insensitive():
    registry = PropertyMappingRegistry()
    registry.register(AuthorDto, Author, {"MainCategory": mapping_value("main_category")})
    mapping = registry.get_property_mapping(AuthorDto, Author)
    assert mapping.get("maincategory") == mapping.get("MAINCATEGORY")
    assert mapping.get("MAINCATEGORY").destination_properties == ("main_category",)
    assert mapping.get("Name") is None
