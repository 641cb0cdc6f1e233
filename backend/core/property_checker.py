# core/property_checker.py
from typing import List, Optional, Type

from core.data_shaping import find_field, split_fields

def missing_properties(dto_type: Type, fields: Optional[str]) -> List[str]:
    """Requested field names that the DTO does not declare."""
    return [token for token in split_fields(fields) if find_field(dto_type, token) is None]

def has_properties(dto_type: Type, fields: Optional[str]) -> bool:
    return not missing_properties(dto_type, fields)
