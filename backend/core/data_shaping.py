# core/data_shaping.py - Sparse field projection of response DTOs
"""
Data shaping: reduce a DTO to the fields a caller asked for with
``?fields=id,name``.

Every DTO type gets a field registry, built once per type from its declared
fields: public (wire) name plus the attribute to read. Lookup is
case-insensitive, output keys keep the declared public name.
"""
import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from pydantic import BaseModel

@dataclass(frozen=True)
class ProjectableField:
    name: str
    attribute: str

    def read(self, source: Any) -> Any:
        return getattr(source, self.attribute)

class UnknownFieldError(KeyError):
    def __init__(self, field_name: str, dto_type: Type):
        super().__init__(f"Property {field_name} wasn't found on {dto_type.__name__}")
        self.field_name = field_name
        self.dto_type = dto_type

@lru_cache(maxsize=None)
def projectable_fields(dto_type: Type) -> Tuple[ProjectableField, ...]:
    """Declared fields of a pydantic model or dataclass, in declaration order."""
    if isinstance(dto_type, type) and issubclass(dto_type, BaseModel):
        return tuple(
            ProjectableField(info.alias or attribute, attribute)
            for attribute, info in dto_type.model_fields.items()
        )
    if dataclasses.is_dataclass(dto_type):
        return tuple(ProjectableField(f.name, f.name) for f in dataclasses.fields(dto_type))
    raise TypeError(f"{dto_type!r} does not declare projectable fields")

@lru_cache(maxsize=None)
def _field_lookup(dto_type: Type) -> Dict[str, ProjectableField]:
    return {field.name.lower(): field for field in projectable_fields(dto_type)}

def find_field(dto_type: Type, field_name: str) -> Optional[ProjectableField]:
    return _field_lookup(dto_type).get(field_name.strip().lower())

def split_fields(fields: Optional[str]) -> List[str]:
    """Comma-separated field list -> trimmed tokens; blank input -> []"""
    if fields is None or not fields.strip():
        return []
    return [token.strip() for token in fields.split(",")]

def resolve_fields(dto_type: Type, fields: Optional[str]) -> Tuple[ProjectableField, ...]:
    tokens = split_fields(fields)
    if not tokens:
        return projectable_fields(dto_type)

    resolved = []
    for token in tokens:
        field = find_field(dto_type, token)
        if field is None:
            raise UnknownFieldError(token, dto_type)
        resolved.append(field)
    return tuple(resolved)

def _project(source: Any, selected: Iterable[ProjectableField]) -> Dict[str, Any]:
    return {field.name: field.read(source) for field in selected}

def shape(source: Any, fields: Optional[str] = None) -> Dict[str, Any]:
    """
    Project ``source`` onto the requested fields, in requested order.
    No fields means every declared field in declaration order. Field names are
    expected to have been checked with core.property_checker beforehand.
    """
    return _project(source, resolve_fields(type(source), fields))

def shape_collection(sources: Iterable[Any], fields: Optional[str] = None) -> List[Dict[str, Any]]:
    sources = list(sources)
    if not sources:
        return []
    selected = resolve_fields(type(sources[0]), fields)
    return [_project(source, selected) for source in sources]
