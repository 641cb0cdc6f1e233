# core/property_mapping.py - Public sort field -> entity column mappings
"""
Maps the public, sortable field names of a DTO onto the columns of the entity
that backs it.

An order-by clause is a comma-separated list of ``fieldName[ asc|desc]``
tokens. A single field may map onto several columns (``Name`` sorts by first
and last name), and a mapping can be flagged ``revert`` when the column sorts
in the opposite direction of the public field (``Age`` ascending is
``date_of_birth`` descending).

The registry is filled once at startup and frozen; after that it is only read.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Type

class PropertyMappingNotFoundError(LookupError):
    """No mapping registered for a (source, destination) type pair."""

class InvalidOrderByError(ValueError):
    """An order-by clause names a field that cannot be mapped."""

    def __init__(self, order_by: str):
        super().__init__(f"Order by clause contains fields that cannot be mapped: {order_by}")
        self.order_by = order_by

@dataclass(frozen=True)
class PropertyMappingValue:
    destination_properties: Tuple[str, ...]
    revert: bool = False

@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False

class PropertyMapping:
    """Case-insensitive, read-only view over one type pair's mappings."""

    def __init__(self, mapping: Mapping[str, PropertyMappingValue]):
        self._mapping = MappingProxyType({name.lower(): value for name, value in mapping.items()})

    def get(self, field_name: str) -> Optional[PropertyMappingValue]:
        return self._mapping.get(field_name.lower())

def _parse_order_by_token(token: str) -> Optional[Tuple[str, bool]]:
    parts = token.split()
    if not parts or len(parts) > 2:
        return None
    if len(parts) == 1:
        return parts[0], False
    direction = parts[1].lower()
    if direction not in ("asc", "desc"):
        return None
    return parts[0], direction == "desc"

class PropertyMappingRegistry:
    def __init__(self):
        self._mappings: Dict[Tuple[type, type], PropertyMapping] = {}
        self._frozen = False

    def register(
        self,
        source: Type,
        destination: Type,
        mapping: Mapping[str, PropertyMappingValue]
    ) -> None:
        if self._frozen:
            raise RuntimeError("Property mappings are read-only once the registry is frozen")
        self._mappings[(source, destination)] = PropertyMapping(mapping)

    def freeze(self) -> "PropertyMappingRegistry":
        self._frozen = True
        return self

    def get_property_mapping(self, source: Type, destination: Type) -> PropertyMapping:
        try:
            return self._mappings[(source, destination)]
        except KeyError:
            raise PropertyMappingNotFoundError(
                f"Cannot find exact property mapping instance for <{source.__name__},{destination.__name__}>"
            ) from None

    def _resolve(
        self,
        source: Type,
        destination: Type,
        order_by: Optional[str]
    ) -> Optional[List[SortKey]]:
        """Sort keys for the clause, or None when any token is unmappable."""
        if order_by is None or not order_by.strip():
            return []

        mapping = self.get_property_mapping(source, destination)
        sort_keys: List[SortKey] = []
        for token in order_by.split(","):
            parsed = _parse_order_by_token(token.strip())
            if parsed is None:
                return None
            field_name, descending = parsed
            value = mapping.get(field_name)
            if value is None:
                return None
            for destination_property in value.destination_properties:
                sort_keys.append(SortKey(destination_property, descending != value.revert))
        return sort_keys

    def valid_mapping_exists(self, source: Type, destination: Type, order_by: Optional[str]) -> bool:
        return self._resolve(source, destination, order_by) is not None

    def map_fields(self, source: Type, destination: Type, order_by: Optional[str]) -> List[SortKey]:
        """
        Resolve an order-by clause into entity sort keys.
        Raises InvalidOrderByError when any token cannot be mapped.
        """
        sort_keys = self._resolve(source, destination, order_by)
        if sort_keys is None:
            raise InvalidOrderByError(order_by)
        return sort_keys

def mapping_value(*destination_properties: str, revert: bool = False) -> PropertyMappingValue:
    return PropertyMappingValue(tuple(destination_properties), revert)

def describe_sort_keys(sort_keys: Sequence[SortKey]) -> str:
    return ", ".join(f"{key.field} {'desc' if key.descending else 'asc'}" for key in sort_keys)
