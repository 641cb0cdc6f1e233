# core/media_types.py - Accept / Content-Type media type parsing
"""
Parsing of a single media type such as
``application/vnd.marvin.author.full.hateoas+json; charset=utf-8``.

Whether links are wanted is decided in one place, ``ParsedMediaType.includes_links``:
the subtype without its ``+suffix`` has to end in ``hateoas``.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

HATEOAS_MARKER = "hateoas"

_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

class InvalidMediaTypeError(ValueError):
    def __init__(self, value: Optional[str]):
        super().__init__(f"'{value}' is not a valid media type")
        self.value = value

@dataclass(frozen=True)
class ParsedMediaType:
    type: str
    subtype: str
    parameters: Dict[str, str] = field(default_factory=dict)

    @property
    def media_type(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def subtype_without_suffix(self) -> str:
        return self.subtype.rsplit("+", 1)[0]

    @property
    def includes_links(self) -> bool:
        return self.subtype_without_suffix.lower().endswith(HATEOAS_MARKER)

    @property
    def primary_subtype(self) -> str:
        """Subtype without suffix and without a trailing ``.hateoas`` marker"""
        subtype = self.subtype_without_suffix
        if self.includes_links:
            subtype = subtype[: -len(HATEOAS_MARKER)].rstrip(".")
        return subtype

    @property
    def is_wildcard(self) -> bool:
        return self.subtype == "*"

    def matches(self, media_type: str) -> bool:
        return self.media_type.lower() == media_type.lower()

def parse_media_type(value: Optional[str]) -> ParsedMediaType:
    """
    Parse one media type. For an Accept header listing several media ranges
    the first one is used. Raises InvalidMediaTypeError on malformed input.
    """
    if value is None or not value.strip():
        raise InvalidMediaTypeError(value)

    first_range = value.split(",", 1)[0]
    essence, *raw_parameters = first_range.split(";")
    if essence.count("/") != 1:
        raise InvalidMediaTypeError(value)

    type_, subtype = (part.strip() for part in essence.split("/"))
    if not _TOKEN.match(type_) or not _TOKEN.match(subtype):
        raise InvalidMediaTypeError(value)
    if type_ == "*" and subtype != "*":
        raise InvalidMediaTypeError(value)

    parameters: Dict[str, str] = {}
    for raw in raw_parameters:
        name, sep, param_value = raw.partition("=")
        name = name.strip()
        if not sep or not _TOKEN.match(name):
            raise InvalidMediaTypeError(value)
        parameters[name.lower()] = param_value.strip().strip('"')

    return ParsedMediaType(type_.lower(), subtype.lower(), parameters)

def vendor_media_type(vendor: str, name: str) -> str:
    """application/vnd.<vendor>.<name>+json"""
    return f"application/vnd.{vendor}.{name}+json"
