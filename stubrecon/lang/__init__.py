"""Target scripting language rules (identifier safety, type aliases)."""

from .lua import (
    RESERVED_KEYWORDS,
    BUILT_IN_TYPES,
    is_reserved_keyword,
    is_built_in_type,
    safe_type,
    safe_identifier,
    safe,
    remove_qualifier,
)

__all__ = [
    "RESERVED_KEYWORDS",
    "BUILT_IN_TYPES",
    "is_reserved_keyword",
    "is_built_in_type",
    "safe_type",
    "safe_identifier",
    "safe",
    "remove_qualifier",
]
