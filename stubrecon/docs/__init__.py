"""Documentation lookup: interfaces and a JSON page implementation."""

from .lookup import (
    ApiDocument,
    DocumentFound,
    NoDocument,
    PageLookup,
    DocumentationSource,
    class_path_for,
)
from .json_source import JsonApiDocument, JsonDocumentationSource

__all__ = [
    "ApiDocument",
    "DocumentFound",
    "NoDocument",
    "PageLookup",
    "DocumentationSource",
    "class_path_for",
    "JsonApiDocument",
    "JsonDocumentationSource",
]
