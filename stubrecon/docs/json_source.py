"""
Documentation source backed by pre-parsed JSON pages.

Each class page lives at ``<root>/<class path>.json`` with the structure:

    {
      "name": "LuaManager",
      "fields": [{"name": "table", "type": "java.util.Map<java.lang.String, int>", "modifiers": ["public"]}],
      "methods": [
        {
          "name": "bar",
          "parameters": [{"type": "string", "name": "end"}],
          "return_type": "void",
          "modifiers": ["public"]
        }
      ]
    }

Detail sections are validated lazily, on first lookup, so a malformed section
only fails the class that needs it.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from pydantic import TypeAdapter

from stubrecon.docs.lookup import ApiDocument, DocumentFound, NoDocument, PageLookup
from stubrecon.errors import DetailParsingError, DocumentLookupError
from stubrecon.schemas import FieldDescriptor, FieldEntry, MethodDescriptor, MethodEntry

logger = logging.getLogger(__name__)

FIELD_ENTRIES = TypeAdapter(List[FieldEntry])
METHOD_ENTRIES = TypeAdapter(List[MethodEntry])


class JsonApiDocument(ApiDocument):
    """API document built from one JSON page."""

    def __init__(self, name: str, data: Dict[str, Any]):
        self._name = name
        self._data = data
        self._fields: Optional[Dict[str, FieldDescriptor]] = None
        self._methods: Optional[Dict[str, List[MethodDescriptor]]] = None

    @property
    def name(self) -> str:
        return self._name

    def _field_detail(self) -> Dict[str, FieldDescriptor]:
        if self._fields is None:
            try:
                entries = FIELD_ENTRIES.validate_python(self._data.get("fields", []))
                fields: Dict[str, FieldDescriptor] = {}
                for entry in entries:
                    fields.setdefault(entry.name, entry.to_descriptor())
            except ValueError as e:
                raise DetailParsingError(self._name, "field", str(e)) from e
            self._fields = fields
        return self._fields

    def _method_detail(self) -> Dict[str, List[MethodDescriptor]]:
        if self._methods is None:
            try:
                entries = METHOD_ENTRIES.validate_python(self._data.get("methods", []))
                methods: Dict[str, List[MethodDescriptor]] = {}
                for entry in entries:
                    methods.setdefault(entry.name, []).append(entry.to_descriptor())
            except ValueError as e:
                raise DetailParsingError(self._name, "method", str(e)) from e
            self._methods = methods
        return self._methods

    def lookup_field(self, name: str) -> Optional[FieldDescriptor]:
        return self._field_detail().get(name)

    def lookup_methods(self, name: str) -> List[MethodDescriptor]:
        return list(self._method_detail().get(name, []))


class JsonDocumentationSource:
    """
    Resolve class paths to JSON pages under a root directory.

    Example:
        >>> source = JsonDocumentationSource(Path("docs/pages"))
        >>> page = source.get_page("zombie/Lua/LuaManager.html")
    """

    def __init__(self, root: Path):
        """
        Initialize the documentation source.

        Args:
            root: Directory holding the JSON pages
        """
        self.root = Path(root)
        self._cache: Dict[str, PageLookup] = {}
        self._lock = threading.Lock()

        if not self.root.is_dir():
            logger.warning(f"Documentation directory not found: {self.root}")

    def page_file(self, class_path: str) -> Path:
        return self.root / Path(class_path).with_suffix(".json")

    def get_page(self, class_path: str) -> PageLookup:
        with self._lock:
            cached = self._cache.get(class_path)
        if cached is not None:
            return cached

        page = self._load_page(class_path)
        with self._lock:
            self._cache[class_path] = page
        return page

    def _load_page(self, class_path: str) -> PageLookup:
        page_file = self.page_file(class_path)
        if not page_file.is_file():
            logger.debug(f"No documentation page at {page_file}")
            return NoDocument(f"no page for {class_path}")

        try:
            data = json.loads(page_file.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLookupError(class_path, str(e)) from e
        except json.JSONDecodeError as e:
            raise DocumentLookupError(class_path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise DocumentLookupError(class_path, "page is not a JSON object")

        name = data.get("name") or Path(class_path).stem
        logger.debug(f"Loaded documentation page {name} from {page_file}")
        return DocumentFound(JsonApiDocument(name, data))
