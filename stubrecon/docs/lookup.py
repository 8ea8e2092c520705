"""
Documentation lookup interfaces.

A documentation source maps a class path (``zombie/Lua/LuaManager.html``) to
either a parsed API document or an explicit "no document" result. The
reconciler branches on the two PageLookup variants instead of on None.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Protocol, Union, runtime_checkable

from stubrecon.schemas import FieldDescriptor, MethodDescriptor

# Nested class segment that starts with a digit: anonymous or local class
ANONYMOUS_SEGMENT = re.compile(r'^\d')


class ApiDocument(ABC):
    """A parsed documentation page for one class."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Document name used in diagnostics."""

    @abstractmethod
    def lookup_field(self, name: str) -> Optional[FieldDescriptor]:
        """
        Get the documented field with the given name.

        Raises:
            DetailParsingError: If the field detail section is malformed
        """

    @abstractmethod
    def lookup_methods(self, name: str) -> List[MethodDescriptor]:
        """
        Get all documented overloads with the given name, in page order.

        Raises:
            DetailParsingError: If the method detail section is malformed
        """


@dataclass(frozen=True)
class DocumentFound:
    document: ApiDocument


@dataclass(frozen=True)
class NoDocument:
    reason: str = "no documentation source"


PageLookup = Union[DocumentFound, NoDocument]


@runtime_checkable
class DocumentationSource(Protocol):
    def get_page(self, class_path: str) -> PageLookup:
        """
        Resolve the documentation page for a class path.

        Raises:
            DocumentLookupError: On I/O failure while fetching the page
        """
        ...


def class_path_for(class_name: str) -> str:
    """
    Derive the documentation page path of a class.

    ``zombie.Lua.LuaManager$GlobalObject`` -> ``zombie/Lua/LuaManager.GlobalObject.html``

    Returns an empty string for blank names and for anonymous or local
    classes, which have no documentation page.
    """
    class_name = class_name.strip()
    if not class_name:
        return ""

    package, _, simple_name = class_name.rpartition('.')
    nested = simple_name.split('$')
    if any(not segment or ANONYMOUS_SEGMENT.match(segment) for segment in nested):
        return ""

    page = '.'.join(nested) + '.html'
    if package:
        return package.replace('.', '/') + '/' + page
    return page
