"""Shared builders for stubrecon tests."""

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest

from stubrecon.diagnostics import DiagnosticCollector
from stubrecon.docs import ApiDocument, DocumentFound, NoDocument, PageLookup
from stubrecon.errors import DetailParsingError, DocumentLookupError
from stubrecon.schemas import (
    FieldDescriptor,
    FieldEntry,
    MethodDescriptor,
    MethodEntry,
    Parameter,
    ReflectedClass,
    ReflectedField,
    ReflectedMethod,
    ReflectedParameter,
    ReflectedType,
)


class FakeDocument(ApiDocument):
    """In-memory API document; ``broken`` names a section that fails to parse."""

    def __init__(self, name: str, fields=(), methods=(), broken: Optional[str] = None):
        self._name = name
        self.fields: Dict[str, FieldDescriptor] = {f.name: f for f in fields}
        self.methods: List[MethodDescriptor] = list(methods)
        self.broken = broken

    @property
    def name(self) -> str:
        return self._name

    def lookup_field(self, name):
        if self.broken == "field":
            raise DetailParsingError(self._name, "field", "unexpected table layout")
        return self.fields.get(name)

    def lookup_methods(self, name):
        if self.broken == "method":
            raise DetailParsingError(self._name, "method", "unexpected table layout")
        return [m for m in self.methods if m.name == name]


class FakeDocumentationSource:
    """Documentation source over a dict of class path -> document."""

    def __init__(self, pages: Dict[str, ApiDocument], failing: tuple = ()):
        self.pages = pages
        self.failing = set(failing)
        self.requested: List[str] = []

    def get_page(self, class_path: str) -> PageLookup:
        self.requested.append(class_path)
        if class_path in self.failing:
            raise DocumentLookupError(class_path, "connection reset")
        if class_path in self.pages:
            return DocumentFound(self.pages[class_path])
        return NoDocument(f"no page for {class_path}")


def generic(name: str, *params: str) -> ReflectedType:
    return ReflectedType(name=name, type_parameters=list(params))


def field(name: str, type_: ReflectedType, modifiers=("public",), synthetic=False) -> ReflectedField:
    return ReflectedField(name=name, type=type_, modifiers=list(modifiers), synthetic=synthetic)


def method(name: str, *param_types: str, returns: str = "void", synthetic=False) -> ReflectedMethod:
    return ReflectedMethod(
        name=name,
        parameters=[ReflectedParameter(type=ReflectedType(name=t), name=f"arg{i}") for i, t in enumerate(param_types)],
        return_type=ReflectedType(name=returns),
        modifiers=["public"],
        synthetic=synthetic,
    )


def doc_field(name: str, type_text: str, modifiers=()) -> FieldDescriptor:
    return FieldEntry(name=name, type=type_text, modifiers=list(modifiers)).to_descriptor()


def doc_method(name: str, *params, returns: str = "void") -> MethodDescriptor:
    """Build a documented method from (type, name) pairs."""
    return MethodEntry(
        name=name,
        parameters=[Parameter(type=t, name=n) for t, n in params],
        return_type=returns,
        modifiers=["public"],
    ).to_descriptor()


@pytest.fixture
def collector():
    return DiagnosticCollector(forward=None)


@pytest.fixture
def builders():
    """Expose the builder helpers to test modules."""
    return SimpleNamespace(
        generic=generic,
        field=field,
        method=method,
        doc_field=doc_field,
        doc_method=doc_method,
        document=FakeDocument,
        source=FakeDocumentationSource,
        reflected_class=ReflectedClass,
    )
