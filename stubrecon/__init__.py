"""
stubrecon - reconcile runtime-introspected and documented API members.

Runtime introspection of a scripting binding's exposed classes reports exact
member sets but erases generic type arguments. Hosted reference documentation
keeps the generic arguments but drifts out of date. stubrecon merges the two
into one generics-complete member list per class, with every identifier made
safe for Lua annotation stubs.

Main Components:
- schemas: Type/identifier model and reflective/documented member schemas
- lang: Lua identifier sanitization
- matching: Erasure-aware signature comparison
- reconciler: Member reconciliation and batch compilation
- docs / descriptors: Documentation lookup and class descriptor sources

Usage:
    from pathlib import Path
    from stubrecon import StubCompiler, JsonDescriptorProvider, JsonDocumentationSource

    compiler = StubCompiler(
        JsonDescriptorProvider(Path("exposed.json")),
        docs=JsonDocumentationSource(Path("pages/"))
    )
    result = compiler.compile()
"""

__version__ = "0.1.0"

from .schemas import (
    TypeRef,
    Parameter,
    FieldDescriptor,
    MethodDescriptor,
    ClassDescriptor,
    ReflectedType,
    ReflectedField,
    ReflectedParameter,
    ReflectedMethod,
    ReflectedClass,
    FieldEntry,
    MethodEntry,
    CompilationResult,
    SkippedClass,
)
from .errors import StubReconError, StartupFailure, DetailParsingError, DocumentLookupError
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticCollector
from .docs import DocumentFound, NoDocument, JsonDocumentationSource
from .descriptors import StaticDescriptorProvider, JsonDescriptorProvider
from .reconciler import MemberReconciler, ExclusionList, StubCompiler

__all__ = [
    # Type/identifier model
    "TypeRef",
    "Parameter",
    "FieldDescriptor",
    "MethodDescriptor",
    "ClassDescriptor",

    # Input schemas
    "ReflectedType",
    "ReflectedField",
    "ReflectedParameter",
    "ReflectedMethod",
    "ReflectedClass",
    "FieldEntry",
    "MethodEntry",

    # Output schemas
    "CompilationResult",
    "SkippedClass",

    # Errors and diagnostics
    "StubReconError",
    "StartupFailure",
    "DetailParsingError",
    "DocumentLookupError",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticCollector",

    # Sources
    "DocumentFound",
    "NoDocument",
    "JsonDocumentationSource",
    "StaticDescriptorProvider",
    "JsonDescriptorProvider",

    # Reconciliation
    "MemberReconciler",
    "ExclusionList",
    "StubCompiler",
]
