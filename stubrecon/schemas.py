"""
Pydantic schemas for stubrecon.

This module is the single source of truth for the data models shared by the
descriptor sources, the documentation lookup, the member reconciler and the
compiler output.

Architecture:
- Reflected*: raw member data reported by runtime introspection (erased types)
- FieldEntry / MethodEntry: member data recovered from documentation text
- TypeRef / Parameter / FieldDescriptor / MethodDescriptor: the normalized,
  sanitized type/identifier model
- ClassDescriptor: merged, immutable member lists for one class
- CompilationResult: everything a stub emitter needs for a run
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Tuple, Optional, Iterable, Any

from stubrecon.lang import safe_type, safe_identifier, remove_qualifier


def normalize_modifiers(value: Any) -> Tuple[str, ...]:
    """Turn a modifier list (or space separated string) into a sorted unique tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split()
    return tuple(sorted({str(m).strip().lower() for m in value if str(m).strip()}))


def split_type_arguments(text: str) -> List[str]:
    """Split generic argument text on top-level commas only."""
    arguments = []
    depth = 0
    current = []
    for char in text:
        if char == '<':
            depth += 1
        elif char == '>':
            depth -= 1
        if char == ',' and depth == 0:
            arguments.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
    arguments.append(''.join(current).strip())
    return [arg for arg in arguments if arg]


# ============================================================================
# TYPE / IDENTIFIER MODEL
# ============================================================================

class TypeRef(BaseModel):
    """
    A (possibly parameterized) type reference.

    ``name`` is the qualified base name. Types observed through reflection
    never carry ``arguments``; types parsed from documentation may.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Qualified base name, e.g. 'java.util.Map'")
    arguments: Tuple["TypeRef", ...] = Field(
        default=(),
        description="Generic type arguments, empty when erased or not generic"
    )

    @field_validator('name', mode='before')
    @classmethod
    def sanitize_name(cls, v):
        return safe_type(str(v))

    @classmethod
    def parse(cls, text: str) -> "TypeRef":
        """
        Parse type text such as ``java.util.Map<java.lang.String, int>``.

        Bounds and wildcards are not modelled; text that does not end in a
        closing bracket is kept whole as the type name.
        """
        text = text.strip()
        if not text:
            raise ValueError("Cannot parse empty type text")

        start = text.find('<')
        if start == -1 or not text.endswith('>'):
            return cls(name=text)

        name = text[:start].strip()
        if not name:
            raise ValueError(f"Missing base type name in type text {text!r}")

        arguments = split_type_arguments(text[start + 1:-1])
        return cls(
            name=name,
            arguments=tuple(cls.parse(arg) for arg in arguments)
        )

    @property
    def is_parameterized(self) -> bool:
        return len(self.arguments) > 0

    def get_name(self, qualified: bool = True) -> str:
        return self.name if qualified else remove_qualifier(self.name)

    def unqualified(self) -> "TypeRef":
        return TypeRef(
            name=remove_qualifier(self.name),
            arguments=tuple(arg.unqualified() for arg in self.arguments)
        )

    def erasure(self) -> "TypeRef":
        """Same base type with the generic argument list left empty."""
        return TypeRef(name=self.name)

    def equals(self, other: "TypeRef", qualified: bool = True) -> bool:
        """
        Erasure-aware equality.

        Only base names are compared: fully when ``qualified``, by last
        namespace segment otherwise. Generic arguments are ignored because
        one side of a comparison usually comes from reflection.
        """
        if not isinstance(other, TypeRef):
            return False
        return self.get_name(qualified) == other.get_name(qualified)

    def __str__(self) -> str:
        if not self.arguments:
            return self.name
        return f"{self.name}<{', '.join(str(arg) for arg in self.arguments)}>"


TypeRef.model_rebuild()


class Parameter(BaseModel):
    """
    Method parameter with sanitized type and name text.

    Type text is normalized the way TypeRef renders it, so built-in aliases are
    lower-cased at every nesting level. Names that collide with Lua keywords
    are rewritten. Both happen at construction time.
    """
    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1, description="Qualified parameter type text")
    name: str = Field(default="", description="Parameter name")

    @field_validator('type', mode='before')
    @classmethod
    def sanitize_type(cls, v):
        text = str(v).strip()
        if not text:
            return text
        # same normalization as TypeRef, nested arguments included
        return str(TypeRef.parse(text))

    @field_validator('name', mode='before')
    @classmethod
    def sanitize_name(cls, v):
        return safe_identifier(str(v))

    def get_type(self, qualified: bool = True) -> str:
        return self.type if qualified else remove_qualifier(self.type)

    def get_name(self, qualified: bool = True) -> str:
        return self.name if qualified else remove_qualifier(self.name)

    def unqualified(self) -> "Parameter":
        return Parameter(type=self.get_type(False), name=self.get_name(False))

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef.parse(self.type)

    def __str__(self) -> str:
        return f"{self.type} {self.name}".strip()


class FieldDescriptor(BaseModel):
    """A resolved class field."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Field name")
    type: TypeRef = Field(description="Field type")
    modifiers: Tuple[str, ...] = Field(default=(), description="Modifier keywords")

    @field_validator('modifiers', mode='before')
    @classmethod
    def sort_modifiers(cls, v):
        return normalize_modifiers(v)

    def with_modifiers(self, modifiers: Iterable[str]) -> "FieldDescriptor":
        return self.model_copy(update={"modifiers": normalize_modifiers(modifiers)})

    def __str__(self) -> str:
        return f"{self.type} {self.name}"


class MethodDescriptor(BaseModel):
    """A resolved class method. Overloads are told apart by parameter types."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Method name")
    parameters: Tuple[Parameter, ...] = Field(default=(), description="Ordered parameters")
    return_type: TypeRef = Field(default=TypeRef(name="void"), description="Return type")
    modifiers: Tuple[str, ...] = Field(default=(), description="Modifier keywords")

    @field_validator('modifiers', mode='before')
    @classmethod
    def sort_modifiers(cls, v):
        return normalize_modifiers(v)

    def signature_key(self, qualified: bool = True) -> Tuple[str, Tuple[str, ...]]:
        return self.name, tuple(p.get_type(qualified) for p in self.parameters)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.return_type} {self.name}({params})"


class ClassDescriptor(BaseModel):
    """Merged member lists of one exposed class. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Fully qualified class name")
    modifiers: Tuple[str, ...] = Field(default=(), description="Class modifier keywords")
    fields: Tuple[FieldDescriptor, ...] = Field(default=(), description="Fields, unique by name")
    methods: Tuple[MethodDescriptor, ...] = Field(default=(), description="Methods, unique by signature")

    @field_validator('modifiers', mode='before')
    @classmethod
    def sort_modifiers(cls, v):
        return normalize_modifiers(v)

    @model_validator(mode='after')
    def check_unique_members(self):
        field_names = [f.name for f in self.fields]
        if len(field_names) != len(set(field_names)):
            raise ValueError(f"Duplicate field names in class {self.name}")

        signatures = [m.signature_key() for m in self.methods]
        if len(signatures) != len(set(signatures)):
            raise ValueError(f"Duplicate method signatures in class {self.name}")
        return self

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        return next((f for f in self.fields if f.name == name), None)

    def get_methods(self, name: str) -> List[MethodDescriptor]:
        return [m for m in self.methods if m.name == name]


# ============================================================================
# REFLECTIVE INPUT SCHEMAS
# ============================================================================

class ReflectedType(BaseModel):
    """Type as seen through runtime introspection (generic arguments erased)."""
    name: str = Field(min_length=1, description="Qualified class name")
    type_parameters: List[str] = Field(
        default_factory=list,
        description="Type variables declared by the class, e.g. ['K', 'V'] for Map"
    )

    @model_validator(mode='before')
    @classmethod
    def accept_plain_name(cls, data):
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator('name')
    @classmethod
    def check_type_text(cls, v: str) -> str:
        v = v.strip()
        # raises on blank or unparseable text
        TypeRef.parse(v)
        return v

    @property
    def is_generic(self) -> bool:
        return len(self.type_parameters) > 0

    def to_type(self) -> TypeRef:
        """Erased type reference; for a generic class this is the placeholder."""
        return TypeRef(name=self.name)


class ReflectedField(BaseModel):
    name: str = Field(min_length=1)
    type: ReflectedType
    modifiers: List[str] = Field(default_factory=list)
    synthetic: bool = Field(default=False, description="Generated by the compiler")

    def to_descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(name=self.name, type=self.type.to_type(), modifiers=self.modifiers)


class ReflectedParameter(BaseModel):
    type: ReflectedType
    name: str = ""


class ReflectedMethod(BaseModel):
    name: str = Field(min_length=1)
    parameters: List[ReflectedParameter] = Field(default_factory=list)
    return_type: ReflectedType = Field(default_factory=lambda: ReflectedType(name="void"))
    modifiers: List[str] = Field(default_factory=list)
    synthetic: bool = Field(default=False, description="Generated by the compiler")

    def to_descriptor(self) -> MethodDescriptor:
        return MethodDescriptor(
            name=self.name,
            parameters=tuple(Parameter(type=p.type.name, name=p.name) for p in self.parameters),
            return_type=self.return_type.to_type(),
            modifiers=self.modifiers
        )


class ReflectedClass(BaseModel):
    """Raw member data for one exposed class, as a descriptor source reports it."""
    name: str = Field(min_length=1, description="Fully qualified (binary) class name")
    modifiers: List[str] = Field(default_factory=list)
    fields: List[ReflectedField] = Field(default_factory=list)
    methods: List[ReflectedMethod] = Field(default_factory=list)


# ============================================================================
# DOCUMENTATION ENTRY SCHEMAS
# ============================================================================

class FieldEntry(BaseModel):
    """Field detail as written in documentation."""
    name: str
    type: str = Field(description="Type text, may include generic arguments")
    modifiers: List[str] = Field(default_factory=list)

    def to_descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(name=self.name, type=TypeRef.parse(self.type), modifiers=self.modifiers)


class MethodEntry(BaseModel):
    """Method detail as written in documentation."""
    name: str
    parameters: List[Parameter] = Field(default_factory=list)
    return_type: str = "void"
    modifiers: List[str] = Field(default_factory=list)

    def to_descriptor(self) -> MethodDescriptor:
        return MethodDescriptor(
            name=self.name,
            parameters=tuple(self.parameters),
            return_type=TypeRef.parse(self.return_type),
            modifiers=self.modifiers
        )


# ============================================================================
# OUTPUT SCHEMAS
# ============================================================================

class SkippedClass(BaseModel):
    name: str = Field(description="Class that produced no output")
    reason: str = Field(description="Why it was skipped")


class CompilationResult(BaseModel):
    """Result of one compiler run, handed to the stub emitter."""
    classes: List[ClassDescriptor] = Field(default_factory=list, description="Merged classes")
    excluded: List[str] = Field(default_factory=list, description="Classes removed by exclusions")
    skipped: List[SkippedClass] = Field(default_factory=list, description="Classes skipped on errors")
    unused_exclusions: List[str] = Field(
        default_factory=list,
        description="Exclusion entries that never matched an exposed class"
    )
    total: int = Field(default=0, description="Number of exposed classes processed")

    @property
    def class_names(self) -> List[str]:
        return [c.name for c in self.classes]

    def get_class(self, name: str) -> Optional[ClassDescriptor]:
        return next((c for c in self.classes if c.name == name), None)
