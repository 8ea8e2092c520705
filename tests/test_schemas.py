import pytest
from pydantic import ValidationError

from stubrecon.schemas import (
    ClassDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    MethodEntry,
    Parameter,
    ReflectedField,
    ReflectedMethod,
    TypeRef,
)


class TestParameter:

    def test_construction_trims_and_sanitizes(self):
        param = Parameter(type=" String ", name=" end ")
        assert param.type == "string"
        assert param.name == "_end"
        assert str(param) == "string _end"

    def test_qualified_and_unqualified_views(self):
        param = Parameter(type="java.util.List<java.lang.Integer>", name="items")
        assert param.get_type(qualified=True) == "java.util.List<java.lang.Integer>"
        assert param.get_type(qualified=False) == "List<Integer>"
        assert param.get_name(qualified=False) == "items"
        # projections do not touch stored state
        assert param.type == "java.util.List<java.lang.Integer>"

    def test_unqualified_copy_is_sanitized_again(self):
        param = Parameter(type="java.lang.String", name="value")
        assert param.unqualified() == Parameter(type="string", name="value")

    def test_empty_type_is_rejected(self):
        with pytest.raises(ValidationError):
            Parameter(type="  ", name="x")

    def test_type_without_base_name_is_rejected(self):
        with pytest.raises(ValidationError):
            Parameter(type="<T>", name="x")

    def test_nested_built_in_arguments_are_lower_cased(self):
        param = Parameter(type="java.util.List<String>", name="items")
        assert param.type == "java.util.List<string>"
        assert param.type == str(TypeRef.parse("java.util.List<String>"))

    def test_parameters_are_hashable(self):
        assert len({Parameter(type="int", name="a"), Parameter(type="int", name="a")}) == 1


class TestTypeRef:

    def test_parse_nested_generics(self):
        ref = TypeRef.parse("java.util.Map<java.lang.String, java.util.List<int>>")
        assert ref.name == "java.util.Map"
        assert [a.name for a in ref.arguments] == ["java.lang.String", "java.util.List"]
        assert ref.arguments[1].arguments == (TypeRef(name="int"),)
        assert str(ref) == "java.util.Map<java.lang.String, java.util.List<int>>"

    def test_parse_plain_and_diamond(self):
        assert TypeRef.parse(" int ") == TypeRef(name="int")
        assert TypeRef.parse("Map<>") == TypeRef(name="Map")

    def test_parse_sanitizes_built_in_names(self):
        assert str(TypeRef.parse("Map<String,int>")) == "Map<string, int>"

    def test_parse_rejects_empty_text(self):
        with pytest.raises(ValueError):
            TypeRef.parse("   ")

    @pytest.mark.parametrize("text", ["<T>", " <K, V>", "Map<<T>>"])
    def test_parse_rejects_missing_base_name(self, text):
        with pytest.raises(ValueError):
            TypeRef.parse(text)

    def test_unqualified_projection(self):
        ref = TypeRef.parse("java.util.Map<java.lang.String, java.util.List<int>>")
        assert str(ref.unqualified()) == "Map<string, List<int>>"
        assert ref.get_name(qualified=False) == "Map"

    def test_erasure_drops_arguments(self):
        ref = TypeRef.parse("java.util.Map<K, V>")
        assert ref.is_parameterized
        assert ref.erasure() == TypeRef(name="java.util.Map")
        assert not ref.erasure().is_parameterized

    def test_equality_modes(self):
        qualified = TypeRef(name="java.util.Map")
        short = TypeRef(name="Map")
        assert not qualified.equals(short, qualified=True)
        assert qualified.equals(short, qualified=False)
        assert TypeRef.parse("java.util.Map<K, V>").equals(qualified, qualified=True)
        assert not qualified.equals(TypeRef(name="java.util.HashMap"), qualified=False)


class TestDescriptors:

    def test_modifiers_are_normalized(self):
        f = FieldDescriptor(name="x", type=TypeRef(name="int"), modifiers=["Static", "public", "static"])
        assert f.modifiers == ("public", "static")
        assert f.with_modifiers("final private").modifiers == ("final", "private")

    def test_method_signature_key(self):
        m = MethodDescriptor(
            name="bar",
            parameters=(Parameter(type="String", name="s"), Parameter(type="int", name="n")),
        )
        assert m.signature_key() == ("bar", ("string", "int"))
        assert str(m) == "void bar(string s, int n)"

    def test_class_rejects_duplicate_fields(self):
        f = FieldDescriptor(name="x", type=TypeRef(name="int"))
        with pytest.raises(ValidationError):
            ClassDescriptor(name="Foo", fields=(f, f))

    def test_class_rejects_duplicate_signatures(self):
        m = MethodDescriptor(name="bar", parameters=(Parameter(type="int", name="a"),))
        other = MethodDescriptor(name="bar", parameters=(Parameter(type="int", name="b"),))
        with pytest.raises(ValidationError):
            ClassDescriptor(name="Foo", methods=(m, other))

    def test_class_lookup_helpers(self):
        cls = ClassDescriptor(
            name="Foo",
            fields=(FieldDescriptor(name="x", type=TypeRef(name="int")),),
            methods=(MethodDescriptor(name="bar"), MethodDescriptor(name="bar", parameters=(Parameter(type="int"),))),
        )
        assert cls.get_field("x").type.name == "int"
        assert cls.get_field("y") is None
        assert len(cls.get_methods("bar")) == 2


class TestInputSchemas:

    def test_reflected_type_accepts_plain_name(self):
        f = ReflectedField.model_validate({"name": "count", "type": "int"})
        assert f.type.name == "int"
        assert not f.type.is_generic
        assert f.to_descriptor() == FieldDescriptor(name="count", type=TypeRef(name="int"))

    def test_reflected_method_descriptor(self):
        m = ReflectedMethod.model_validate({
            "name": "put",
            "parameters": [{"type": "java.lang.Object", "name": "end"}],
            "return_type": "Boolean",
            "modifiers": ["public"],
        })
        descriptor = m.to_descriptor()
        assert descriptor.parameters == (Parameter(type="java.lang.Object", name="_end"),)
        assert descriptor.return_type == TypeRef(name="boolean")

    def test_method_entry_descriptor(self):
        entry = MethodEntry(
            name="get",
            parameters=[Parameter(type="java.lang.String", name="key")],
            return_type="java.util.List<java.lang.Integer>",
        )
        descriptor = entry.to_descriptor()
        assert str(descriptor.return_type) == "java.util.List<java.lang.Integer>"
        assert descriptor.return_type.is_parameterized
