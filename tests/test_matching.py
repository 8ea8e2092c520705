from stubrecon.matching import find_matching_method, methods_equal, parameters_equal
from stubrecon.schemas import MethodDescriptor, Parameter


def sig(name, *types):
    return MethodDescriptor(
        name=name,
        parameters=tuple(Parameter(type=t, name=f"p{i}") for i, t in enumerate(types)),
    )


def test_parameters_compare_types_not_names():
    a = [Parameter(type="int", name="x")]
    b = [Parameter(type="int", name="count")]
    assert parameters_equal(a, b)


def test_parameters_compare_erased_types():
    documented = [Parameter(type="java.util.List<java.lang.String>", name="items")]
    reflected = [Parameter(type="java.util.List", name="arg0")]
    assert parameters_equal(documented, reflected, qualified=True)


def test_parameters_of_different_length_differ():
    assert not parameters_equal([Parameter(type="int")], [Parameter(type="int"), Parameter(type="int")])


def test_qualified_flag_controls_namespace_comparison():
    documented = sig("wrap", "Object")
    reflected = sig("wrap", "java.lang.Object")
    assert not methods_equal(documented, reflected, qualified=True)
    assert methods_equal(documented, reflected, qualified=False)


def test_overload_resolution_uses_full_signature():
    one_arg = sig("f", "a")
    two_args = sig("f", "a", "b")
    candidate = sig("f", "a", "b")
    assert find_matching_method([one_arg, two_args], candidate) is two_args
    assert find_matching_method([two_args, one_arg], candidate) is two_args


def test_first_match_wins():
    first = sig("f", "java.util.List<java.lang.String>")
    second = sig("f", "java.util.List<java.lang.Integer>")
    assert find_matching_method([first, second], sig("f", "java.util.List")) is first


def test_no_match_returns_none():
    assert find_matching_method([sig("f", "int")], sig("f", "float")) is None
    assert find_matching_method([], sig("f")) is None
