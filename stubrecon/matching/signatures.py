"""
Equality helpers used when pairing reflective members with documented ones.

All comparisons are erasure-aware: generic arguments are ignored and only base
type names take part, either fully qualified or by their last segment.
"""

from typing import Iterable, Optional, Sequence

from stubrecon.schemas import MethodDescriptor, Parameter, TypeRef


def types_equal(a: TypeRef, b: TypeRef, qualified: bool = True) -> bool:
    return a.equals(b, qualified)


def parameters_equal(a: Sequence[Parameter], b: Sequence[Parameter], qualified: bool = True) -> bool:
    """
    Compare two parameter lists by type only.

    Parameter names are ignored since reflection rarely preserves them.
    """
    if len(a) != len(b):
        return False
    return all(
        types_equal(left.type_ref, right.type_ref, qualified)
        for left, right in zip(a, b)
    )


def methods_equal(a: MethodDescriptor, b: MethodDescriptor, qualified: bool = True) -> bool:
    return a.name == b.name and parameters_equal(a.parameters, b.parameters, qualified)


def find_matching_method(
    bucket: Iterable[MethodDescriptor],
    candidate: MethodDescriptor,
    qualified: bool = True
) -> Optional[MethodDescriptor]:
    """
    Find the overload in ``bucket`` matching ``candidate``'s full signature.

    The bucket is scanned in its given order and the first match wins.

    Args:
        bucket: Same-named documented methods
        candidate: Method built from the reflective signature
        qualified: Compare fully qualified type names

    Returns:
        The matching documented method, or None
    """
    for entry in bucket:
        if methods_equal(entry, candidate, qualified):
            return entry
    return None
