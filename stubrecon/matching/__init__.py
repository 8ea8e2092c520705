"""Signature matching between reflective and documented members."""

from .signatures import types_equal, parameters_equal, methods_equal, find_matching_method

__all__ = ["types_equal", "parameters_equal", "methods_equal", "find_matching_method"]
