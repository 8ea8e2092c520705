"""
Lua identifier rules for generated stubs.

Every type name and parameter name that ends up in an annotation stub passes
through these helpers. They are pure and idempotent: applying one twice gives
the same result as applying it once.
"""

import re
from typing import FrozenSet


# Lua 5.x reserved words; none of these may be used as a parameter name
RESERVED_KEYWORDS: FrozenSet[str] = frozenset({
    'and', 'break', 'do', 'else', 'elseif', 'end',
    'false', 'for', 'function', 'goto', 'if', 'in',
    'local', 'nil', 'not', 'or', 'repeat', 'return',
    'then', 'true', 'until', 'while',
})

# EmmyLua built-in annotation types (always written lower-case)
BUILT_IN_TYPES: FrozenSet[str] = frozenset({
    'any', 'boolean', 'function', 'nil', 'number', 'self',
    'string', 'table', 'thread', 'userdata', 'void',
})

KEYWORD_PREFIX = '_'

# Matches one or more "namespace." segments directly in front of an identifier
QUALIFIER_PATTERN = re.compile(r'(?<![\w$])(?:[A-Za-z_$][\w$]*\.)+(?=[A-Za-z_$])')


def is_reserved_keyword(text: str) -> bool:
    return text in RESERVED_KEYWORDS


def is_built_in_type(text: str) -> bool:
    return text.lower() in BUILT_IN_TYPES


def safe_type(text: str) -> str:
    """
    Normalize a type name for EmmyLua annotations.

    Built-in type aliases are lower-cased (``String`` -> ``string``),
    everything else is returned trimmed but otherwise untouched.
    """
    text = text.strip()
    if is_built_in_type(text):
        return text.lower()
    return text


def safe_identifier(text: str) -> str:
    """
    Rewrite an identifier that collides with a Lua reserved keyword.

    ``end`` becomes ``_end``. The rewritten form is never itself a keyword,
    so the function is idempotent.
    """
    text = text.strip()
    if is_reserved_keyword(text):
        return KEYWORD_PREFIX + text
    return text


def safe(text: str) -> str:
    """
    Apply both type and identifier sanitization.

    Parameter types and names are sanitized separately inside the package;
    this composition is for stub emitters writing identifiers that may be
    either, such as global or table names.
    """
    return safe_identifier(safe_type(text))


def remove_qualifier(text: str) -> str:
    """
    Strip namespace qualifiers from every identifier in a type text.

    Example:
        >>> remove_qualifier("java.util.Map<java.lang.String, int>")
        'Map<String, int>'
    """
    return QUALIFIER_PATTERN.sub('', text)
