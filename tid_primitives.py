#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from typing import Dict, Optional

# ========================================
# The fixed primitive seed list.
# ========================================

# primitive key -> display name of its named type
PRIMITIVE_NAMES: Dict[str, str] = {
    "string": "String",
    "number": "Number",
    "bigint": "Bigint",
    "boolean": "Boolean",
    "undefined": "Undefined",
    "symbol": "Symbol",
    "array": "Array",
    "object": "Object",
    "function": "Function",
    "unknown": "unknown",
    "type": "Type",
    "void": "void",
}

# Builtin constructors standing for a primitive kind.
BUILTIN_CONSTRUCTORS: Dict[type, str] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    list: "array",
    tuple: "array",
    dict: "object",
    object: "object",
    type: "function",
}

# Builtin values, classified by their exact class.
_VALUE_KINDS: Dict[type, str] = {
    type(None): "undefined",
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    tuple: "array",
    dict: "object",
}


def primitive_kind(v: object) -> Optional[str]:
    """
    Primitive key of a builtin value, or None for anything else.

    Matching is on the exact class, so subclasses of the builtins are
    treated as ordinary class instances.
    """
    return _VALUE_KINDS.get(type(v))


def constructor_kind(cls: object) -> Optional[str]:
    """Primitive key of a builtin constructor such as `str` or `list`."""
    try:
        return BUILTIN_CONSTRUCTORS.get(cls)
    except TypeError:
        # unhashable callables
        return None
