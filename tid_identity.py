#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import itertools
import weakref
from typing import Any, Optional, Tuple

from tid_errors import ForgedTypeError, ImmutableTypeError

# =====================================
# Type identity: tokens and Type objects
# =====================================

_token_serials = itertools.count(1)

# Only create() holds this; Type.__init__ refuses anything else.
_MINT_KEY = object()

# Tokens of every Type built by create(); is_type() accepts nothing else.
_MINTED: "weakref.WeakSet[TypeToken]" = weakref.WeakSet()


class TypeToken:
    """
    Opaque identity marker of a Type.

    Equality and hashing are by object identity; the serial only exists to
    make debug output readable.
    """
    __slots__ = ("serial", "__weakref__")

    def __init__(self):
        self.serial = next(_token_serials)

    def __repr__(self) -> str:
        return f"TypeToken(#{self.serial})"

    def __reduce__(self):
        raise TypeError("type tokens cannot be serialized")


class Type:
    """
    Canonical identity object for a kind of value.

    Two Types are equal iff they carry the same token. The token, and for
    parameterized types the base and the argument tuple, are fixed at
    creation; the display name can be set once. `module`, `path` and
    `constructor` are descriptive metadata and do not take part in identity.
    """
    __slots__ = ("_token", "_name", "_base", "_args", "module", "path", "constructor")

    _FIXED_SLOTS = frozenset({"_token", "_base", "_args"})

    def __init__(self, _mint_key: object = None):
        if _mint_key is not _MINT_KEY:
            raise ForgedTypeError("[IDN-0010] types can only be created through create()")
        object.__setattr__(self, "_token", TypeToken())
        object.__setattr__(self, "_name", None)
        object.__setattr__(self, "_base", None)
        object.__setattr__(self, "_args", None)
        object.__setattr__(self, "module", None)
        object.__setattr__(self, "path", None)
        object.__setattr__(self, "constructor", None)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in self._FIXED_SLOTS:
            raise ImmutableTypeError(f"[IDN-0020] cannot replace '{key}' of type {format_type(self)}")
        if key == "_name" and self._name is not None:
            raise ImmutableTypeError(f"[IDN-0020] type {format_type(self)} is already named")
        object.__setattr__(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise ImmutableTypeError(f"[IDN-0020] cannot delete '{key}' of type {format_type(self)}")

    @property
    def name(self) -> Optional[str]:
        return self._name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return other._token is self._token

    def __hash__(self) -> int:
        return hash(self._token)

    def __repr__(self) -> str:
        return f"<Type {format_type(self)}>"

    # Types are canonical: copies are the original.
    def __copy__(self) -> "Type":
        return self

    def __deepcopy__(self, memo) -> "Type":
        return self

    def __reduce__(self):
        raise TypeError(f"type {format_type(self)} cannot be serialized")


def create() -> Type:
    """
    Allocate a fresh Type with a new, globally unique identity token.
    """
    t = Type(_MINT_KEY)
    _MINTED.add(t._token)
    return t


def create_complex(base: Type, args: Tuple[Type, ...]) -> Type:
    """
    Allocate a fresh parameterized Type with a fixed base and argument tuple.
    Does not intern; see ComplexInterner for the canonical variant.
    """
    t = create()
    object.__setattr__(t, "_base", base)
    object.__setattr__(t, "_args", tuple(args))
    return t


def assign_name(t: Type, name: str) -> None:
    """
    Set the display name of `t`. Renaming to the same name is a no-op.
    """
    if t.name == name:
        return
    t._name = name


def is_type(v: object) -> bool:
    if not isinstance(v, Type):
        return False
    token = getattr(v, "_token", None)
    return isinstance(token, TypeToken) and token in _MINTED


def hash_of(t: Type) -> TypeToken:
    return t._token


def compare(left: Type, right: Type) -> bool:
    return hash_of(left) is hash_of(right)


def name_of(t: Type) -> Optional[str]:
    return t.name


def base_type(t: Type) -> Type:
    """The base of a parameterized type, or the type itself."""
    return t._base if t._base is not None else t


def type_arguments(t: Type) -> Optional[Tuple[Type, ...]]:
    """The ordered arguments of a parameterized type, or None."""
    return t._args


# --- type stringification for debugging ---

def format_type(t: Optional[Type]) -> str:
    if t is None:
        return "<none>"
    elif t.name is not None:
        return t.name
    elif t._args is not None:
        args_str = ", ".join(format_type(a) for a in t._args)
        return f"{format_type(t._base)}<{args_str}>"
    else:
        return f"<anonymous #{t._token.serial}>"
