#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import inspect
from typing import Any, Callable, Optional, Sequence, TypeVar

from tid_cache import ValueTypeCache
from tid_context import RegistryContext
from tid_errors import InvalidReferenceError, RegistrationError
from tid_identity import Type, create, is_type, base_type, format_type
from tid_interner import ComplexInterner
from tid_logger import log_event, LogLevel
from tid_names import NameTable
from tid_parser import TypeNameParser
from tid_primitives import primitive_kind, constructor_kind

# Attribute through which a value can expose its own Type.
TYPED_ATTRIBUTE = "__type_identity__"

C = TypeVar("C")
# a type name, a Type, a typed value, a class or a function
Reference = Any


def is_class(v: object) -> bool:
    return inspect.isclass(v)


def is_typed(v: object) -> bool:
    return not is_class(v) and is_type(getattr(v, TYPED_ATTRIBUTE, None))


def _is_function(v: object) -> bool:
    return inspect.isfunction(v) or inspect.isbuiltin(v)


def _declared_name(v: object) -> Optional[str]:
    """
    The declared name of a class or function, if it has a usable one.

    Generated names such as "<lambda>" are not usable. For definitions in a
    local scope only the part after the last "<locals>." is kept.
    """
    name = getattr(v, "__qualname__", None) or getattr(v, "__name__", None)
    if not isinstance(name, str):
        return None
    if "<locals>." in name:
        name = name.rsplit("<locals>.", 1)[1]
    if not name or name.startswith("<"):
        return None
    return name


class TypeRegistry:
    """
    Runtime type-identity registry.

    Owns one NameTable, one ComplexInterner and one ValueTypeCache; every
    Type it hands out is canonical within the registry:

      - type(ref)       normalizes a name, Type, typed value or class
      - type_of(value)  classifies an arbitrary runtime value
      - complex(b, as)  canonical parameterized type
      - register(name)  class decorator binding a class to a named type

    The primitive types are available as attributes (`String`, `Number`,
    `Array`, ...) and through `primitive(key)`.
    """

    def __init__(self, context: Optional[RegistryContext] = None):
        self.context = context or RegistryContext.default()
        self.names = NameTable(self.context)
        self.interner = ComplexInterner(self.names, self.context)
        self.parser = TypeNameParser(self.names, self.interner, self.context)
        self.cache = ValueTypeCache(self.context)

        p = self.names.primitives
        self.String = p["string"]
        self.Number = p["number"]
        self.Bigint = p["bigint"]
        self.Boolean = p["boolean"]
        self.Undefined = p["undefined"]
        self.Symbol = p["symbol"]
        self.Array = p["array"]
        self.Object = p["object"]
        self.Function = p["function"]
        self.Unknown = p["unknown"]
        self.Type = p["type"]
        self.Void = p["void"]

    def primitive(self, key: str) -> Type:
        return self.names.primitives.get(key, self.Unknown)

    # --- references ---

    def parse(self, name: str) -> Type:
        return self.parser.parse(name)

    def type(self, ref: Reference) -> Type:
        if isinstance(ref, str):
            return self.parser.parse(ref)
        if is_typed(ref):
            return getattr(ref, TYPED_ATTRIBUTE)
        if is_type(ref):
            return ref
        if is_class(ref) or _is_function(ref):
            return self._class_type(ref)
        raise InvalidReferenceError(f"[REF-0010] invalid type reference {ref!r}")

    def complex(self, base: Reference, args: Sequence[Reference]) -> Type:
        first = base_type(self.type(base))
        return self.interner.intern(first, [self.type(a) for a in args])

    # --- value classification ---

    def type_of(self, value: object) -> Type:
        if is_type(value):
            return self.Type

        cached = self.cache.restore(value)
        if cached is not None:
            return cached

        if is_class(value) or _is_function(value) or inspect.ismethod(value):
            return self._class_type(value)

        kind = primitive_kind(value)
        if kind is not None:
            return self.primitive(kind)

        return self._instance_type(value)

    def _instance_type(self, value: object) -> Type:
        cls = type(value)
        t = self.Object if cls is object else self._class_type(cls)
        # discovery must not keep values alive
        self.cache.store(value, t, pin=False)
        return t

    def _class_type(self, cls: object) -> Type:
        t = self.cache.restore(cls)
        if t is not None:
            return t

        kind = constructor_kind(cls)
        if kind is not None:
            t = self.primitive(kind)
        else:
            name = _declared_name(cls)
            t = self.names.named(name) if name else create()
            log_event(self.context, LogLevel.DEBUG, "registry", f"discovered {cls!r} as {format_type(t)}")

        if not self.cache.store(cls, t):
            # cannot hold an entry, or another thread bound it first
            return self.cache.restore(cls) or t
        return t

    # --- value-type cache ---

    def store(self, value: object, t: Type) -> bool:
        return self.cache.store(value, t)

    def restore(self, value: object) -> Optional[Type]:
        return self.cache.restore(value)

    # --- registration ---

    def register(self, name: str) -> Callable[[C], C]:
        """
        Class decorator binding the class to the named type `name`.

            @registry.register("geo::Point")
            class Point: ...

        Non-class targets are returned untouched.
        """
        def _decorate(target: C) -> C:
            if is_class(target):
                self.register_class(name, target)
            return target

        return _decorate

    def register_class(self, name: str, cls: type) -> Type:
        t = self.parser.parse(name)

        if t.constructor is not None and t.constructor is not cls:
            raise RegistrationError(
                f"[REG-0010] type '{format_type(t)}' is already bound to class {t.constructor!r}"
            )
        bound = self.cache.restore(cls)
        if bound is not None and bound is not t:
            raise RegistrationError(
                f"[REG-0020] class {cls!r} is already bound to type '{format_type(bound)}'"
            )
        if t.constructor is cls:
            return t

        t.constructor = cls
        self.cache.store(cls, t)
        log_event(self.context, LogLevel.INFO, "registry", f"registered {cls.__qualname__} as '{format_type(t)}'")
        return t
