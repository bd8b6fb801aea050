#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from threading import RLock
from typing import Dict, Optional, Sequence, Union

from tid_context import RegistryContext
from tid_errors import InvalidReferenceError
from tid_identity import Type, TypeToken, create_complex, assign_name, hash_of, format_type
from tid_logger import log_event, LogLevel
from tid_names import NameTable


class _Level:
    """
    One level of the interning tree.

    `slots` maps a token to either an interned Type (a path ending here) or
    a deeper level. `terminal` holds the Type of a path that ended here
    before a longer path was routed through the same slot.
    """
    __slots__ = ("slots", "terminal")

    def __init__(self, terminal: Optional[Type] = None):
        self.slots: Dict[TypeToken, Union[Type, "_Level"]] = {}
        self.terminal = terminal


class ComplexInterner:
    """
    Canonical parameterized types.

    The tree is walked along the tokens of [base, arg1, ..., argN-1]; the slot
    keyed by argN holds the interned Type. When a walk has to continue through
    a slot that holds a Type, the Type is demoted to the terminal entry of a
    new level, so both the short and the long path stay reachable.
    """

    def __init__(self, names: NameTable, context: Optional[RegistryContext] = None):
        self.names = names
        self.context = context or names.context
        self._root = _Level()
        self._lock = RLock()
        self._count = 0

    def intern(self, base: Type, args: Sequence[Type]) -> Type:
        args = tuple(args)
        if not args:
            raise InvalidReferenceError(
                f"[REF-0020] complex type {format_type(base)} requires at least one type argument"
            )

        path = [base, *args]
        last = path.pop()

        with self._lock:
            level = self._root
            for t in path:
                key = hash_of(t)
                slot = level.slots.get(key)
                if isinstance(slot, Type):
                    log_event(self.context, LogLevel.DEBUG, "interner", f"demoting {format_type(slot)} into a nested level")
                    slot = _Level(terminal=slot)
                    level.slots[key] = slot
                elif slot is None:
                    slot = _Level()
                    level.slots[key] = slot
                level = slot

            key = hash_of(last)
            slot = level.slots.get(key)
            if isinstance(slot, Type):
                return slot
            if isinstance(slot, _Level):
                if slot.terminal is None:
                    slot.terminal = self._create(base, args)
                return slot.terminal

            t = self._create(base, args)
            level.slots[key] = t
            return t

    def _create(self, base: Type, args: tuple) -> Type:
        t = create_complex(base, args)
        self._count += 1

        parts = [base, *args]
        if all(p.name is not None for p in parts):
            name = f"{base.name}<{', '.join(a.name for a in args)}>"
            assign_name(t, name)
            existing = self.names.lookup(name)
            if existing is None:
                self.names.alias(name, t)
            else:
                log_event(
                    self.context, LogLevel.WARNING, "interner",
                    f"name '{name}' already denotes {format_type(existing)}; not aliased",
                )
        log_event(self.context, LogLevel.DEBUG, "interner", f"complex type {format_type(t)} created")
        return t

    def __len__(self) -> int:
        return self._count
