#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from threading import RLock
from typing import Dict, Optional

from tid_context import RegistryContext
from tid_errors import RegistrationError
from tid_identity import Type, create, assign_name, format_type
from tid_logger import log_event, LogLevel
from tid_primitives import PRIMITIVE_NAMES


class NameTable:
    """
    Mapping from string name to its canonical Type.

    - `named()` creates the Type for a name on first use; later calls return
      the same object.
    - The primitive keys ("string", "number", ...) are seeded at construction
      and resolve to the named Type of their display name ("String", ...);
      they take priority over any other binding of those keys.
    - Aliases bind extra keys (e.g. canonical generic names) to existing Types.
    """

    def __init__(self, context: Optional[RegistryContext] = None):
        self.context = context or RegistryContext.default()
        self._names: Dict[str, Type] = {}
        self._lock = RLock()
        self.primitives: Dict[str, Type] = {}
        for key, display in PRIMITIVE_NAMES.items():
            self.primitives[key] = self.named(display)

    def named(self, name: str) -> Type:
        with self._lock:
            t = self.lookup(name)
            if t is None:
                t = create()
                assign_name(t, name)
                self._names[name] = t
                log_event(self.context, LogLevel.DEBUG, "names", f"named type '{name}' created")
            return t

    def lookup(self, name: str) -> Optional[Type]:
        t = self.primitives.get(name)
        if t is not None:
            return t
        return self._names.get(name)

    def alias(self, name: str, t: Type) -> None:
        """
        Bind `name` to the existing Type `t`.

        Rebinding a name to the Type it already denotes is a no-op.
        """
        with self._lock:
            existing = self.lookup(name)
            if existing is None:
                self._names[name] = t
                return
            if existing is not t:
                raise RegistrationError(
                    f"[REG-0010] name '{name}' is already bound to type {format_type(existing)}"
                )

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._names)
