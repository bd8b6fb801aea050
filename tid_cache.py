#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import weakref
from threading import RLock
from typing import Dict, Optional, Tuple

from tid_context import RegistryContext
from tid_identity import Type, format_type
from tid_logger import log_event, LogLevel

# Immutable scalars: classified through the primitive table, never cached.
_SCALAR_CLASSES = (type(None), bool, int, float, complex, str, bytes)


def is_cacheable(value: object) -> bool:
    return not isinstance(value, _SCALAR_CLASSES)


class ValueTypeCache:
    """
    Side table from runtime values to their resolved Type.

    Entries are keyed by object identity, so values with custom __eq__/__hash__
    (or none at all) are fine. Values that can be weakly referenced are held
    weakly and their entry is dropped when they are garbage collected. Other
    objects (dicts, lists, instances of __slots__ classes, ...) are pinned:
    the table keeps them alive so their id stays valid. Immutable scalars
    (None, bool, numbers, str, bytes) cannot hold an entry.

    An entry is written once and never replaced.
    """

    def __init__(self, context: Optional[RegistryContext] = None):
        self.context = context or RegistryContext.default()
        self._entries: Dict[int, Tuple[weakref.ref, Type]] = {}
        self._pinned: Dict[int, Tuple[object, Type]] = {}
        self._lock = RLock()

    def store(self, value: object, t: Type, *, pin: bool = True) -> bool:
        """
        Attach `t` to `value`. Returns True if `value` now maps to `t`.

        With pin=False, values that cannot be weakly referenced are left
        uncached instead of being kept alive by the table.
        """
        if not is_cacheable(value):
            return False
        key = id(value)
        with self._lock:
            bound = self.restore(value)
            if bound is not None:
                if bound is t:
                    return True
                log_event(
                    self.context, LogLevel.WARNING, "cache",
                    f"{value!r} is already bound to {format_type(bound)}; refusing {format_type(t)}",
                )
                return False
            try:
                ref = weakref.ref(value, self._make_reaper(key))
            except TypeError:
                if not pin:
                    return False
                self._pinned[key] = (value, t)
                return True
            self._entries[key] = (ref, t)
            return True

    def restore(self, value: object) -> Optional[Type]:
        key = id(value)
        pinned = self._pinned.get(key)
        if pinned is not None and pinned[0] is value:
            return pinned[1]
        entry = self._entries.get(key)
        if entry is None or entry[0]() is not value:
            return None
        return entry[1]

    def _make_reaper(self, key: int):
        entries = self._entries

        def _reap(ref: weakref.ref) -> None:
            current = entries.get(key)
            if current is not None and current[0] is ref:
                del entries[key]

        return _reap

    def __len__(self) -> int:
        return len(self._entries) + len(self._pinned)
