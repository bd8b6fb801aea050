#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from typing import List, Optional

from tid_identity import Type, base_type, type_arguments, format_type, hash_of


def _format_meta(t: Type) -> str:
    parts = []
    if t.module is not None:
        parts.append(f"module={t.module!r}")
    if t.path is not None:
        parts.append(f"path={t.path!r}")
    if t.constructor is not None:
        parts.append(f"constructor={t.constructor.__qualname__}")
    return f" ({', '.join(parts)})" if parts else ""


def format_type_tree(t: Optional[Type], indent: int = 0) -> List[str]:
    """
    Indented decomposition of a type.

    - Shows the display name and the token serial of each type.
    - Appends descriptive metadata (module, path, bound class) when present.
    - Parameterized types list their base and arguments on indented lines.
    """
    ind = "  " * indent
    if t is None:
        return [ind + "<none>"]

    header = f"{format_type(t)} #{hash_of(t).serial}{_format_meta(t)}"
    lines: List[str] = [ind + header]

    args = type_arguments(t)
    if args is None:
        return lines

    lines.append(ind + "  base:")
    lines.extend(format_type_tree(base_type(t), indent + 2))
    lines.append(ind + "  arguments:")
    for arg in args:
        lines.extend(format_type_tree(arg, indent + 2))
    return lines
