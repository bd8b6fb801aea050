#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tid_context import RegistryContext
from tid_errors import TypeNameSyntaxError
from tid_identity import Type
from tid_interner import ComplexInterner
from tid_logger import log_event, LogLevel
from tid_names import NameTable

# ==========================
# Textual type references
# ==========================
#
#   TypeRef    := [Module "::"] Path ["<" ParamList ">"]
#   ParamList  := TypeRef ("," TypeRef)*      # split only at bracket depth 0


@dataclass(frozen=True)
class TypeRefParts:
    module: Optional[str]
    path: str
    params: Optional[Tuple[str, ...]]  # None when there is no parameter list

    @property
    def qualified_name(self) -> str:
        return f"{self.module}::{self.path}" if self.module else self.path


def split_module(text: str) -> Tuple[Optional[str], str]:
    """
    Split an optional module prefix off a type reference.

    Only a "::" before the first "<" separates the module; one inside a
    parameter list belongs to that parameter. An empty prefix counts as no
    module.
    """
    lt = text.find("<")
    head_end = lt if lt >= 0 else len(text)
    sep = text.find("::", 0, head_end)
    if sep < 0:
        return None, text
    module = text[:sep].strip()
    return (module or None), text[sep + 2:]


def split_type_params(
        text: str,
        *,
        strict: bool = True,
        source: Optional[str] = None,
        offset: int = 0,
) -> List[str]:
    """
    Split a parameter list on the commas at angle-bracket depth 0.

    "string, List<Map<a, b>>" -> ["string", "List<Map<a, b>>"]

    In strict mode unbalanced brackets and empty parameters raise
    TypeNameSyntaxError; `source` and `offset` place the reported column in
    the enclosing reference. Otherwise the split is best-effort and empty
    pieces are dropped.
    """
    source = text if source is None else source
    params: List[str] = []
    starts: List[int] = []
    open_positions: List[int] = []
    depth = 0
    last = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
            open_positions.append(i)
        elif ch == ">":
            depth -= 1
            if open_positions:
                open_positions.pop()
            elif strict:
                raise TypeNameSyntaxError("[PAR-0040] unmatched '>' in type parameters", source, offset + i + 1)
        elif ch == "," and depth == 0:
            params.append(text[last:i].strip())
            starts.append(last)
            last = i + 1
    params.append(text[last:].strip())
    starts.append(last)

    if not strict:
        return [p for p in params if p]

    if open_positions:
        raise TypeNameSyntaxError("[PAR-0030] unclosed '<' in type parameters", source, offset + open_positions[0] + 1)
    for p, start in zip(params, starts):
        if not p:
            raise TypeNameSyntaxError("[PAR-0020] empty type parameter", source, offset + start + 1)
    return params


def _matching_close(text: str, open_index: int) -> int:
    """Index of the '>' closing the '<' at open_index, or -1."""
    depth = 0
    for i in range(open_index, len(text)):
        if text[i] == "<":
            depth += 1
        elif text[i] == ">":
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_type_ref(text: str, *, strict: bool = True) -> TypeRefParts:
    """
    Break a textual type reference into module, path and raw parameter strings.
    """
    name = text.strip()
    if not name:
        raise TypeNameSyntaxError("[PAR-0010] empty type name", text, 1)

    module, rest = split_module(name)
    rest_offset = len(name) - len(rest)

    lt = rest.find("<")
    if lt < 0:
        path, params = rest.strip(), None
    elif rest.endswith(">"):
        path = rest[:lt].strip()
        params = tuple(split_type_params(
            rest[lt + 1:-1],
            strict=strict,
            source=name,
            offset=rest_offset + lt + 1,
        ))
        if not params:
            params = None
    elif strict:
        close = _matching_close(rest, lt)
        if close < 0:
            raise TypeNameSyntaxError("[PAR-0030] unclosed '<' in type name", name, rest_offset + lt + 1)
        raise TypeNameSyntaxError(
            "[PAR-0050] unexpected text after type parameters", name, rest_offset + close + 2
        )
    else:
        path, params = rest.strip(), None

    if not path:
        raise TypeNameSyntaxError("[PAR-0010] empty type name", name, rest_offset + 1)
    return TypeRefParts(module=module, path=path, params=params)


class TypeNameParser:
    """
    Resolves textual type references to canonical Types.

    Names already known to the NameTable (including canonical generic names
    registered by earlier parses) are returned without re-parsing. Otherwise
    the base is resolved by name and the parameters are parsed recursively
    and interned with it.
    """

    def __init__(self, names: NameTable, interner: ComplexInterner, context: Optional[RegistryContext] = None):
        self.names = names
        self.interner = interner
        self.context = context or names.context

    def parse(self, text: str) -> Type:
        name = text.strip()
        known = self.names.lookup(name)
        if known is not None:
            return known

        ref = parse_type_ref(name, strict=self.context.strict_syntax)
        result = self.names.named(ref.qualified_name)
        result.module = ref.module
        result.path = ref.path

        if ref.params:
            log_event(self.context, LogLevel.DEBUG, "parser", f"'{name}' -> {ref.qualified_name} with parameters {list(ref.params)}")
            args = [self.parse(p) for p in ref.params]
            result = self.interner.intern(result, args)
            result.module = ref.module
            result.path = ref.path
        return result
