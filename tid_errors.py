#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

# tid_errors.py
from __future__ import annotations

import re
from typing import Optional

ERROR_CODE_FAMILIES = {
    "REF": [
        "REF-0010",  # invalid type reference
        "REF-0020",  # complex type without type arguments
    ],
    "PAR": [
        "PAR-0010",  # empty type name
        "PAR-0020",  # empty type parameter
        "PAR-0030",  # unclosed '<'
        "PAR-0040",  # unmatched '>'
        "PAR-0050",  # trailing text after parameter list
    ],
    "REG": [
        "REG-0010",  # name already bound to another class or type
        "REG-0020",  # class already bound to another type
    ],
    "IDN": [
        "IDN-0010",  # Type constructed outside create()
        "IDN-0020",  # write to a fixed Type attribute
    ],
}

_CODE_RE = re.compile(r"\[([A-Z]{3}-\d{4})\]")


class TypeIdError(RuntimeError):
    """
    Base class for all registry errors.

    Messages start with a bracketed code such as "[REF-0010]"; messages
    without one are reported as "[TID-9999]".
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> str:
        m = _CODE_RE.search(self.message)
        return m.group(1) if m else "TID-9999"

    def format(self) -> str:
        message = self.message
        if _CODE_RE.search(message) is None:
            message = f"[TID-9999] {message}"
        return f"error: {message}"


class InvalidReferenceError(TypeIdError):
    """A value that is neither a type name, a Type, a typed value nor a class."""


class RegistrationError(TypeIdError):
    """Conflicting class bindings or name aliases."""


class ForgedTypeError(TypeIdError):
    """A Type was instantiated without going through create()."""


class ImmutableTypeError(TypeIdError):
    """An attempt to replace an identity-defining attribute of a Type."""


class TypeNameSyntaxError(TypeIdError):
    """
    Malformed textual type reference.

    `text` is the full reference being parsed and `column` the 1-based
    position of the offending character, when known.
    """

    def __init__(self, message: str, text: Optional[str] = None, column: Optional[int] = None):
        super().__init__(message)
        self.text = text
        self.column = column

    def format(self) -> str:
        header = super().format()
        if self.text is None:
            return header
        if self.column is None:
            return f"{header}\n    {self.text}"
        caret = " " * (self.column - 1) + "^"
        return f"{header}\n    {self.text}\n    {caret}"
