#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from tid_errors import (
    ERROR_CODE_FAMILIES,
    InvalidReferenceError,
    RegistrationError,
    TypeIdError,
    TypeNameSyntaxError,
)
from tid_identity import Type, create
from tid_registry import TypeRegistry


def _trigger(code: str):
    registry = TypeRegistry()

    if code == "REF-0010":
        registry.type(42)
    elif code == "REF-0020":
        registry.complex("List", [])
    elif code == "PAR-0010":
        registry.parse("   ")
    elif code == "PAR-0020":
        registry.parse("List<>")
    elif code == "PAR-0030":
        registry.parse("List<int")
    elif code == "PAR-0040":
        registry.parse("List<int>>")
    elif code == "PAR-0050":
        registry.parse("List<int>tail")
    elif code == "REG-0010":
        class A:
            pass

        class B:
            pass

        registry.register_class("Shared", A)
        registry.register_class("Shared", B)
    elif code == "REG-0020":
        class C:
            pass

        registry.register_class("One", C)
        registry.register_class("Two", C)
    elif code == "IDN-0010":
        Type()
    elif code == "IDN-0020":
        create()._base = create()


ALL_CODES = [code for codes in ERROR_CODE_FAMILIES.values() for code in codes]


@pytest.mark.parametrize("code", ALL_CODES)
def test_every_registered_code_is_reachable(code):
    with pytest.raises(TypeIdError) as excinfo:
        _trigger(code)

    assert excinfo.value.code == code
    assert excinfo.value.format().startswith(f"error: [{code}]")


def test_codes_are_unique():
    assert len(ALL_CODES) == len(set(ALL_CODES))


def test_uncoded_message_gets_default_code():
    err = TypeIdError("boom")

    assert err.code == "TID-9999"
    assert err.format() == "error: [TID-9999] boom"


def test_syntax_error_format_points_at_column():
    err = TypeNameSyntaxError("[PAR-0030] unclosed '<' in type name", "List<int", 5)

    assert err.format() == "error: [PAR-0030] unclosed '<' in type name\n    List<int\n        ^"


def test_error_classes_share_a_base():
    assert issubclass(InvalidReferenceError, TypeIdError)
    assert issubclass(RegistrationError, TypeIdError)
    assert issubclass(TypeIdError, RuntimeError)
