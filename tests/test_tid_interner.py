#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from tid_errors import InvalidReferenceError
from tid_identity import base_type, create, name_of, type_arguments
from tid_interner import ComplexInterner
from tid_names import NameTable


@pytest.fixture
def names() -> NameTable:
    return NameTable()


@pytest.fixture
def interner(names) -> ComplexInterner:
    return ComplexInterner(names)


def test_repeated_intern_returns_same_object(names, interner):
    base = names.named("Map")
    a = names.named("A")
    b = names.named("B")

    first = interner.intern(base, [a, b])
    second = interner.intern(base, (a, b))

    assert first is second
    assert len(interner) == 1
    assert base_type(first) is base
    assert type_arguments(first) == (a, b)


def test_argument_order_matters(names, interner):
    base = names.named("Pair")
    a = names.named("A")
    b = names.named("B")

    assert interner.intern(base, [a, b]) is not interner.intern(base, [b, a])
    assert len(interner) == 2


def test_different_bases_do_not_collide(names, interner):
    a = names.named("A")

    assert interner.intern(names.named("List"), [a]) is not interner.intern(names.named("Set"), [a])


def test_short_path_survives_demotion(names, interner):
    base = names.named("Fn")
    a = names.named("A")
    c = names.named("C")

    short = interner.intern(base, [a])
    long = interner.intern(base, [a, c])

    assert short is not long
    assert interner.intern(base, [a]) is short
    assert interner.intern(base, [a, c]) is long
    assert len(interner) == 2


def test_long_path_first_then_short(names, interner):
    base = names.named("Fn")
    a = names.named("A")
    c = names.named("C")

    long = interner.intern(base, [a, c])
    short = interner.intern(base, [a])

    assert short is not long
    assert interner.intern(base, [a]) is short
    assert interner.intern(base, [a, c]) is long


def test_deep_demotion_chain(names, interner):
    base = names.named("Tuple")
    a = names.named("A")
    created = [interner.intern(base, [a] * n) for n in range(1, 5)]

    assert len(set(map(id, created))) == 4
    for n, t in enumerate(created, start=1):
        assert interner.intern(base, [a] * n) is t


def test_named_parts_produce_canonical_alias(names, interner):
    t = interner.intern(names.named("Map"), [names.named("String"), names.named("Number")])

    assert name_of(t) == "Map<String, Number>"
    assert names.lookup("Map<String, Number>") is t


def test_anonymous_parts_leave_type_unnamed(names, interner):
    t = interner.intern(names.named("List"), [create()])

    assert name_of(t) is None


def test_taken_name_is_not_realiased(names, interner):
    squatter = names.named("List<String>")

    t = interner.intern(names.named("List"), [names.named("String")])

    assert t is not squatter
    assert names.lookup("List<String>") is squatter


def test_empty_arguments_are_rejected(names, interner):
    with pytest.raises(InvalidReferenceError) as excinfo:
        interner.intern(names.named("List"), [])

    assert excinfo.value.code == "REF-0020"
