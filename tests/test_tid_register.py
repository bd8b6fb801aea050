#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from tid_context import RegistryContext, LogLevel
from tid_errors import RegistrationError
from tid_identity import name_of
from tid_registry import TypeRegistry


def test_registered_class_resolves_instances(registry):
    @registry.register("Foo")
    class Foo:
        pass

    t = registry.type("Foo")

    assert registry.type_of(Foo()) is t
    assert registry.type_of(Foo) is t
    assert registry.type(Foo) is t
    assert t.constructor is Foo


def test_decorator_returns_the_class(registry):
    class Bar:
        pass

    assert registry.register("Bar")(Bar) is Bar


def test_register_under_namespaced_name(registry):
    @registry.register("geo::Point")
    class Point:
        pass

    t = registry.type_of(Point())

    assert name_of(t) == "geo::Point"
    assert t.module == "geo"
    assert t.path == "Point"


def test_register_under_generic_name(registry):
    @registry.register("Box<string>")
    class StringBox:
        pass

    assert registry.type_of(StringBox()) is registry.parse("Box<String>")


def test_non_class_targets_are_ignored(registry):
    def helper():
        pass

    assert registry.register("Helper")(helper) is helper
    assert registry.parse("Helper").constructor is None
    assert registry.type_of(helper) is registry.parse("helper")


def test_reregistration_is_idempotent(registry):
    class Foo:
        pass

    first = registry.register_class("Foo", Foo)
    second = registry.register_class("Foo", Foo)

    assert first is second


def test_name_bound_to_another_class_is_an_error(registry):
    @registry.register("Shared")
    class First:
        pass

    class Second:
        pass

    with pytest.raises(RegistrationError) as excinfo:
        registry.register("Shared")(Second)

    assert excinfo.value.code == "REG-0010"
    assert registry.type("Shared").constructor is First


def test_class_bound_to_another_type_is_an_error(registry):
    class Foo:
        pass

    registry.register_class("Alpha", Foo)

    with pytest.raises(RegistrationError) as excinfo:
        registry.register_class("Beta", Foo)

    assert excinfo.value.code == "REG-0020"


def test_registration_after_discovery_under_same_name(registry):
    class Foo:
        pass

    discovered = registry.type_of(Foo())
    registered = registry.register_class("Foo", Foo)

    assert registered is discovered
    assert registered.constructor is Foo


def test_registration_is_logged_at_info(capsys):
    registry = TypeRegistry(RegistryContext(log_level=LogLevel.INFO))

    @registry.register("Logged")
    class Logged:
        pass

    assert "registered" in capsys.readouterr().err
