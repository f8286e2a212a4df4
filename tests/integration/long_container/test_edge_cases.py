"""Integration tests for edge cases and error paths."""

from abc import ABC, abstractmethod
from typing import Optional, Protocol

import pytest

from long_container import (
    AliasCycleError,
    Container,
    FrozenEntryError,
    NotFoundError,
    NotInstantiableError,
    ResolutionError,
    SelfAliasError,
    identifier_of,
)


class Notifier(ABC):
    @abstractmethod
    def notify(self, message): ...


class Clock(Protocol):
    def now(self): ...


class Chicken:
    def __init__(self, egg: "Egg"):
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken):
        self.chicken = chicken


class Alerts:
    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier


class TestNotInstantiable:
    """Abstract targets without bindings."""

    def test_abstract_class(self):
        """Test that abstract classes cannot be built."""
        container = Container()

        with pytest.raises(ResolutionError) as exc_info:
            container.make(Notifier)

        assert isinstance(exc_info.value.cause, NotInstantiableError)

    def test_protocol(self):
        """Test that protocols cannot be built."""
        container = Container()

        with pytest.raises(NotInstantiableError):
            container.resolve(Clock)

    def test_optional_abstract_dependency_uses_default(self):
        """Test that an unbuildable optional dependency falls back to its default."""
        container = Container()

        assert container.make(Alerts).notifier is None


class TestCycles:
    """Constructor and alias cycles."""

    def test_constructor_cycle_is_wrapped(self):
        """Test that mutually dependent constructors end in a wrapped RecursionError."""
        container = Container()

        with pytest.raises(ResolutionError) as exc_info:
            container.make(Chicken)

        assert isinstance(exc_info.value.cause, RecursionError)

    def test_build_stack_unwinds_after_failure(self):
        """Test that a failed build leaves no consumer on the build stack."""
        container = Container()

        with pytest.raises(ResolutionError):
            container.make(Chicken)

        assert container._build_stack.snapshot() == []

    def test_self_alias(self):
        """Test that self-aliasing is reported with its own kind."""
        container = Container()
        container.alias("cache", "cache")

        with pytest.raises(ResolutionError) as exc_info:
            container.make("cache")

        assert isinstance(exc_info.value.cause, SelfAliasError)
        assert str(exc_info.value.cause) == "cache is aliased to itself."

    def test_long_alias_cycle(self):
        """Test that a three-step alias loop reports the chain."""
        container = Container()
        container.alias("a", "b")
        container.alias("b", "c")
        container.alias("c", "a")

        with pytest.raises(AliasCycleError) as exc_info:
            container.get_actual("a")

        assert exc_info.value.chain[0] == exc_info.value.chain[-1]


class TestFrozenEntries:
    """Overriding resolved shared entries."""

    def test_frozen_after_first_resolution(self):
        """Test that a shared entry cannot be replaced once resolved."""
        container = Container()
        container.set("clock", lambda c: object())

        container.set("clock", lambda c: object())
        container.make("clock")

        with pytest.raises(FrozenEntryError) as exc_info:
            container.set("clock", lambda c: object())

        assert exc_info.value.identifier == "clock"

    def test_failed_build_leaves_nothing_cached(self):
        """Test that a build failing partway neither caches nor freezes anything."""
        container = Container()

        class Connection:
            def __init__(self, dsn: str):
                self.dsn = dsn

        class Gateway:
            def __init__(self, alerts: Alerts, connection: Connection):
                self.connection = connection

        container.set("gateway", Gateway)

        with pytest.raises(ResolutionError):
            container.make("gateway")

        assert not container._registry.has_shared("gateway")
        assert not container._registry.has_shared(identifier_of(Gateway))
        assert not container._registry.has_shared(identifier_of(Connection))
        assert container._build_stack.snapshot() == []

        container.set("gateway", lambda c: "offline")
        container.when(Connection, "$dsn", "sqlite://")
        assert container.make(Connection).dsn == "sqlite://"
        assert container.make("gateway") == "offline"

    def test_unset_unfreezes(self):
        """Test that unset allows re-registration."""
        container = Container()
        container.set("clock", lambda c: object())
        container.make("clock")

        container.unset("clock")
        container.set("clock", lambda c: "replacement")

        assert container.make("clock") == "replacement"

    def test_factories_never_freeze(self):
        """Test that factory entries stay overridable."""
        container = Container()
        container.factory("clock", lambda c: object())
        container.make("clock")

        container.factory("clock", lambda c: "replacement")

        assert container.make("clock") == "replacement"

    def test_parameterised_builds_do_not_freeze(self):
        """Test that resolutions with parameters leave the entry open."""
        container = Container()

        class Report:
            def __init__(self, title: str):
                self.title = title

        container.set("report", Report)
        container.make("report", {"title": "Q3"})

        container.set("report", Report)


class TestStringsAndValues:
    """Values that are not recipes."""

    def test_raw_string(self):
        """Test that raw strings are not chased as identifiers."""
        container = Container()
        container.raw("dsn", "postgres://localhost/app")

        assert container.make("dsn") == "postgres://localhost/app"

    def test_plain_scalars(self):
        """Test that non-string scalars are returned as stored."""
        container = Container()
        container.set("retries", 3)
        container.set("hosts", ["a", "b"])

        assert container.make("retries") == 3
        assert container.make("hosts") == ["a", "b"]

    def test_none_value(self):
        """Test that None can be stored and resolved."""
        container = Container()
        container.set("nothing", None)

        assert container.make("nothing") is None

    def test_unknown_type_name(self):
        """Test that misspelt type names are not found."""
        container = Container()

        with pytest.raises(NotFoundError):
            container.make("collections.OrderedDcit")

    def test_non_class_dotted_path(self):
        """Test that dotted paths to functions are not type names."""
        container = Container()

        with pytest.raises(NotFoundError):
            container.make("os.path.join")
