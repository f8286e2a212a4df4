"""Unit tests for DependencyResolver."""

from typing import Optional

import pytest

from long_container.application.resolver import DependencyResolver, dependency_class, has_signature, is_closure
from long_container.domain import NOT_BOUND, IContainer, IResolver, UnresolvableDependencyError


class MockContainer(IContainer):
    """Mock container for testing the resolver."""

    def __init__(self):
        self.resolved = {}
        self.contextual = {}
        self.requested = []

    def set(self, identifier, value):
        self.resolved[identifier] = value

    def get(self, identifier):
        return self.make(identifier)

    def has(self, identifier):
        return identifier in self.resolved

    def unset(self, identifier):
        self.resolved.pop(identifier, None)

    def make(self, identifier, parameters=None):
        return self.resolve(identifier, parameters)

    def resolve(self, identifier, parameters=None):
        self.requested.append(identifier)
        if identifier in self.resolved:
            return self.resolved[identifier]
        return identifier()

    def call(self, callback, parameters=None, default_method=None):
        return callback()

    def contextual_concrete(self, identifier):
        return self.contextual.get(identifier, NOT_BOUND)

    def keys(self):
        return list(self.resolved)


class Database:
    pass


class Cache:
    def __init__(self):
        raise RuntimeError("cache unavailable")


class TestHelpers:
    """Test cases for module-level helpers."""

    def test_dependency_class_for_user_class(self):
        """Test that user classes are dependencies."""
        assert dependency_class(Database) is Database

    @pytest.mark.parametrize("annotation", [str, int, float, bool, list, dict, bytes])
    def test_dependency_class_for_builtins(self, annotation):
        """Test that builtin types are primitives."""
        assert dependency_class(annotation) is None

    def test_dependency_class_unwraps_optional(self):
        """Test that Optional[X] and X | None unwrap to X."""
        assert dependency_class(Optional[Database]) is Database
        assert dependency_class(Database | None) is Database

    def test_dependency_class_for_wider_unions(self):
        """Test that unions of several classes are primitives."""
        assert dependency_class(Optional[Database | Cache]) is None

    def test_dependency_class_for_missing_annotation(self):
        """Test that missing annotations are primitives."""
        import inspect

        assert dependency_class(inspect.Parameter.empty) is None

    def test_has_signature(self):
        """Test that builtin subclasses without a constructor have no signature."""

        class Bag(dict):
            pass

        assert has_signature(Database)
        assert not has_signature(Bag)

    def test_is_closure(self):
        """Test that functions are closures and classes are not."""
        assert is_closure(lambda c: None)
        assert not is_closure(Database)
        assert not is_closure("Database")


class TestResolverInitialization:
    """Test cases for DependencyResolver initialization."""

    def test_resolver_implements_interface(self):
        """Test that DependencyResolver implements IResolver."""
        assert isinstance(DependencyResolver(), IResolver)


class TestConstructorArguments:
    """Test cases for constructor auto-wiring."""

    def test_class_dependency_is_resolved(self):
        """Test that class-typed parameters are resolved from the container."""
        resolver = DependencyResolver()
        container = MockContainer()
        database = Database()
        container.resolved[Database] = database

        class Repository:
            def __init__(self, db: Database):
                self.db = db

        arguments = resolver.constructor_arguments(Repository, container)

        assert arguments.args == [database]
        assert container.requested == [Database]

    def test_supplied_parameter_wins(self):
        """Test that explicitly supplied values are used and consumed."""
        resolver = DependencyResolver()
        container = MockContainer()
        database = Database()

        class Repository:
            def __init__(self, db: Database, table: str):
                pass

        arguments = resolver.constructor_arguments(Repository, container, {"db": database, "table": "users"})

        assert arguments.args == [database, "users"]
        assert arguments.extras == {}
        assert container.requested == []

    def test_unconsumed_parameters_become_extras(self):
        """Test that unknown supplied parameters are reported as extras."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, name: str):
                pass

        arguments = resolver.constructor_arguments(Service, MockContainer(), {"name": "a", "other": 1})

        assert arguments.extras == {"other": 1}

    def test_primitive_uses_default(self):
        """Test that primitives without override use their default."""
        resolver = DependencyResolver()

        class Connection:
            def __init__(self, host: str = "localhost", port: int = 5432):
                pass

        arguments = resolver.constructor_arguments(Connection, MockContainer())

        assert arguments.args == ["localhost", 5432]

    def test_primitive_uses_contextual_value(self):
        """Test that a $name override wins over the default."""
        resolver = DependencyResolver()
        container = MockContainer()
        container.contextual["$host"] = "db.internal"

        class Connection:
            def __init__(self, host: str = "localhost"):
                pass

        arguments = resolver.constructor_arguments(Connection, container)

        assert arguments.args == ["db.internal"]

    def test_primitive_contextual_closure_receives_container(self):
        """Test that closure overrides are invoked with the container."""
        resolver = DependencyResolver()
        container = MockContainer()
        container.contextual["$port"] = lambda c: 6000 if c is container else 0

        class Connection:
            def __init__(self, port: int):
                self.port = port

        arguments = resolver.constructor_arguments(Connection, container)

        assert arguments.args == [6000]

    def test_unannotated_parameter_is_primitive(self):
        """Test that parameters without annotation are treated as primitives."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, dependency):
                pass

        with pytest.raises(UnresolvableDependencyError) as exc_info:
            resolver.constructor_arguments(Service, MockContainer())

        assert exc_info.value.parameter == "dependency"
        assert "Service" in exc_info.value.declaring

    def test_optional_class_falls_back_to_default(self):
        """Test that a failing optional dependency uses its default."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, cache: Optional[Cache] = None):
                pass

        arguments = resolver.constructor_arguments(Service, MockContainer())

        assert arguments.args == [None]

    def test_required_class_failure_propagates(self):
        """Test that a failing required dependency propagates its error."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, cache: Cache):
                pass

        with pytest.raises(RuntimeError, match="cache unavailable"):
            resolver.constructor_arguments(Service, MockContainer())

    def test_variadic_parameters_are_skipped(self):
        """Test that *args and **kwargs are ignored."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, *args, **kwargs):
                pass

        arguments = resolver.constructor_arguments(Service, MockContainer())

        assert arguments.args == []
        assert arguments.kwargs == {}

    def test_keyword_only_parameters(self):
        """Test that keyword-only parameters are placed in kwargs."""
        resolver = DependencyResolver()

        class Service:
            def __init__(self, db: Database, *, retries: int = 3):
                pass

        arguments = resolver.constructor_arguments(Service, MockContainer())

        assert len(arguments.args) == 1
        assert arguments.kwargs == {"retries": 3}


class TestMethodArguments:
    """Test cases for the call variant."""

    def test_positional_parameters(self):
        """Test that values can be supplied by position."""
        resolver = DependencyResolver()

        def handler(first, second):
            return first, second

        arguments = resolver.method_arguments(handler, MockContainer(), {0: "a", 1: "b"})

        assert arguments.args == ["a", "b"]

    def test_name_takes_precedence_over_position(self):
        """Test that a name match wins and the positional value stays unused."""
        resolver = DependencyResolver()

        def handler(first):
            return first

        arguments = resolver.method_arguments(handler, MockContainer(), {"first": "named", 0: "positional"})

        assert arguments.args == ["named"]
        assert arguments.extras == {0: "positional"}

    def test_class_parameter_resolved_through_make(self):
        """Test that class-typed parameters come from the container."""
        resolver = DependencyResolver()
        container = MockContainer()
        database = Database()
        container.resolved[Database] = database

        def handler(db: Database, limit: int = 10):
            return db, limit

        arguments = resolver.method_arguments(handler, container)

        assert arguments.args == [database, 10]

    def test_missing_parameter_raises(self):
        """Test that a parameter with no source is reported."""
        resolver = DependencyResolver()

        def handler(required):
            return required

        with pytest.raises(UnresolvableDependencyError) as exc_info:
            resolver.method_arguments(handler, MockContainer())

        assert exc_info.value.parameter == "required"

    def test_invoke_passes_extras_to_varargs(self):
        """Test that extras reach callables accepting *args and **kwargs."""
        resolver = DependencyResolver()

        def handler(first, *rest, **options):
            return first, rest, options

        result = resolver.invoke(handler, MockContainer(), {0: "a", 5: "b", "flag": True})

        assert result == ("a", ("b",), {"flag": True})

    def test_invoke_drops_extras_for_fixed_signature(self):
        """Test that callables without variadics ignore extras."""
        resolver = DependencyResolver()

        def handler(first):
            return first

        assert resolver.invoke(handler, MockContainer(), {0: "a", "unused": 1}) == "a"

    def test_invoke_bound_method(self):
        """Test that bound methods are introspected without self."""
        resolver = DependencyResolver()

        class Greeter:
            def greet(self, name: str = "world"):
                return f"hello {name}"

        assert resolver.invoke(Greeter().greet, MockContainer(), {"name": "ada"}) == "hello ada"

    def test_invoke_callable_object(self):
        """Test that objects with __call__ are supported."""
        resolver = DependencyResolver()
        container = MockContainer()
        database = Database()
        container.resolved[Database] = database

        class Handler:
            def __call__(self, db: Database):
                return db

        assert resolver.invoke(Handler(), container) is database
