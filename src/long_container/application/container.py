import inspect
import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from long_container.application.alias_resolver import AliasResolver
from long_container.application.build_stack import BuildStack
from long_container.application.class_locator import ClassLocator, identifier_of
from long_container.application.contextual_bindings import ContextualBindings
from long_container.application.registry import ItemRegistry
from long_container.application.resolver import DependencyResolver, has_signature, is_closure
from long_container.domain import (
    NOT_BOUND,
    ClassNotFoundError,
    ContainerAware,
    ContainerSettings,
    EntryKind,
    IContainer,
    Identifier,
    Initializable,
    InvalidCallableError,
    IProvider,
    NotFoundError,
    NotInstantiableError,
    Parameters,
    ResolutionError,
)

logger = logging.getLogger(__name__)

_NON_OBJECTS = (str, bytes, int, float, complex, bool, list, tuple, dict, set, frozenset)
_MISSING = object()


def is_shareable(value: Any) -> bool:
    """Whether a resolved value is an object eligible for the shared cache."""
    return value is not None and type(value) not in _NON_OBJECTS


def is_built_value(value: Any) -> bool:
    """Whether a stored item is already a constructed value rather than a recipe or type name."""
    return not callable(value) and not isinstance(value, str)


class Container(IContainer):
    """Main dependency injection container.

    Maps string identifiers to values, factories, closures or classes and
    resolves them lazily. Unregistered identifiers naming a class are
    instantiated by auto-wiring their constructor. Non-contextual object
    results are cached as shared values, which freezes their identifier.

    Classes are accepted wherever an identifier is expected and stand for
    ``"module.QualName"``.

    Attributes:
        _settings: Container configuration.
        _registry: Registered entries, classification and shared values.
        _aliases: Alias table and its reverse index.
        _contextual: Contextual bindings keyed by consumer.
        _build_stack: Identifiers currently under construction.
        _locator: Maps type names to classes.
        _resolver: Component responsible for parameter auto-wiring.

    Example:
        >>> container = Container()
        >>> container.set("mailer", SmtpMailer)
        >>> container.alias("mailer", "mail")
        >>> container.make("mail") is container.make(SmtpMailer)
        True
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize the container with empty tables."""
        self._settings = settings or ContainerSettings()
        self._registry = ItemRegistry()
        self._aliases = AliasResolver()
        self._contextual = ContextualBindings()
        self._build_stack = BuildStack()
        self._locator = ClassLocator(allow_import=self._settings.import_type_names)
        self._resolver = DependencyResolver()

        self._register_defaults()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def _register_defaults(self) -> None:
        """Register the container under its own class and interface identifiers."""
        if not self._settings.register_self:
            return
        for cls in (IContainer, type(self)):
            identifier = self._id(cls)
            if not self.has(identifier):
                self.set(identifier, self)

    def _id(self, identifier: Identifier) -> str:
        if isinstance(identifier, str):
            return identifier
        return self._locator.remember(identifier)

    def _remember_value(self, value: Any) -> Any:
        if inspect.isclass(value):
            self._locator.remember(value)
        return value

    # Registry

    def set(self, identifier: Identifier, value: Any) -> None:
        """Store a value under an identifier.

        The value may be a built object, a class or type name to bind to, or a
        closure recipe invoked with the container on first resolution.

        Raises:
            FrozenEntryError: If the identifier is already cached as a shared value.
        """
        self._registry.put(self._id(identifier), self._remember_value(value))

    def get(self, identifier: Identifier) -> Any:
        return self.make(identifier)

    def has(self, identifier: Identifier) -> bool:
        identifier = self._id(identifier)
        return self._registry.contains(identifier) or self._aliases.is_alias(identifier)

    def unset(self, identifier: Identifier) -> None:
        """Remove an identifier's item, classification, frozen flag, shared value and alias.

        No-op when the identifier is unknown.
        """
        identifier = self._id(identifier)
        removed = self._registry.remove(identifier)
        if self._aliases.is_alias(identifier):
            self._aliases.remove(identifier)
            removed = True
        if removed:
            logger.debug("Unset %s", identifier)

    def factory(self, identifier: Identifier, callback: Callable[[IContainer], Any]) -> "Container":
        """Register a callable re-invoked with the container on every resolution.

        Raises:
            InvalidCallableError: If ``callback`` is not callable.
            FrozenEntryError: If the identifier is frozen.

        Example:
            >>> container.factory("request_id", lambda c: uuid.uuid4())
            >>> container.make("request_id") != container.make("request_id")
            True
        """
        if not callable(callback):
            raise InvalidCallableError(f'Factory for "{identifier_of(identifier)}" must be callable.')
        self._registry.put(self._id(identifier), callback, EntryKind.FACTORY)
        return self

    def raw(self, identifier: Identifier, value: Any) -> "Container":
        """Register a value returned verbatim, never instantiated nor cached.

        Raises:
            FrozenEntryError: If the identifier is frozen.
        """
        self._registry.put(self._id(identifier), value, EntryKind.RAW)
        return self

    def keys(self) -> List[str]:
        keys = self._registry.identifiers()
        seen = set(keys)
        keys.extend(alias for alias in self._aliases.identifiers() if alias not in seen)
        return keys

    def register(self, provider: IProvider, items: Optional[Mapping[Identifier, Any]] = None) -> "Container":
        """Let a provider populate the container, then apply ``items`` with ``set``.

        Args:
            provider: Provider whose ``register`` receives this container.
            items: Values overriding or completing the provider's registrations.
        """
        provider.register(self)
        logger.debug("Registered provider %s", type(provider).__name__)

        for identifier, value in (items or {}).items():
            self.set(identifier, value)
        return self

    # Aliases and contextual bindings

    def alias(self, concrete: Identifier, alias_name: Identifier) -> None:
        """Make ``alias_name`` resolve as ``concrete``."""
        self._aliases.alias(self._id(concrete), self._id(alias_name))

    def get_actual(self, identifier: Identifier) -> str:
        """Return the canonical identifier behind any chain of aliases.

        Raises:
            SelfAliasError: If an identifier on the chain is aliased to itself.
            AliasCycleError: If the chain loops.
        """
        return self._aliases.resolve_actual(self._id(identifier))

    def when(self, consumer: Identifier, needed: Identifier, implementation: Any) -> None:
        """Override ``needed`` while ``consumer`` is being built.

        Args:
            consumer: The class (or its identifier) being built.
            needed: The dependency identifier, or ``"$name"`` for a primitive parameter.
            implementation: A closure, class, identifier, or value to use instead.

        Example:
            >>> container.when(ReportService, Storage, S3Storage)
            >>> container.when(ReportService, "$bucket", "reports")
        """
        needed_id = self._canonical(self.get_actual(needed))
        self._contextual.bind(self._canonical(self._id(consumer)), needed_id, self._remember_value(implementation))

    def contextual_concrete(self, identifier: str) -> Any:
        return self._contextual.lookup(
            self._build_stack.current(),
            identifier,
            self._aliases.aliases_of(identifier),
        )

    # Resolution

    def make(self, identifier: Identifier, parameters: Optional[Parameters] = None) -> Any:
        """Resolve an identifier from the container.

        This is the primary entry point. ``ResolutionError`` (including
        ``NotFoundError``) propagates unchanged; any other failure is wrapped
        into a ``ResolutionError`` keeping the original as ``cause``.

        Args:
            identifier: The identifier or class to resolve.
            parameters: Explicit constructor or closure arguments by name.

        Returns:
            The resolved value.

        Raises:
            ResolutionError: If resolution fails for any reason.

        Example:
            >>> logger = container.make("app.services.Logger")
            >>> report = container.make(Report, {"title": "Q3"})
        """
        try:
            return self.resolve(identifier, parameters)
        except ResolutionError:
            raise
        except Exception as e:
            name = identifier_of(identifier)
            raise ResolutionError(name, f"Failed to resolve {name}: {e}", cause=e) from e

    def resolve(self, identifier: Identifier, parameters: Optional[Parameters] = None) -> Any:
        """Resolve an identifier, raising the specific error kinds.

        Raises:
            NotFoundError: If the identifier is neither registered nor a type name.
            FrozenEntryError, AliasCycleError, ClassNotFoundError, NotInstantiableError,
            UnresolvableDependencyError: From the resolution path.
        """
        parameters = dict(parameters or {})
        identifier = self._canonical(self.get_actual(identifier))

        if not self.has(identifier) and not self._can_instantiate(identifier):
            raise NotFoundError(identifier)

        contextual = self.contextual_concrete(identifier)
        needs_contextual_build = bool(parameters) or contextual is not NOT_BOUND

        if not needs_contextual_build and self._registry.has_shared(identifier):
            return self._registry.shared(identifier)

        entry = self._registry.entry(identifier)
        item = entry.value if entry is not None else _MISSING
        self._registry.record_resolution(identifier)

        if self._registry.is_raw(identifier):
            return item
        if self._registry.is_factory(identifier):
            return item(self)
        if not needs_contextual_build and item is not _MISSING and is_built_value(item):
            return item

        if contextual is not NOT_BOUND:
            concrete = contextual
        elif item is not _MISSING:
            concrete = item
        else:
            concrete = identifier

        if inspect.isclass(concrete):
            concrete = self._id(concrete)

        if is_closure(concrete):
            instance = self._resolver.invoke(concrete, self, {0: self, **parameters})
        elif not isinstance(concrete, str):
            # A contextual override given as a plain value
            instance = concrete
        elif concrete == identifier:
            instance = self._build(concrete, parameters)
        else:
            instance = self.resolve(concrete, parameters)

        if not needs_contextual_build and is_shareable(instance):
            self._registry.share(identifier, instance)

        return instance

    def _can_instantiate(self, identifier: str) -> bool:
        return self._locator.exists(identifier)

    def _canonical(self, identifier: str) -> str:
        """Map an unregistered type name to the identifier of the class it names.

        A class re-exported under another module path resolves to the same
        entry, shared value and contextual bindings as its defining module.
        """
        if self.has(identifier):
            return identifier
        cls = self._locator.locate(identifier)
        if cls is None:
            return identifier
        canonical = self._locator.remember(cls)
        if canonical == identifier:
            return identifier
        logger.debug("Resolving %s as %s", identifier, canonical)
        return self.get_actual(canonical)

    def _build(self, identifier: str, parameters: Dict[str, Any]) -> Any:
        """Instantiate the class named by ``identifier``, auto-wiring its constructor.

        Raises:
            ClassNotFoundError: If no class is named by ``identifier``.
            NotInstantiableError: If the class is abstract or a protocol.
        """
        cls = self._locator.locate(identifier)
        if cls is None:
            raise ClassNotFoundError(identifier)

        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            raise NotInstantiableError(identifier)

        if cls.__init__ is object.__init__ or not has_signature(cls):
            instance = cls()
        else:
            with self._build_stack.building(identifier):
                arguments = self._resolver.constructor_arguments(cls, self, parameters)
            instance = cls(*arguments.args, **arguments.kwargs)
        logger.debug("Built %s", identifier)

        if isinstance(instance, ContainerAware):
            instance.set_container(self)

        if isinstance(instance, Initializable):
            instance.initialize()

        return instance

    # Callables

    def call(
        self,
        callback: Union[Callable[..., Any], str],
        parameters: Optional[Parameters] = None,
        default_method: Optional[str] = None,
    ) -> Any:
        """Invoke a callable with dependency-injected arguments.

        Args:
            callback: A callable, or a ``"Type::method"`` string whose type is
                resolved from the container first.
            parameters: Explicit arguments by parameter name or position.
            default_method: Method used when the string names only a type.

        Raises:
            InvalidCallableError: If ``callback`` is neither callable nor a string,
                or the string does not name a callable method.

        Example:
            >>> container.call("app.jobs.Cleanup::run", {"dry_run": True})
            >>> container.call(lambda mailer: mailer.flush())
        """
        if callable(callback):
            return self._resolver.invoke(callback, self, parameters)

        if not isinstance(callback, str):
            raise InvalidCallableError('"callback" needs to be callable or a "Type::method" string.')

        return self._call_class(callback, parameters, default_method)

    def _call_class(self, callback: str, parameters: Optional[Parameters], default_method: Optional[str]) -> Any:
        segments = callback.split("::")
        method = segments[1] if len(segments) == 2 else default_method
        if len(segments) > 2 or not method:
            raise InvalidCallableError(f"Method {callback} invalid.")

        target = getattr(self.make(segments[0]), method, None)
        if not callable(target):
            raise InvalidCallableError(f"Method {callback} invalid.")

        return self._resolver.invoke(target, self, parameters)

    def method_dependencies(self, callback: Callable[..., Any], parameters: Optional[Parameters] = None) -> List[Any]:
        """Return the injected positional arguments of ``callback`` followed by unmatched parameters."""
        arguments = self._resolver.method_arguments(callback, self, parameters)
        return [*arguments.args, *arguments.kwargs.values(), *arguments.extras.values()]

    # Lifecycle

    def copy(self) -> "Container":
        """Create a container with the same registrations, aliases and contextual bindings.

        Shared values are not carried over, so nothing in the copy is frozen.
        Entries pointing at this container point at the copy instead.
        """
        copied = Container(self._settings)
        copied._inherit(self)
        return copied

    def _inherit(self, parent: "Container") -> None:
        for identifier, entry in parent._registry.entries().items():
            if entry.value is parent:
                continue
            self._registry.put(identifier, entry.value, entry.kind)
        for alias_name, concrete in parent._aliases.mapping().items():
            self._aliases.alias(concrete, alias_name)
        self._contextual.copy_from(parent._contextual)
        self._locator.copy_from(parent._locator)

    def clear(self) -> None:
        """Clear all registrations, aliases, bindings and shared values.

        The container re-registers itself afterwards.
        """
        self._registry.clear()
        self._aliases.clear()
        self._contextual.clear()
        self._build_stack.clear()
        self._locator.clear()
        self._register_defaults()

    # Mapping protocol

    def __getitem__(self, identifier: Identifier) -> Any:
        return self.get(identifier)

    def __setitem__(self, identifier: Identifier, value: Any) -> None:
        self.set(identifier, value)

    def __delitem__(self, identifier: Identifier) -> None:
        self.unset(identifier)

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str) and not inspect.isclass(identifier):
            return False
        return self.has(identifier)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
