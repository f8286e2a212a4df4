import inspect
import logging
import types
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union, get_args, get_origin, get_type_hints

from long_container.domain import (
    NOT_BOUND,
    IContainer,
    InjectedArguments,
    IResolver,
    Parameters,
    UnresolvableDependencyError,
)

logger = logging.getLogger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def dependency_class(annotation: Any) -> Optional[Type[Any]]:
    """Return the class a parameter annotation asks for, or ``None`` for primitives.

    ``Optional[X]`` is unwrapped to ``X``. Builtin types (``str``, ``int``,
    ``list``...) and typing constructs that are not plain classes count as
    primitives.
    """
    if annotation is inspect.Parameter.empty:
        return None

    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        annotation = members[0]

    if inspect.isclass(annotation) and annotation.__module__ != "builtins":
        return annotation
    return None


def is_closure(value: Any) -> bool:
    """Whether ``value`` is a callable recipe rather than a class."""
    return callable(value) and not inspect.isclass(value)


def has_signature(cls: Type[Any]) -> bool:
    """Whether the constructor of ``cls`` can be introspected.

    Subclasses of builtin types that declare no constructor of their own
    (``class Bag(dict)``, ``collections.OrderedDict``) have none.
    """
    try:
        inspect.signature(cls)
    except (ValueError, TypeError):
        return False
    return True


def _type_hints(target: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError, AttributeError):
        # Unresolvable forward references fall back to the raw annotations
        return {}


def _introspect(callback: Callable[..., Any]) -> Tuple[inspect.Signature, Dict[str, Any]]:
    signature = inspect.signature(callback)
    if inspect.isclass(callback):
        hints = _type_hints(callback.__init__)
    elif inspect.isroutine(callback):
        hints = _type_hints(callback)
    else:
        hints = _type_hints(callback.__call__)
    return signature, hints


def _declaring_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)


class DependencyResolver(IResolver):
    """Resolves parameters using signature introspection and type hints.

    Each formal parameter is filled, in declaration order, from the supplied
    parameters, a contextual override, the container, or its default.
    """

    def constructor_arguments(
        self,
        cls: Type[Any],
        container: IContainer,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> InjectedArguments:
        """Resolve all constructor arguments of ``cls``.

        Args:
            cls: The class about to be instantiated.
            container: The container resolving class-typed parameters and overrides.
            parameters: Explicit values keyed by parameter name.

        Returns:
            Arguments ready for ``cls(*args, **kwargs)``.

        Raises:
            UnresolvableDependencyError: If a primitive parameter has no value, override, or default.

        Example:
            >>> class UserService:
            ...     def __init__(self, db: Database, page_size: int = 20):
            ...         self.db = db
            ...         self.page_size = page_size
            >>>
            >>> arguments = resolver.constructor_arguments(UserService, container)
        """
        supplied = dict(parameters or {})
        signature, hints = _introspect(cls)
        arguments = InjectedArguments()

        for name, parameter in signature.parameters.items():
            if parameter.kind in _VARIADIC:
                continue

            if name in supplied:
                value = supplied.pop(name)
            else:
                dependency = dependency_class(hints.get(name, parameter.annotation))
                if dependency is None:
                    value = self._resolve_primitive(parameter, container, _declaring_name(cls))
                else:
                    value = self._resolve_class(parameter, dependency, container)

            self._place(arguments, parameter, value)

        arguments.extras.update(supplied)
        return arguments

    def method_arguments(
        self,
        callback: Callable[..., Any],
        container: IContainer,
        parameters: Optional[Parameters] = None,
    ) -> InjectedArguments:
        """Resolve the arguments of an ad-hoc callable.

        Besides names, supplied values may be keyed by position. Class-typed
        parameters are resolved through ``container.make``. Supplied values
        no parameter consumed are returned in ``extras``.

        Args:
            callback: The function, method or callable object to inspect.
            container: The container resolving class-typed parameters.
            parameters: Explicit values keyed by parameter name or index.

        Raises:
            UnresolvableDependencyError: If a parameter has no value from any source.
        """
        supplied: Dict[Union[str, int], Any] = dict(parameters or {})
        signature, hints = _introspect(callback)
        arguments = InjectedArguments()

        for position, (name, parameter) in enumerate(signature.parameters.items()):
            if parameter.kind in _VARIADIC:
                continue

            dependency = dependency_class(hints.get(name, parameter.annotation))
            if name in supplied:
                value = supplied.pop(name)
            elif dependency is not None:
                value = container.make(dependency)
            elif position in supplied:
                value = supplied.pop(position)
            elif parameter.default is not inspect.Parameter.empty:
                value = parameter.default
            else:
                raise UnresolvableDependencyError(name, _declaring_name(callback))

            self._place(arguments, parameter, value)

        arguments.extras.update(supplied)
        return arguments

    def invoke(self, callback: Callable[..., Any], container: IContainer, parameters: Optional[Parameters] = None) -> Any:
        """Call ``callback`` with injected arguments."""
        arguments = self.method_arguments(callback, container, parameters)
        kinds = {parameter.kind for parameter in inspect.signature(callback).parameters.values()}
        args, kwargs = arguments.for_call(
            inspect.Parameter.VAR_POSITIONAL in kinds,
            inspect.Parameter.VAR_KEYWORD in kinds,
        )
        return callback(*args, **kwargs)

    def _resolve_primitive(self, parameter: inspect.Parameter, container: IContainer, declaring: str) -> Any:
        concrete = container.contextual_concrete("$" + parameter.name)
        if concrete is not NOT_BOUND:
            return concrete(container) if is_closure(concrete) else concrete

        if parameter.default is not inspect.Parameter.empty:
            return parameter.default

        raise UnresolvableDependencyError(parameter.name, declaring)

    def _resolve_class(self, parameter: inspect.Parameter, dependency: Type[Any], container: IContainer) -> Any:
        try:
            return container.resolve(dependency)
        except Exception:
            # Optional dependencies fall back to their default
            if parameter.default is not inspect.Parameter.empty:
                logger.debug("Using default for optional parameter %s", parameter.name)
                return parameter.default
            raise

    @staticmethod
    def _place(arguments: InjectedArguments, parameter: inspect.Parameter, value: Any) -> None:
        if parameter.kind == inspect.Parameter.KEYWORD_ONLY:
            arguments.kwargs[parameter.name] = value
        else:
            arguments.args.append(value)
