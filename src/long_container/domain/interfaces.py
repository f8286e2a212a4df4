from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

Identifier = Union[str, Type[Any]]
Parameters = Mapping[Union[str, int], Any]


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def set(self, identifier: Identifier, value: Any) -> None:
        """Store a value under an identifier.

        Raises:
            FrozenEntryError: If the identifier is already cached as a shared value.
        """

    @abstractmethod
    def get(self, identifier: Identifier) -> Any:
        """Resolve an identifier."""

    @abstractmethod
    def has(self, identifier: Identifier) -> bool:
        """Check whether an identifier is registered directly or as an alias."""

    @abstractmethod
    def unset(self, identifier: Identifier) -> None:
        """Remove an identifier and everything recorded about it."""

    @abstractmethod
    def make(self, identifier: Identifier, parameters: Optional[Parameters] = None) -> Any:
        """Resolve an identifier, collapsing failures into ``ResolutionError``."""

    @abstractmethod
    def resolve(self, identifier: Identifier, parameters: Optional[Parameters] = None) -> Any:
        """Resolve an identifier, raising the specific error kinds."""

    @abstractmethod
    def call(
        self,
        callback: Union[Callable[..., Any], str],
        parameters: Optional[Parameters] = None,
        default_method: Optional[str] = None,
    ) -> Any:
        """Invoke a callable or ``"Type::method"`` string with injected arguments."""

    @abstractmethod
    def contextual_concrete(self, identifier: str) -> Any:
        """Return the contextual override for ``identifier`` in the current build, or ``NOT_BOUND``."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every direct and alias identifier."""


class IProvider(ABC):
    """Populates a container with registrations."""

    @abstractmethod
    def register(self, container: IContainer) -> None:
        """Register items into the container.

        Args:
            container: The container to populate.
        """


class ContainerAware(ABC):
    """Capability of objects that hold a reference to their container.

    Instances built by the container receive it through ``set_container``
    right after construction.
    """

    @abstractmethod
    def get_container(self) -> Optional[IContainer]:
        """Return the container this object was built by."""

    @abstractmethod
    def set_container(self, container: IContainer) -> None:
        """Attach the container to this object."""


class ContainerAwareMixin(ContainerAware):
    """Default ``ContainerAware`` implementation storing the container on the instance."""

    _container: Optional[IContainer] = None

    def get_container(self) -> Optional[IContainer]:
        return self._container

    def set_container(self, container: IContainer) -> None:
        self._container = container


class Initializable(ABC):
    """Capability of objects needing a post-construction hook.

    ``initialize`` is called with no arguments once the container has built
    the instance and attached itself to it.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Finish initialisation after construction."""


class IResolver(ABC):
    """Abstract interface for parameter auto-wiring."""

    @abstractmethod
    def constructor_arguments(
        self,
        cls: Type[Any],
        container: IContainer,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Resolve the constructor arguments of ``cls``."""

    @abstractmethod
    def method_arguments(
        self,
        callback: Callable[..., Any],
        container: IContainer,
        parameters: Optional[Parameters] = None,
    ) -> Any:
        """Resolve the arguments of an ad-hoc callable."""
