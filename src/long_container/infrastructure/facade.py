"""Optional static access to a container.

This is a convenience layer, not part of the core API: nothing in the
package reads the facade's container. Applications that want class-level
access install a container explicitly with ``Facade.set_container``.
"""

from typing import Any, Optional

from long_container.application.class_locator import identifier_of
from long_container.domain import ContainerError, IContainer


class FacadeMeta(type):
    """Forwards attribute access on facade classes to their resolved root."""

    def __getattr__(cls, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return getattr(cls.get_facade_root(), name)


class Facade(metaclass=FacadeMeta):
    """Base class proxying class-level attribute access to a container entry.

    Subclasses name the entry by overriding ``facade_accessor``.

    Example:
        >>> class Mail(Facade):
        ...     @classmethod
        ...     def facade_accessor(cls):
        ...         return "mailer"
        >>>
        >>> Facade.set_container(container)
        >>> Mail.send("ops@example.com", "Deploy finished")
    """

    _container: Optional[IContainer] = None

    @classmethod
    def set_container(cls, container: Optional[IContainer]) -> None:
        """Install the container shared by every facade (``None`` uninstalls it)."""
        Facade._container = container

    @classmethod
    def get_container(cls) -> Optional[IContainer]:
        return Facade._container

    @classmethod
    def facade_accessor(cls) -> Any:
        raise ContainerError(f"Facade {cls.__name__} does not implement facade_accessor.")

    @classmethod
    def get_facade_root(cls) -> Any:
        """Resolve the object this facade stands for.

        Raises:
            ContainerError: If no container is installed.
        """
        accessor = cls.facade_accessor()
        if not isinstance(accessor, str) and not isinstance(accessor, type):
            return accessor

        container = Facade._container
        if container is None:
            raise ContainerError(f'A facade root "{identifier_of(accessor)}" does not exist: no container installed.')
        return container.get(accessor)


class ContainerFacade(Facade):
    """Facade for the installed container itself."""

    @classmethod
    def facade_accessor(cls) -> Any:
        return IContainer
