"""
Domain layer - Core types of the container.

This layer contains the enums, exceptions, capability interfaces and models
shared by the rest of the package. It has no dependencies on other layers.
"""

from .enums import NOT_BOUND, EntryKind, Unbound
from .exceptions import (
    AliasCycleError,
    ClassNotFoundError,
    ContainerError,
    FrozenEntryError,
    InvalidCallableError,
    NotFoundError,
    NotInstantiableError,
    ResolutionError,
    SelfAliasError,
    UnresolvableDependencyError,
)
from .interfaces import (
    ContainerAware,
    ContainerAwareMixin,
    IContainer,
    Identifier,
    Initializable,
    IProvider,
    IResolver,
    Parameters,
)
from .models import ContainerSettings, Entry, InjectedArguments

__all__ = [
    # Enums
    "EntryKind",
    "Unbound",
    "NOT_BOUND",
    # Exceptions
    "ContainerError",
    "ResolutionError",
    "NotFoundError",
    "FrozenEntryError",
    "AliasCycleError",
    "SelfAliasError",
    "ClassNotFoundError",
    "NotInstantiableError",
    "UnresolvableDependencyError",
    "InvalidCallableError",
    # Interfaces
    "IContainer",
    "IProvider",
    "IResolver",
    "ContainerAware",
    "ContainerAwareMixin",
    "Initializable",
    "Identifier",
    "Parameters",
    # Models
    "ContainerSettings",
    "Entry",
    "InjectedArguments",
]
