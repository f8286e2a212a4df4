"""
long-container: Identifier-based dependency injection container with auto-wiring.

Public API exports for the long-container package.
"""

# Application exports
from long_container.application.class_locator import identifier_of
from long_container.application.container import Container

# Domain exports
from long_container.domain.enums import EntryKind
from long_container.domain.exceptions import (
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
from long_container.domain.interfaces import (
    ContainerAware,
    ContainerAwareMixin,
    IContainer,
    Initializable,
    IProvider,
)
from long_container.domain.models import ContainerSettings

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerSettings",
    "identifier_of",
    # Capabilities
    "IContainer",
    "IProvider",
    "ContainerAware",
    "ContainerAwareMixin",
    "Initializable",
    # Enums
    "EntryKind",
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
]
