from typing import List, Optional


class ContainerError(Exception):
    """Base exception for container-related errors."""


class ResolutionError(ContainerError):
    """Raised by ``make`` when an identifier cannot be resolved.

    Every failure below ``make`` is collapsed into this kind. The original
    error is kept in ``cause`` (and chained as ``__cause__``).

    Attributes:
        identifier: The identifier that was being resolved.
        cause: The underlying error, if any.
    """

    def __init__(self, identifier: str, message: str, cause: Optional[BaseException] = None) -> None:
        self.identifier = identifier
        self.cause = cause
        super().__init__(message)


class NotFoundError(ResolutionError):
    """Raised when an identifier is neither registered nor an existing type name."""

    def __init__(self, identifier: str) -> None:
        super().__init__(identifier, f'Item "{identifier}" does not exist.')


class FrozenEntryError(ContainerError):
    """Raised when overriding an entry already cached as a shared value.

    Attributes:
        identifier: The frozen identifier.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f'Cannot override frozen item "{identifier}".')


class AliasCycleError(ContainerError):
    """Raised when chasing an alias revisits an identifier.

    Attributes:
        chain: The identifiers visited, ending with the repeated one.
    """

    def __init__(self, chain: List[str], message: Optional[str] = None) -> None:
        self.chain = chain
        super().__init__(message or f"Alias cycle detected: {' -> '.join(chain)}")


class SelfAliasError(AliasCycleError):
    """Raised when an identifier is aliased to itself."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__([identifier, identifier], f"{identifier} is aliased to itself.")


class ClassNotFoundError(ContainerError):
    """Raised when a type name does not name any locatable class."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Class {identifier} does not exist.")


class NotInstantiableError(ContainerError):
    """Raised when the build target is abstract, a protocol, or not a class.

    This occurs when an interface is resolved without any binding registered
    for it.
    """

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Target {identifier} is not instantiable.")


class UnresolvableDependencyError(ContainerError):
    """Raised when a parameter has no supplied value, override, or default.

    Attributes:
        parameter: Name of the parameter.
        declaring: Qualified name of the class or callable declaring it.
    """

    def __init__(self, parameter: str, declaring: str) -> None:
        self.parameter = parameter
        self.declaring = declaring
        super().__init__(f"Unresolvable dependency resolving [{parameter}] in {declaring}")


class InvalidCallableError(ContainerError):
    """Raised when ``call`` or ``factory`` receives something that cannot be invoked."""
