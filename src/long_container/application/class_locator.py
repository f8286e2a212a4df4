"""Application layer - Mapping identifiers to classes."""

import importlib
import inspect
import logging
from typing import Any, Dict, Optional, Type

logger = logging.getLogger(__name__)


def identifier_of(target: Any) -> str:
    """Return the identifier for a class or pass a string identifier through.

    Args:
        target: A class or an identifier.

    Returns:
        ``"module.QualName"`` for classes, ``target`` unchanged for strings.

    Example:
        >>> identifier_of(collections.OrderedDict)
        'collections.OrderedDict'
    """
    if isinstance(target, str):
        return target
    if inspect.isclass(target):
        return f"{target.__module__}.{target.__qualname__}"
    raise TypeError(f"Identifier must be a string or a class, got {type(target).__name__}")


class ClassLocator:
    """Finds the class named by an identifier.

    Classes the container has already seen are remembered, which is the only
    way to locate classes defined inside functions. Other identifiers are
    looked up as importable dotted paths unless importing is disabled.

    Attributes:
        _known: Classes remembered by identifier.
    """

    def __init__(self, allow_import: bool = True) -> None:
        self._known: Dict[str, Type[Any]] = {}
        self._allow_import = allow_import

    def remember(self, cls: Type[Any]) -> str:
        """Remember a class and return its identifier."""
        identifier = identifier_of(cls)
        self._known.setdefault(identifier, cls)
        return identifier

    def locate(self, identifier: str) -> Optional[Type[Any]]:
        """Return the class named by ``identifier``, or ``None``.

        Args:
            identifier: A remembered identifier or a dotted ``module.QualName`` path.
        """
        if identifier in self._known:
            return self._known[identifier]

        if not self._allow_import:
            return None

        found = self._import(identifier)
        if found is not None:
            self._known[identifier] = found
        return found

    def exists(self, identifier: str) -> bool:
        return self.locate(identifier) is not None

    def _import(self, identifier: str) -> Optional[Type[Any]]:
        parts = identifier.split(".")
        # Try the longest importable module prefix first
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target: Any = importlib.import_module(module_name)
            except (ImportError, TypeError, ValueError):
                continue
            try:
                for attribute in parts[split:]:
                    target = getattr(target, attribute)
            except AttributeError:
                return None
            if inspect.isclass(target):
                logger.debug("Located class %s by import", identifier)
                return target
            return None
        return None

    def copy_from(self, other: "ClassLocator") -> None:
        for identifier, cls in other._known.items():
            self._known.setdefault(identifier, cls)

    def clear(self) -> None:
        self._known.clear()
