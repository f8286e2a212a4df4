"""Application layer - Contextual binding lookup."""

import logging
from typing import Any, Dict, Iterable, Optional

from long_container.domain import NOT_BOUND

logger = logging.getLogger(__name__)


class ContextualBindings:
    """Overrides for a dependency, scoped to the consumer being built.

    A binding ``(consumer, needed) -> implementation`` applies only while
    ``consumer`` is the innermost entry of the build stack. Primitive
    parameters are bound under ``"$" + parameter_name``.

    Attributes:
        _bindings: Consumer identifier to ``{needed identifier: implementation}``.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Dict[str, Any]] = {}

    def bind(self, consumer: str, needed: str, implementation: Any) -> None:
        self._bindings.setdefault(consumer, {})[needed] = implementation
        logger.debug("Contextual binding: %s needs %s", consumer, needed)

    def find(self, current: Optional[str], needed: str) -> Any:
        """Return the binding for ``needed`` while building ``current``, or ``NOT_BOUND``."""
        if current is None:
            return NOT_BOUND
        return self._bindings.get(current, {}).get(needed, NOT_BOUND)

    def lookup(self, current: Optional[str], needed: str, aliases: Iterable[str] = ()) -> Any:
        """Find an override for ``needed``, falling back to its aliases.

        Args:
            current: The identifier on top of the build stack.
            needed: The canonical identifier being resolved.
            aliases: Aliases of ``needed`` in registration order.

        Returns:
            The first matching implementation, or ``NOT_BOUND``.
        """
        binding = self.find(current, needed)
        if binding is not NOT_BOUND:
            return binding

        for alias in aliases:
            binding = self.find(current, alias)
            if binding is not NOT_BOUND:
                return binding

        return NOT_BOUND

    def copy_from(self, other: "ContextualBindings") -> None:
        for consumer, bindings in other._bindings.items():
            self._bindings[consumer] = dict(bindings)

    def clear(self) -> None:
        self._bindings.clear()
