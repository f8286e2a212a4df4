"""Application layer - Alias resolution."""

import logging
from typing import Dict, List

from long_container.domain import AliasCycleError, SelfAliasError

logger = logging.getLogger(__name__)


class AliasResolver:
    """Maps alias identifiers to the identifiers they stand for.

    Aliases chain: resolving an alias follows every hop until an identifier
    that is not itself an alias. The reverse index keeps, for each target,
    its aliases in registration order.

    Attributes:
        _aliases: Alias identifier to target identifier.
        _reverse: Target identifier to the aliases registered for it.
    """

    def __init__(self) -> None:
        self._aliases: Dict[str, str] = {}
        self._reverse: Dict[str, List[str]] = {}

    def alias(self, concrete: str, alias_name: str) -> None:
        """Register ``alias_name`` as another name for ``concrete``.

        Re-pointing an existing alias moves it in the reverse index.
        """
        previous = self._aliases.get(alias_name)
        if previous is not None:
            self._drop_reverse(previous, alias_name)

        self._aliases[alias_name] = concrete
        self._reverse.setdefault(concrete, []).append(alias_name)
        logger.debug("Aliased %s -> %s", alias_name, concrete)

    def resolve_actual(self, identifier: str) -> str:
        """Follow aliases from ``identifier`` to the canonical identifier.

        Raises:
            SelfAliasError: If a hop maps an identifier to itself.
            AliasCycleError: If the chain revisits an identifier.

        Example:
            >>> resolver.alias("c", "b")
            >>> resolver.alias("b", "a")
            >>> resolver.resolve_actual("a")
            'c'
        """
        chain = [identifier]
        current = identifier
        while current in self._aliases:
            target = self._aliases[current]
            if target == current:
                raise SelfAliasError(current)
            if target in chain:
                raise AliasCycleError(chain + [target])
            chain.append(target)
            current = target
        return current

    def is_alias(self, identifier: str) -> bool:
        return identifier in self._aliases

    def aliases_of(self, concrete: str) -> List[str]:
        return list(self._reverse.get(concrete, []))

    def remove(self, alias_name: str) -> None:
        target = self._aliases.pop(alias_name, None)
        if target is not None:
            self._drop_reverse(target, alias_name)

    def identifiers(self) -> List[str]:
        return list(self._aliases)

    def mapping(self) -> Dict[str, str]:
        """Return a copy of the alias table in registration order."""
        return dict(self._aliases)

    def clear(self) -> None:
        self._aliases.clear()
        self._reverse.clear()

    def _drop_reverse(self, target: str, alias_name: str) -> None:
        names = self._reverse.get(target)
        if names and alias_name in names:
            names.remove(alias_name)
            if not names:
                del self._reverse[target]
