"""Application layer - Item storage and classification."""

import logging
from typing import Any, Dict, List, Optional, Set

from long_container.domain import Entry, EntryKind, FrozenEntryError

logger = logging.getLogger(__name__)


class ItemRegistry:
    """Stores registered items, their classification and shared values.

    Each identifier carries exactly one ``EntryKind``. Storing a shared value
    freezes the identifier; frozen identifiers reject re-registration until
    they are removed.

    Attributes:
        _entries: Registered entries keyed by identifier.
        _shared: Resolved singletons keyed by identifier.
        _frozen: Identifiers whose registration may no longer change.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Entry] = {}
        self._shared: Dict[str, Any] = {}
        self._frozen: Set[str] = set()

    def put(self, identifier: str, value: Any, kind: EntryKind = EntryKind.PLAIN) -> Entry:
        """Store ``value`` under ``identifier`` with the given classification.

        Raises:
            FrozenEntryError: If the identifier is frozen.
        """
        if self.is_frozen(identifier):
            raise FrozenEntryError(identifier)

        entry = Entry(identifier=identifier, value=value, kind=kind)
        self._entries[identifier] = entry
        logger.debug("Registered %s entry %s", kind, identifier)
        return entry

    def entry(self, identifier: str) -> Optional[Entry]:
        return self._entries.get(identifier)

    def contains(self, identifier: str) -> bool:
        return identifier in self._entries

    def is_raw(self, identifier: str) -> bool:
        entry = self._entries.get(identifier)
        return entry is not None and entry.kind == EntryKind.RAW

    def is_factory(self, identifier: str) -> bool:
        entry = self._entries.get(identifier)
        return entry is not None and entry.kind == EntryKind.FACTORY

    def is_frozen(self, identifier: str) -> bool:
        return identifier in self._frozen

    def has_shared(self, identifier: str) -> bool:
        return identifier in self._shared

    def shared(self, identifier: str) -> Any:
        return self._shared[identifier]

    def share(self, identifier: str, instance: Any) -> None:
        """Cache ``instance`` as the shared value of ``identifier`` and freeze it."""
        self._shared[identifier] = instance
        self._frozen.add(identifier)
        logger.debug("Cached shared value for %s", identifier)

    def record_resolution(self, identifier: str) -> None:
        entry = self._entries.get(identifier)
        if entry is not None:
            entry.resolution_count += 1

    def remove(self, identifier: str) -> bool:
        """Remove the entry, its classification, frozen flag and shared value together.

        Returns:
            Whether anything was removed.
        """
        known = identifier in self._entries or identifier in self._shared
        self._entries.pop(identifier, None)
        self._shared.pop(identifier, None)
        self._frozen.discard(identifier)
        return known

    def identifiers(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> Dict[str, Entry]:
        """Return a copy of the registered entries."""
        return {identifier: entry.model_copy() for identifier, entry in self._entries.items()}

    def clear(self) -> None:
        self._entries.clear()
        self._shared.clear()
        self._frozen.clear()
