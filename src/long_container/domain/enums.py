from enum import Enum


class EntryKind(str, Enum):
    """Classifies how a registered entry is resolved.

    Attributes:
        PLAIN: Resolved normally (class name, closure recipe or built value), cached as a singleton.
        RAW: Returned verbatim, never instantiated nor cached.
        FACTORY: Callable re-invoked with the container on every resolution.
    """

    PLAIN = "plain"
    RAW = "raw"
    FACTORY = "factory"

    def __str__(self) -> str:
        return self.value


class Unbound(Enum):
    """Sentinel type marking the absence of a contextual binding."""

    TOKEN = "not_bound"


NOT_BOUND = Unbound.TOKEN
