"""Application layer - Tracking the identifiers under construction."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional


class BuildStack:
    """The chain of identifiers currently being built.

    Uses thread-local storage so each thread sees only its own builds. The
    innermost entry scopes which contextual bindings apply.

    Attributes:
        _local: Thread-local storage for build stacks.
    """

    def __init__(self) -> None:
        """Initialize the build stack with thread-local storage."""
        self._local = threading.local()

    def _get_stack(self) -> List[str]:
        """Get the current thread's build stack.

        Returns:
            The build stack for the current thread.
        """
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, identifier: str) -> None:
        self._get_stack().append(identifier)

    @contextmanager
    def building(self, identifier: str) -> Iterator[None]:
        """Keep ``identifier`` on the stack for the duration of the block.

        The stack is restored to its previous depth even when the block raises.

        Example:
            >>> with stack.building("app.Mailer"):
            ...     stack.current()
            'app.Mailer'
        """
        stack = self._get_stack()
        depth = len(stack)
        self.push(identifier)
        try:
            yield
        finally:
            del stack[depth:]

    def current(self) -> Optional[str]:
        stack = self._get_stack()
        return stack[-1] if stack else None

    def snapshot(self) -> List[str]:
        return list(self._get_stack())

    def clear(self) -> None:
        """Clear the entire build stack.

        Useful for testing or error recovery.
        """
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
