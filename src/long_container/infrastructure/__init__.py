"""
Infrastructure layer - External integrations.

This layer contains the optional facade and integrations with external
frameworks and tools. It depends on both Application and Domain layers.
"""

from . import facade, testing

__all__ = [
    "facade",
    "testing",
]
