"""
Application layer - Registration and resolution.

This layer contains the registry, alias and contextual-binding tables, the
build stack and the resolution engine. It depends only on the Domain layer.
"""

from .alias_resolver import AliasResolver
from .build_stack import BuildStack
from .class_locator import ClassLocator, identifier_of
from .container import Container
from .contextual_bindings import ContextualBindings
from .registry import ItemRegistry
from .resolver import DependencyResolver

__all__ = [
    "Container",
    "DependencyResolver",
    "ItemRegistry",
    "AliasResolver",
    "ContextualBindings",
    "BuildStack",
    "ClassLocator",
    "identifier_of",
]
