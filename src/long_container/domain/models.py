from typing import Any, Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from long_container.domain.enums import EntryKind


class ContainerSettings(BaseModel):
    """Configuration for a container instance.

    Attributes:
        register_self: Register the container under its own class and interface identifiers.
        import_type_names: Locate unregistered type names by importing their dotted path.
    """

    model_config = ConfigDict(frozen=True)

    register_self: bool = Field(
        default=True,
        description="Register the container under its own class and interface identifiers.",
    )
    import_type_names: bool = Field(
        default=True,
        description="Locate unregistered type names by importing their dotted path.",
    )


class Entry(BaseModel):
    """A registered item and its classification.

    Attributes:
        identifier: The identifier the item is stored under.
        value: The stored value, factory callable, class, class name or closure recipe.
        kind: How the entry is resolved.
        resolution_count: Number of times this entry has been resolved.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    identifier: str = Field(..., description="The identifier the item is stored under.")
    value: Any = Field(..., description="The stored value.")
    kind: EntryKind = Field(default=EntryKind.PLAIN, description="How the entry is resolved.")
    resolution_count: int = Field(
        default=0,
        description="Number of times this entry has been resolved.",
    )


class InjectedArguments(BaseModel):
    """Arguments produced by auto-wiring a callable or constructor.

    Attributes:
        args: Positional arguments, in declaration order.
        kwargs: Keyword-only arguments.
        extras: Supplied parameters no formal parameter consumed, keyed by name or position.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    args: List[Any] = Field(default_factory=list)
    kwargs: Dict[str, Any] = Field(default_factory=dict)
    extras: Dict[Union[str, int], Any] = Field(default_factory=dict)

    def for_call(self, accepts_var_positional: bool, accepts_var_keyword: bool) -> Tuple[List[Any], Dict[str, Any]]:
        """Build the final ``(args, kwargs)`` pair.

        Extras are appended only where the target can absorb them: positional
        extras through ``*args``, named extras through ``**kwargs``.
        """
        args = list(self.args)
        kwargs = dict(self.kwargs)
        for key, value in self.extras.items():
            if isinstance(key, int):
                if accepts_var_positional:
                    args.append(value)
            elif accepts_var_keyword:
                kwargs[key] = value
        return args, kwargs
