"""Data types describing a parsed stack file."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _frozen_map(value: Mapping | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class FunctionDescriptor:
    """Build and deploy configuration for one function in a stack file.

    Instances are immutable so they can be handed to a build worker without
    copying. Mapping fields are exposed as read-only views.
    """

    name: str
    image: str = ""
    handler: str = ""
    language: str = ""
    skip_build: bool = False
    build_args: Mapping[str, str] = field(default_factory=dict)
    fprocess: str = ""
    environment: Mapping[str, str] = field(default_factory=dict)
    environment_file: tuple[str, ...] = ()
    labels: Mapping[str, str] = field(default_factory=dict)
    constraints: tuple[str, ...] = ()
    secrets: tuple[str, ...] = ()
    limits: Mapping[str, str] = field(default_factory=dict)
    requests: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("build_args", "environment", "labels", "limits", "requests"):
            object.__setattr__(self, name, _frozen_map(getattr(self, name)))
        for name in ("environment_file", "constraints", "secrets"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))


# Ordered name -> descriptor mapping, in stack file order
FunctionSet = dict[str, FunctionDescriptor]


@dataclass(frozen=True)
class Provider:
    """The provider section of a stack file."""

    name: str
    gateway: str = ""
    network: str = ""


@dataclass
class Stack:
    """A parsed stack file."""

    provider: Provider
    functions: FunctionSet = field(default_factory=dict)
