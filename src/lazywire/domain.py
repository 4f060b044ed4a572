"""Domain models used throughout the container."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

__all__ = [
    "Identifier",
    "ParameterDescriptor",
    "Signature",
    "InstanceDefinition",
    "ClassDefinition",
    "CallableDefinition",
    "Definition",
    "FunctionTarget",
    "StaticMethodTarget",
    "BoundMethodTarget",
    "CallableTarget",
]


Identifier = Union[str, type]
"""Type alias for keys used to register and look up services.

Services can be identified either by a class or by a string. Strings are
dotted paths to classes (``"app.db.Database"``) or free-form aliases.

Example:
    >>> container.get(Database)          # Lookup by class
    >>> container.get("app.db.database") # Same service, by path
"""


@dataclass(frozen=True)
class ParameterDescriptor:
    """Describes one parameter of a callable or constructor.

    Attributes:
        name: The parameter name in the callable's signature.
        identifier: The identifier to request from the container for this
            parameter, or None if it is not injectable.
        has_default: Whether the parameter declares a default value.
        default: The default value, when there is one.
        kind: The :class:`inspect.Parameter` kind, used to pass keyword-only
            parameters by name.
    """

    name: str
    identifier: Optional[Identifier]
    has_default: bool
    default: Any = None
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD


@dataclass(frozen=True)
class Signature:
    """The introspected parameter list of a callable, in declaration order."""

    name: str
    parameters: tuple[ParameterDescriptor, ...]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class InstanceDefinition:
    instance: Any


@dataclass(frozen=True)
class ClassDefinition:
    cls: type


@dataclass(frozen=True)
class CallableDefinition:
    factory: Any


Definition = Union[InstanceDefinition, ClassDefinition, CallableDefinition]


@dataclass(frozen=True)
class FunctionTarget:
    """A plain callable invoked as-is."""

    function: Callable


@dataclass(frozen=True)
class StaticMethodTarget:
    """A static or class method looked up on its owning class."""

    owner: type
    method: str


@dataclass(frozen=True)
class BoundMethodTarget:
    """An instance method.

    The receiver is either an object, or a class that is resolved through the
    container when the target is invoked.
    """

    receiver: Any
    method: str

    @property
    def receiver_is_class(self) -> bool:
        return inspect.isclass(self.receiver)


CallableTarget = Union[FunctionTarget, StaticMethodTarget, BoundMethodTarget]
