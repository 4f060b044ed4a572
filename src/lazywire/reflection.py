"""Introspection and invocation of callables and constructors.

This module is the container's only point of contact with :mod:`inspect` and
:mod:`typing`. It turns a function, method or class into a
:class:`~lazywire.domain.Signature` describing each parameter, and invokes
callables with an argument list produced for that signature.
"""

import inspect
import types
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin, get_type_hints

from lazywire.domain import Identifier, ParameterDescriptor, Signature

__all__ = ["introspect", "introspect_method", "invoke", "construct"]

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_UNION_ORIGINS = {Union, getattr(types, "UnionType", Union)}


def introspect(target: Callable) -> Signature:
    """Describe the parameters of a callable, or of a class's constructor.

    Args:
        target: A function, bound method, callable object or class.

    Returns:
        A Signature listing every named parameter in declaration order.
        ``*args`` and ``**kwargs`` are left out.

    Example:
        >>> class Engine:
        ...     def __init__(self, fuel: Fuel, cylinders: int = 4): ...
        >>> introspect(Engine).parameters
        >>> # Returns:
        >>> # (ParameterDescriptor("fuel", Fuel, False),
        >>> #  ParameterDescriptor("cylinders", None, True, 4))
    """
    name = getattr(target, "__qualname__", repr(target))
    if inspect.isclass(target):
        if target.__init__ is object.__init__ and target.__new__ is object.__new__:
            return Signature(name, ())
        hints = _type_hints(target.__init__)
    else:
        hints = _type_hints(target)

    parameters = inspect.signature(target).parameters.values()
    return Signature(
        name,
        tuple(
            _make_descriptor(parameter, hints.get(parameter.name))
            for parameter in parameters
            if parameter.kind not in _VARIADIC
        ),
    )


def introspect_method(owner: type, method: str) -> Signature:
    """Describe a method as it is seen when called on an instance of ``owner``.

    The receiver parameter of instance methods is dropped. Static and class
    methods are described as they are.
    """
    signature = introspect(getattr(owner, method))
    if isinstance(inspect.getattr_static(owner, method), (staticmethod, classmethod)):
        return signature

    receiver_dropped = signature.parameters[1:]
    return Signature(f"{owner.__qualname__}.{method}", receiver_dropped)


def invoke(signature: Signature, function: Callable, arguments: list[Any]) -> Any:
    """Call ``function`` with arguments resolved for ``signature``.

    Keyword-only parameters are passed by name, everything else positionally.
    """
    positional = []
    keywords = {}
    for parameter, value in zip(signature.parameters, arguments):
        if parameter.kind == inspect.Parameter.KEYWORD_ONLY:
            keywords[parameter.name] = value
        else:
            positional.append(value)
    return function(*positional, **keywords)


def construct(cls: type, signature: Signature, arguments: list[Any]) -> Any:
    return invoke(signature, cls, arguments)


def _type_hints(target: Any) -> dict[str, Any]:
    if not hasattr(target, "__annotations__"):
        return {}
    return get_type_hints(target, include_extras=True)


def _make_descriptor(parameter: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
    identifier = _injection_target(annotation)
    has_default = parameter.default is not inspect.Parameter.empty
    return ParameterDescriptor(
        parameter.name,
        identifier,
        has_default,
        parameter.default if has_default else None,
        parameter.kind,
    )


def _injection_target(annotation: Any) -> Optional[Identifier]:
    """Work out which service, if any, an annotation asks for.

    Classes outside ``builtins`` are injected by type. ``Optional[T]`` is
    treated as ``T``. ``Annotated[T, "name"]`` asks for the identifier
    ``"name"``.

    Example:
        >>> _injection_target(Database)                       # Database
        >>> _injection_target(Optional[Database])             # Database
        >>> _injection_target(Annotated[Database, "replica"]) # "replica"
        >>> _injection_target(int)                            # None
    """
    if annotation is None:
        return None

    origin = get_origin(annotation)
    if origin is Annotated:
        base_type, *metadata = get_args(annotation)
        qualifier = next((m for m in metadata if isinstance(m, str)), None)
        return qualifier or _injection_target(base_type)

    if origin in _UNION_ORIGINS:
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return _injection_target(members[0])
        return None

    if origin is None and inspect.isclass(annotation) and annotation.__module__ != "builtins":
        return annotation

    return None
