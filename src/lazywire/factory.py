"""Construction of memoizable factories from service definitions.

A factory is a closure taking a mapping of explicit arguments and returning a
new service instance. The definition is inspected once, when the factory is
built, so the cost of introspection is paid once per identifier.
"""

import inspect
import logging
from typing import Any, Callable, Mapping

from lazywire.arguments import ArgumentResolver
from lazywire.domain import (
    BoundMethodTarget,
    CallableDefinition,
    CallableTarget,
    ClassDefinition,
    FunctionTarget,
    Identifier,
    StaticMethodTarget,
)
from lazywire.errors import DependencyError, NoSuchMethodError, UnknownClassError
from lazywire.identifiers import locate, locate_type
from lazywire.reflection import construct, invoke
from lazywire.registry import STATIC_REFERENCE_SEPARATOR, ServiceRegistry

__all__ = ["Factory", "FactoryBuilder", "to_target"]

Factory = Callable[[Mapping[str, Any]], Any]

logger = logging.getLogger(__name__)


class FactoryBuilder:
    """Build :data:`Factory` closures for registered identifiers and arbitrary callables."""

    def __init__(
        self,
        registry: ServiceRegistry,
        resolver: ArgumentResolver,
        get: Callable[[Identifier], Any],
    ):
        self._registry = registry
        self._resolver = resolver
        self._get = get

    def build(self, key: str) -> Factory:
        """Build the factory for a normalized identifier.

        Identifiers without a definition are constructed from the class they
        name.
        """
        definition = self._registry.definition(key)
        logger.debug(f"Building factory for {key} from {type(definition).__name__}")

        if isinstance(definition, CallableDefinition):
            return self.from_target(to_target(definition.factory))
        if isinstance(definition, ClassDefinition):
            return self.from_class(definition.cls)
        return self.from_class(self._registry.find_type(key))

    def from_class(self, cls: type) -> Factory:
        signature = self._resolver.reflect(cls)
        if not signature.parameters:
            return lambda arguments: cls()

        def factory(arguments: Mapping[str, Any]) -> Any:
            return construct(cls, signature, self._resolver.resolve(signature, arguments))

        return factory

    def from_target(self, target: CallableTarget) -> Factory:
        """Build a factory invoking a classified callable.

        A class receiver is resolved through the container each time the
        factory runs, since building it may need arguments not known yet.
        """
        if isinstance(target, FunctionTarget):
            signature = self._resolver.reflect(target.function)

            def bind() -> Callable:
                return target.function

        elif isinstance(target, StaticMethodTarget):
            signature = self._resolver.reflect_method(target.owner, target.method)

            def bind() -> Callable:
                return getattr(target.owner, target.method)

        elif target.receiver_is_class:
            signature = self._resolver.reflect_method(target.receiver, target.method)

            def bind() -> Callable:
                return getattr(self._get(target.receiver), target.method)

        else:
            method = getattr(target.receiver, target.method)
            signature = self._resolver.reflect(method)

            def bind() -> Callable:
                return method

        def factory(arguments: Mapping[str, Any]) -> Any:
            function = bind()
            return invoke(signature, function, self._resolver.resolve(signature, arguments))

        return factory


def to_target(entry: Any) -> CallableTarget:
    """Classify a callable into the shape it is invoked with.

    Example:
        >>> to_target(make_database)                 # FunctionTarget(make_database)
        >>> to_target("app.db.Database::create")     # StaticMethodTarget(Database, "create")
        >>> to_target("app.db.Database::connect")    # BoundMethodTarget(Database, "connect")
        >>> to_target(RequestHandler)                # BoundMethodTarget(RequestHandler, "__call__")
        >>> to_target(RequestHandler())              # BoundMethodTarget(<handler>, "__call__")

    Raises:
        UnknownClassError: If a string names nothing that can be imported.
        NoSuchMethodError: If a ``"Type::method"`` reference names a missing method.
        DependencyError: If ``entry`` is not callable at all.
    """
    if isinstance(entry, str):
        if STATIC_REFERENCE_SEPARATOR in entry:
            owner_path, _, method = entry.partition(STATIC_REFERENCE_SEPARATOR)
            owner = locate_type(owner_path)
            if owner is None:
                raise UnknownClassError(owner_path)
            return _method_target(owner, method)

        located = locate(entry)
        if located is None:
            raise UnknownClassError(entry)
        entry = located

    if inspect.isclass(entry):
        if inspect.isfunction(inspect.getattr_static(entry, "__call__", None)):
            return BoundMethodTarget(entry, "__call__")
        return FunctionTarget(entry)

    if inspect.isroutine(entry):
        return FunctionTarget(entry)
    if inspect.isfunction(getattr(type(entry), "__call__", None)):
        return BoundMethodTarget(entry, "__call__")
    if callable(entry):
        return FunctionTarget(entry)

    raise DependencyError(f"{entry} is not callable")


def _method_target(owner: type, method: str) -> CallableTarget:
    if not callable(getattr(owner, method, None)):
        raise NoSuchMethodError(owner, method)
    if isinstance(inspect.getattr_static(owner, method), (staticmethod, classmethod)):
        return StaticMethodTarget(owner, method)
    return BoundMethodTarget(owner, method)
