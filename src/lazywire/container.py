"""The dependency injection container.

A :class:`Container` maps identifiers to services and builds them lazily. When
a service is requested, the container introspects the constructor or factory
that produces it and requests every parameter annotated with a class from
itself, recursively, so object graphs are wired up without any further
configuration.

Example:
    >>> container = Container()
    >>> container.share(Database, PostgresDatabase, aliases=["db"])
    >>> container.inflect(LoggerAware, "set_logger")
    >>> service = container.get(UserService)
    >>> container.get("db") is container.get(Database)  # True
"""

import inspect
import logging
import threading
from contextlib import nullcontext
from typing import Any, Callable, Iterable, Mapping, Optional, get_type_hints

from lazywire.arguments import ArgumentResolver
from lazywire.config import ContainerConfig
from lazywire.domain import Identifier, InstanceDefinition
from lazywire.errors import (
    CircularReferenceError,
    DependencyError,
    NotFoundError,
    ResolutionFailedError,
    UnresolvableParameterError,
)
from lazywire.factory import Factory, FactoryBuilder, to_target
from lazywire.identifiers import display_name, normalize
from lazywire.inflector import Inflector
from lazywire.registry import ServiceRegistry

__all__ = ["Container"]

logger = logging.getLogger(__name__)


class Container:
    """Registry and resolution engine for services.

    Services are registered with :meth:`set` (a new instance on every
    :meth:`get`) or :meth:`share` (one instance, built on first use). Classes
    that were never registered are built on demand unless the container is
    configured with ``auto_wire=False``.

    Factories are built once per identifier and kept. Redefining an
    identifier is therefore only observed before it is first resolved.
    """

    def __init__(self, config: Optional[ContainerConfig] = None):
        self.config = config or ContainerConfig()
        self._registry = ServiceRegistry(self.config.auto_wire)
        self._resolver = ArgumentResolver(self.get)
        self._inflector = Inflector(self._resolver)
        self._factory_builder = FactoryBuilder(self._registry, self._resolver, self.get)
        self._factories: dict[str, Factory] = {}
        self._instances: dict[str, Any] = {}
        self._resolving: dict[str, None] = {}
        self._lock = threading.RLock() if self.config.thread_safe else nullcontext()

    def set(self, identifier: Identifier, entry: Any, aliases: Iterable[Identifier] = ()) -> None:
        """Register ``entry`` under ``identifier``.

        See :meth:`ServiceRegistry.set` for the accepted entries. Ready-made
        instances are shared; everything else is built afresh on each
        :meth:`get`.
        """
        with self._lock:
            self._store(identifier, self._registry.set(identifier, entry, aliases))

    def share(self, identifier: Identifier, entry: Any, aliases: Iterable[Identifier] = ()) -> None:
        """Register ``entry`` under ``identifier`` as a singleton."""
        with self._lock:
            self._store(identifier, self._registry.share(identifier, entry, aliases))

    singleton = share

    def alias(self, identifier: Identifier, alias: Identifier) -> None:
        with self._lock:
            self._registry.alias(identifier, alias)

    def has(self, identifier: Identifier) -> bool:
        with self._lock:
            return self._registry.has(identifier)

    def inflect(
        self, identifier: Identifier, method: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Call ``method`` on every object built by the container that is an instance of ``identifier``.

        Args:
            identifier: The class (or path to the class) declaring ``method``.
            method: Name of the method to call.
            arguments: Explicit values for the method's parameters. Parameters
                not given here are resolved like constructor parameters.
        """
        with self._lock:
            cls = self._registry.validate_identifier(identifier)
            self._inflector.add_inflection(cls, method, arguments)

    def apply_inflections(self, obj: Any) -> Any:
        with self._lock:
            return self._inflector.apply_inflections(obj)

    def get(self, identifier: Identifier, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Resolve the service registered under ``identifier``.

        Args:
            identifier: A class, dotted path or alias.
            arguments: Explicit values for constructor or factory parameters,
                by name. These take precedence over anything the container
                would resolve.

        Returns:
            The shared instance if one is cached, otherwise a new object.

        Raises:
            NotFoundError: If nothing is registered and no class matches.
            CircularReferenceError: If the service depends on itself.
            ResolutionFailedError: If the factory cannot be built or a
                parameter cannot be resolved.
        """
        with self._lock:
            requested = normalize(identifier)
            key = self._registry.resolve_alias(requested)
            if not self._registry.has(identifier if key == requested else key):
                raise NotFoundError(display_name(identifier), self._chain())

            if key in self._instances:
                return self._instances[key]

            if key in self._resolving:
                raise CircularReferenceError(display_name(identifier), self._chain() + [key])

            self._resolving[key] = None
            try:
                factory = self._factory(key, identifier)
                try:
                    obj = factory(arguments or {})
                    self._inflector.apply_inflections(obj)
                except UnresolvableParameterError as error:
                    raise ResolutionFailedError(display_name(identifier), self._chain(), error) from error

                if self._registry.is_shared(key):
                    self._instances[key] = obj
            finally:
                del self._resolving[key]

            logger.debug(f"Resolved {key}")
            return obj

    def call(self, target: Any, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Invoke a callable, resolving its parameters like a factory's.

        ``target`` may be a function, a bound method, an invocable object, a
        ``"Type::method"`` reference, or a class (or path to a class) defining
        ``__call__``, which is resolved from the container and then invoked.
        Nothing is registered.
        """
        with self._lock:
            return self._factory_builder.from_target(to_target(target))(arguments or {})

    def provides(
        self,
        identifier: Optional[Identifier] = None,
        shared: bool = False,
        aliases: Iterable[Identifier] = (),
    ) -> Callable:
        """Decorator to register a class or factory function.

        Args:
            identifier: Identifier to register under. Defaults to the class
                itself, or to the return annotation of a function.
            shared: If True, register as a singleton.
            aliases: Further identifiers for the service.

        Example:
            @container.provides(shared=True)
            def make_database(settings: Settings) -> Database:
                return Database(settings.url)
        """

        def decorator(obj):
            provided = identifier or _provided_identifier(obj)
            if shared:
                self.share(provided, obj, aliases)
            else:
                self.set(provided, obj, aliases)
            return obj

        return decorator

    def __getitem__(self, identifier: Identifier) -> Any:
        return self.get(identifier)

    def __contains__(self, identifier: Identifier) -> bool:
        return self.has(identifier)

    def _store(self, identifier: Identifier, definition: Any) -> None:
        if isinstance(definition, InstanceDefinition):
            self._instances[normalize(identifier)] = definition.instance

    def _factory(self, key: str, identifier: Identifier) -> Factory:
        if key not in self._factories:
            try:
                self._factories[key] = self._factory_builder.build(key)
            except DependencyError:
                raise
            except Exception as error:
                raise ResolutionFailedError(display_name(identifier), self._chain(), error) from error
        return self._factories[key]

    def _chain(self) -> list[str]:
        return list(self._resolving)


def _provided_identifier(obj: Any) -> Identifier:
    """Work out the identifier a decorated class or function provides.

    Raises:
        DependencyError: If a function has no class as its return annotation.
    """
    if inspect.isclass(obj):
        return obj
    return_type = get_type_hints(obj).get("return", None)
    if inspect.isclass(return_type):
        return return_type
    raise DependencyError(
        f"Function {obj.__name__} is decorated with @provides "
        "but does not have a class as its return annotation"
    )
