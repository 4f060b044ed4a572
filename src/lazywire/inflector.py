"""Post-construction method calls applied to objects by type."""

import inspect
import logging
from typing import Any, Mapping, Optional

from lazywire.arguments import ArgumentResolver
from lazywire.errors import InvalidIdentifierError, NoSuchMethodError
from lazywire.reflection import invoke

__all__ = ["Inflector"]

logger = logging.getLogger(__name__)


class Inflector:
    """Calls configured methods on freshly built objects that are instances of a given type.

    An inflection is keyed by the type that declares the method, not by the
    identifier an object was registered under, so an inflection for an
    abstract base applies to every implementation of it.

    Arguments are resolved the first time an inflection is applied and reused
    for every later object it applies to.

    Example:
        >>> inflector.add_inflection(LoggerAware, "set_logger")
        >>> inflector.apply_inflections(service)  # calls service.set_logger(<Logger>)
    """

    def __init__(self, resolver: ArgumentResolver):
        self._resolver = resolver
        self._inflections: dict[type, dict[str, Mapping[str, Any]]] = {}
        self._resolved: dict[tuple[type, str], list[Any]] = {}

    def add_inflection(
        self, cls: type, method: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Register ``method`` to be called on every new instance of ``cls``.

        Raises:
            InvalidIdentifierError: If ``cls`` is not a class.
            NoSuchMethodError: If ``cls`` has no callable attribute ``method``.
        """
        if not inspect.isclass(cls):
            raise InvalidIdentifierError(cls)
        if not callable(getattr(cls, method, None)):
            raise NoSuchMethodError(cls, method)

        self._inflections.setdefault(cls, {})[method] = dict(arguments or {})
        self._resolved.pop((cls, method), None)
        logger.debug(f"Added inflection {cls.__qualname__}.{method}")

    def apply_inflections(self, obj: Any) -> Any:
        for cls, methods in self._inflections.items():
            if not isinstance(obj, cls):
                continue

            for method, overrides in methods.items():
                signature = self._resolver.reflect_method(cls, method)
                if (cls, method) not in self._resolved:
                    self._resolved[(cls, method)] = self._resolver.resolve(signature, overrides)
                invoke(signature, getattr(obj, method), self._resolved[(cls, method)])

        return obj

