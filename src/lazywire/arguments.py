"""Resolution of the argument list needed to invoke a callable."""

import inspect
import logging
from typing import Any, Callable, Hashable, Mapping, MutableMapping, Optional
from weakref import WeakKeyDictionary

from lazywire.domain import Identifier, Signature
from lazywire.errors import UnresolvableParameterError
from lazywire.reflection import introspect, introspect_method

__all__ = ["ArgumentResolver"]

logger = logging.getLogger(__name__)


class ArgumentResolver:
    """Produce argument lists for signatures, resolving typed parameters through a container.

    For each parameter, in declaration order, the first of these that applies
    supplies the value:

    1. an explicit override with the parameter's name;
    2. the service identified by the parameter's annotation, requested from
       the container;
    3. the parameter's default value.

    Any parameter left over raises :class:`UnresolvableParameterError`.

    Signatures are introspected once per target and cached. Targets are held
    weakly, and bound methods are cached by their function, so caching never
    keeps a callable or a method receiver alive. Services are looked up again
    on every call to :meth:`resolve`.
    """

    def __init__(self, get: Callable[[Identifier], Any]):
        self._get = get
        self._signatures: WeakKeyDictionary = WeakKeyDictionary()
        self._bound_signatures: WeakKeyDictionary = WeakKeyDictionary()
        self._method_signatures: WeakKeyDictionary = WeakKeyDictionary()

    def reflect(self, target: Callable) -> Signature:
        if inspect.ismethod(target):
            return _memoized(self._bound_signatures, target.__func__, lambda: introspect(target))
        return _memoized(self._signatures, target, lambda: introspect(target))

    def reflect_method(self, owner: type, method: str) -> Signature:
        return _memoized(
            self._method_signatures.setdefault(owner, {}),
            method,
            lambda: introspect_method(owner, method),
        )

    def resolve(self, signature: Signature, overrides: Optional[Mapping[str, Any]] = None) -> list[Any]:
        overrides = overrides or {}
        arguments = []
        for parameter in signature.parameters:
            if parameter.name in overrides:
                arguments.append(overrides[parameter.name])
            elif parameter.identifier is not None:
                arguments.append(self._get(parameter.identifier))
            elif parameter.has_default:
                arguments.append(parameter.default)
            else:
                raise UnresolvableParameterError(parameter.name, signature)
        return arguments


def _memoized(
    cache: MutableMapping[Hashable, Signature], key: Hashable, build: Callable[[], Signature]
) -> Signature:
    try:
        return cache[key]
    except KeyError:
        pass
    except TypeError:
        # Callables that cannot be hashed or weakly referenced are introspected on every use.
        return build()

    signature = build()
    logger.debug(f"Introspected {signature}: {[p.name for p in signature.parameters]}")
    cache[key] = signature
    return signature
