"""Exceptions raised by the container.

Every error derives from :class:`DependencyError`, so callers that do not care
about the exact failure can catch that alone.
"""

from typing import Any, Optional

__all__ = [
    "DependencyError",
    "InvalidIdentifierError",
    "UnknownClassError",
    "AliasInUseError",
    "NoSuchMethodError",
    "NotFoundError",
    "CircularReferenceError",
    "UnresolvableParameterError",
    "ResolutionFailedError",
]


class DependencyError(Exception):
    """Raised when a service cannot be registered or resolved."""

    pass


class InvalidIdentifierError(DependencyError):
    """Raised when an identifier does not name an existing class."""

    def __init__(self, identifier: Any):
        super().__init__(
            f'Invalid id "{identifier}". '
            "Container entry id must be an existing class or a path to one."
        )
        self.identifier = identifier


class UnknownClassError(DependencyError):
    """Raised when a string definition names nothing that can be imported."""

    def __init__(self, name: str):
        super().__init__(f'Class "{name}" does not exist')
        self.name = name


class AliasInUseError(DependencyError):
    def __init__(self, alias: Any):
        super().__init__(f'Invalid alias "{alias}": already in use')
        self.alias = alias


class NoSuchMethodError(DependencyError):
    def __init__(self, owner: type, method: str):
        super().__init__(f'Method "{method}" not found in "{owner.__qualname__}"')
        self.owner = owner
        self.method = method


class NotFoundError(DependencyError, LookupError):
    """Raised when nothing is registered for an identifier and no class matches it."""

    def __init__(self, identifier: Any, chain: list[str]):
        super().__init__(f'Unable to resolve "{identifier}"{_describe(chain)}')
        self.identifier = identifier
        self.chain = chain


class CircularReferenceError(DependencyError):
    """Raised when an identifier is requested again while it is still being resolved.

    Attributes:
        identifier: The identifier as it was requested.
        chain: Normalized identifiers on the resolution stack, outermost first,
            ending with the identifier that closed the cycle.
    """

    def __init__(self, identifier: Any, chain: list[str]):
        super().__init__(
            f'Circular reference detected while resolving "{identifier}": '
            + " -> ".join(chain)
        )
        self.identifier = identifier
        self.chain = chain


class UnresolvableParameterError(DependencyError):
    """Raised when a parameter has no explicit value, no injectable type and no default."""

    def __init__(self, parameter: str, signature: Any):
        super().__init__(
            f'Unable to resolve parameter "{parameter}" value for "{signature}" function (method)'
        )
        self.parameter = parameter
        self.signature = signature


class ResolutionFailedError(DependencyError):
    """Wraps a failure raised while building a service, with the resolution chain."""

    def __init__(self, identifier: Any, chain: list[str], cause: Optional[BaseException]):
        super().__init__(f'Failed to resolve "{identifier}"{_describe(chain)}: {cause}')
        self.identifier = identifier
        self.chain = chain
        self.cause = cause


def _describe(chain: list[str]) -> str:
    if not chain:
        return ""
    return " (while resolving " + " -> ".join(chain) + ")"
