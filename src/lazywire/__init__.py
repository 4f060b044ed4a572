"""Lazywire dependency injection container.

Lazywire is a runtime dependency injection container. Services are registered
against classes (or dotted paths to them) and built lazily: the container reads
constructor and factory signatures and resolves every parameter annotated with
a class from itself, recursively, so most object graphs need no configuration
beyond the classes themselves.

Key Features:
    - Auto-wiring of constructor and callable parameters from type hints
    - Shared (singleton) and per-request services
    - Case-insensitive identifiers and single-hop aliases
    - Circular dependency detection with the full resolution chain reported
    - Inflections: methods called on every new object of a given type

Basic Usage:
    >>> from lazywire import Container
    >>>
    >>> container = Container()
    >>> container.share(Database, PostgresDatabase, aliases=["db"])
    >>> service = container.get(UserService)  # UserService(db: Database) is wired up
    >>> container.get("db") is container.get(Database)
    True

The package consists of several modules:
    - container: The Container and its resolution engine
    - registry: Definitions, aliases and shared markers
    - factory: Memoized factories built from definitions
    - arguments: Argument resolution for signatures
    - inflector: Post-construction method calls by type
    - reflection: Signature introspection and invocation
    - identifiers: Identifier normalization and class lookup by path
    - builders: Container construction and the default container
    - errors: Container-specific exceptions
"""

from lazywire.builders import (
    default_container,
    init_default_container,
    make_container,
    reset_default_container,
)
from lazywire.config import ContainerConfig
from lazywire.container import Container
from lazywire.errors import (
    AliasInUseError,
    CircularReferenceError,
    DependencyError,
    InvalidIdentifierError,
    NoSuchMethodError,
    NotFoundError,
    ResolutionFailedError,
    UnknownClassError,
    UnresolvableParameterError,
)

__all__ = [
    "Container",
    "ContainerConfig",
    "make_container",
    "init_default_container",
    "default_container",
    "reset_default_container",
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
