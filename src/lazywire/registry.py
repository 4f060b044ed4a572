"""Registration of service definitions and aliases."""

import inspect
import logging
from typing import Any, Iterable, Optional

from lazywire.domain import (
    CallableDefinition,
    ClassDefinition,
    Definition,
    Identifier,
    InstanceDefinition,
)
from lazywire.errors import (
    AliasInUseError,
    InvalidIdentifierError,
    NoSuchMethodError,
    UnknownClassError,
)
from lazywire.identifiers import display_name, locate, locate_type, normalize

__all__ = ["ServiceRegistry", "make_definition", "STATIC_REFERENCE_SEPARATOR"]

STATIC_REFERENCE_SEPARATOR = "::"

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Stores definitions, aliases and shared markers, keyed by normalized identifier.

    The registry also remembers every class it has been shown, so that a
    normalized key can be mapped back to the class it names even when that
    class cannot be imported by path.
    """

    def __init__(self, auto_wire: bool = True):
        self._auto_wire = auto_wire
        self._definitions: dict[str, Definition] = {}
        self._aliases: dict[str, str] = {}
        self._shared: set[str] = set()
        self._types: dict[str, type] = {}

    def set(self, identifier: Identifier, entry: Any, aliases: Iterable[Identifier] = ()) -> Definition:
        """Register a definition for ``identifier``, replacing any earlier one.

        Args:
            identifier: A class, or a dotted path naming one.
            entry: A class or path to one, a callable or ``"Type::method"``
                reference producing the service, or a ready-made instance.
                Instances are always shared.
            aliases: Further identifiers that should resolve to this entry.

        Returns:
            The stored definition.

        Raises:
            InvalidIdentifierError: If ``identifier`` does not name a class.
            UnknownClassError: If ``entry`` is a string that names nothing.
            AliasInUseError: If any alias is already registered.
        """
        self.validate_identifier(identifier)
        aliases = list(aliases)
        for alias in aliases:
            self._validate_alias(alias)

        key = normalize(identifier)
        definition = make_definition(entry)
        self._definitions[key] = definition
        if isinstance(definition, InstanceDefinition):
            self._shared.add(key)

        for alias in aliases:
            self._add_alias(key, alias)

        logger.debug(f"Registered {display_name(identifier)} as {type(definition).__name__}")
        return definition

    def share(self, identifier: Identifier, entry: Any, aliases: Iterable[Identifier] = ()) -> Definition:
        definition = self.set(identifier, entry, aliases)
        self._shared.add(normalize(identifier))
        return definition

    def alias(self, identifier: Identifier, alias: Identifier) -> None:
        self._validate_alias(alias)
        # Index the target class so the aliased key can be auto-wired later.
        self.find_type(identifier)
        self._add_alias(normalize(identifier), alias)

    def has(self, identifier: Identifier) -> bool:
        """Check whether ``identifier`` is registered, or names a class that can be built on demand."""
        if normalize(identifier) in self._definitions:
            return True
        return self._auto_wire and self.find_type(identifier) is not None

    def definition(self, key: str) -> Optional[Definition]:
        return self._definitions.get(key)

    def is_shared(self, key: str) -> bool:
        return key in self._shared

    def resolve_alias(self, key: str) -> str:
        """Follow a single alias redirection. Aliases of aliases are not followed."""
        return self._aliases.get(key, key)

    def is_alias(self, identifier: Identifier) -> bool:
        return normalize(identifier) in self._aliases

    def find_type(self, identifier: Identifier) -> Optional[type]:
        """Return the class named by ``identifier``, remembering it for later lookups by key."""
        key = normalize(identifier)
        if inspect.isclass(identifier):
            self._types.setdefault(key, identifier)
            return identifier
        if key in self._types:
            return self._types[key]

        cls = locate_type(identifier)
        if cls is not None:
            self._types[key] = cls
        return cls

    def validate_identifier(self, identifier: Identifier) -> type:
        cls = self.find_type(identifier)
        if cls is None:
            raise InvalidIdentifierError(identifier)
        return cls

    def _validate_alias(self, alias: Identifier) -> None:
        if self.is_alias(alias):
            raise AliasInUseError(alias)

    def _add_alias(self, key: str, alias: Identifier) -> None:
        self._aliases[normalize(alias)] = key
        logger.debug(f"Aliased {display_name(alias)} to {key}")


def make_definition(entry: Any) -> Definition:
    """Classify a registration entry.

    Example:
        >>> make_definition(Database)                   # ClassDefinition(Database)
        >>> make_definition("app.db.Database")          # ClassDefinition(Database)
        >>> make_definition("app.db.Database::connect") # CallableDefinition(...)
        >>> make_definition(lambda: Database())         # CallableDefinition(...)
        >>> make_definition(Database())                 # InstanceDefinition(...)
    """
    if inspect.isclass(entry):
        return ClassDefinition(entry)

    if isinstance(entry, str):
        if STATIC_REFERENCE_SEPARATOR in entry:
            owner_path, _, method = entry.partition(STATIC_REFERENCE_SEPARATOR)
            owner = locate_type(owner_path)
            if owner is None:
                raise UnknownClassError(owner_path)
            if not callable(getattr(owner, method, None)):
                raise NoSuchMethodError(owner, method)
            return CallableDefinition(entry)

        target = locate(entry)
        if inspect.isclass(target):
            return ClassDefinition(target)
        if callable(target):
            return CallableDefinition(target)
        raise UnknownClassError(entry)

    if callable(entry):
        return CallableDefinition(entry)

    return InstanceDefinition(entry)
