"""High level entry points for constructing containers."""

import logging
from typing import Any, Mapping, Optional

from lazywire.config import ContainerConfig
from lazywire.container import Container
from lazywire.domain import Identifier
from lazywire.errors import DependencyError

__all__ = ["make_container", "init_default_container", "default_container", "reset_default_container"]

logger = logging.getLogger(__name__)

_default: Optional[Container] = None


def make_container(
    config: Optional[ContainerConfig] = None,
    definitions: Optional[Mapping[Identifier, Any]] = None,
    shared: Optional[Mapping[Identifier, Any]] = None,
) -> Container:
    """Construct a :class:`Container` populated with the given definitions.

    Args:
        config: Optional container configuration.
        definitions: Entries to register with :meth:`Container.set`.
        shared: Entries to register with :meth:`Container.share`.

    Returns:
        The new container.

    Raises:
        DependencyError: If any definition is rejected by the container.

    Example:
        >>> container = make_container(
        ...     definitions={Mailer: SmtpMailer},
        ...     shared={Database: PostgresDatabase},
        ... )
    """
    container = Container(config)
    for identifier, entry in (definitions or {}).items():
        container.set(identifier, entry)
    for identifier, entry in (shared or {}).items():
        container.share(identifier, entry)
    return container


def init_default_container(config: Optional[ContainerConfig] = None, **kwargs) -> Container:
    """Create the process-wide default container.

    Raises:
        DependencyError: If the default container has already been initialised.
    """
    global _default
    if _default is not None:
        raise DependencyError("Default container is already initialised")
    _default = make_container(config, **kwargs)
    logger.debug("Initialised default container")
    return _default


def default_container() -> Container:
    """Return the process-wide default container.

    Raises:
        DependencyError: If :func:`init_default_container` has not been called.
    """
    if _default is None:
        raise DependencyError(
            "Default container is not initialised - call init_default_container first"
        )
    return _default


def reset_default_container() -> None:
    global _default
    _default = None
