"""Container configuration."""

from dataclasses import dataclass

__all__ = ["ContainerConfig"]


@dataclass(frozen=True)
class ContainerConfig:
    """Options controlling container behaviour.

    Attributes:
        auto_wire: If True, classes that were never registered can still be
            resolved by constructing them on demand.
        thread_safe: If True, all container operations are serialised by a
            re-entrant lock.
    """

    auto_wire: bool = True
    thread_safe: bool = True
