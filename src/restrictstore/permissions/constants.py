"""Permission values and resolution modes for restrictstore.

Provides:
- ``Permission`` — per-field access level (``r`` / ``w`` / ``rw`` / ``none``).
- ``ResolutionMode`` — how the registry walks a type lineage.
- ``CLEAR`` — marker that removes a type's own declaration for a field.
"""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Access level attached to a single store field.

    Only membership matters: there is no ordering between levels.

    Example::

        Permission.READ.allows_read        # True
        Permission.READ.allows_write       # False
        Permission.parse("read-write")     # Permission.READ_WRITE
    """

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @property
    def allows_read(self) -> bool:
        return self in (Permission.READ, Permission.READ_WRITE)

    @property
    def allows_write(self) -> bool:
        return self in (Permission.WRITE, Permission.READ_WRITE)

    @classmethod
    def parse(cls, value: str | Permission) -> Permission:
        """Convert a short or long spelling into a ``Permission``.

        Accepts the enum values (``"r"``, ``"w"``, ``"rw"``, ``"none"``) and
        the long names ``"read-only"``, ``"write-only"``, ``"read-write"``.

        Raises:
            ValueError: If the value names no known permission.
        """
        if isinstance(value, Permission):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = _ALIASES.get(normalized, normalized)
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise ValueError(f"Invalid permission: {value!r}. Must be one of {[p.value for p in cls]}")


_ALIASES = {
    "read-only": "r",
    "write-only": "w",
    "read-write": "rw",
}


class ResolutionMode(str, Enum):
    """Lineage walk strategy used by :class:`PermissionRegistry`.

    - INHERIT: the first type whose entry mentions the field decides;
      types that never mention it defer to their ancestors. A cleared
      field stops the walk with "not declared".
    - NEAREST: the first type owning any entry at all decides; a field
      missing from that entry is "not declared".
    """

    INHERIT = "inherit"
    NEAREST = "nearest"


class _Clear:
    """Singleton marker for "remove this type's declaration"."""

    _instance: _Clear | None = None

    def __new__(cls) -> _Clear:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLEAR"

    def __bool__(self) -> bool:
        return False


CLEAR = _Clear()

# Keys that never resolve to anything but NONE through the path API.
RESERVED_FIELDS = frozenset({"default_policy", "defaultPolicy"})


__all__ = [
    "CLEAR",
    "RESERVED_FIELDS",
    "Permission",
    "ResolutionMode",
]
