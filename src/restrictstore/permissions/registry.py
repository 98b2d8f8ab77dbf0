"""Type-keyed registry of field restrictions.

Every store type registers itself once, at class creation, together with
the store types it inherits from. Restrictions are then declared per
``(type, field)`` pair and resolved by walking that explicit lineage,
most-derived type first.

Usage::

    from restrictstore import Permission, Store, restrict

    @restrict("token", Permission.WRITE)
    class CredentialStore(Store):
        restrictions = {"username": Permission.READ}
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, TypeVar, Union

from .constants import CLEAR, Permission, ResolutionMode, _Clear

logger = logging.getLogger(__name__)

Declaration = Union[Permission, _Clear]

_T = TypeVar("_T", bound=type)


class PermissionRegistry:
    """Process-wide table of ``type -> {field: Permission | CLEAR}``.

    Entries are copy-on-write: declaring on a type replaces that type's own
    entry with a new read-only mapping and never touches ancestor entries.
    """

    def __init__(self) -> None:
        self._entries: dict[type, Mapping[str, Declaration]] = {}
        self._lineages: dict[type, tuple[type, ...]] = {}

    # ---- Types ---------------------------------------------------------------

    def register_type(self, cls: type, parents: Iterable[type] = ()) -> tuple[type, ...]:
        """Record ``cls`` and its parent pointers.

        The lineage of ``cls`` is ``cls`` followed by the C3 merge of its
        registered parents' lineages, so a shared ancestor always comes
        after every type that derives from it.

        Returns:
            The stored lineage, most-derived first.

        Raises:
            TypeError: If the parents admit no consistent ordering.
        """
        bases = [parent for parent in parents if parent in self._lineages]
        sequences = [list(self._lineages[parent]) for parent in bases] + [bases]

        lineage: list[type] = [cls]
        while True:
            sequences = [seq for seq in sequences if seq]
            if not sequences:
                break
            for seq in sequences:
                head = seq[0]
                if not any(head in other[1:] for other in sequences):
                    break
            else:
                raise TypeError(f"Cannot linearize store type {cls.__qualname__}")
            lineage.append(head)
            for seq in sequences:
                if seq[0] is head:
                    del seq[0]
        self._lineages[cls] = tuple(lineage)
        logger.debug("Registered store type %s (lineage: %s)", cls.__qualname__, [t.__qualname__ for t in lineage])
        return self._lineages[cls]

    def lineage(self, cls: type) -> tuple[type, ...]:
        return self._lineages.get(cls, (cls,))

    def is_registered(self, cls: type) -> bool:
        return cls in self._lineages

    # ---- Declarations --------------------------------------------------------

    def declare(self, cls: type, field: str, permission: Permission | str | None | _Clear = CLEAR) -> None:
        """Attach a permission to ``field`` on ``cls``, or clear it.

        Passing ``None`` or :data:`CLEAR` removes any permission previously
        declared by ``cls`` itself. The last declaration per field wins.
        """
        value: Declaration = CLEAR if permission is None or permission is CLEAR else Permission.parse(permission)

        updated = dict(self._entries.get(cls, {}))
        updated[field] = value
        self._entries[cls] = MappingProxyType(updated)
        logger.debug("Declared %s.%s = %r", cls.__qualname__, field, value)

    def entry(self, cls: type) -> Mapping[str, Declaration] | None:
        """Raw entry owned by ``cls`` (tombstones included), or None."""
        return self._entries.get(cls)

    def declared(self, cls: type) -> dict[str, Permission]:
        """Effective declarations visible on ``cls`` under INHERIT semantics."""
        result: dict[str, Permission] = {}
        seen: set[str] = set()
        for owner in self.lineage(cls):
            for field, value in self._entries.get(owner, {}).items():
                if field in seen:
                    continue
                seen.add(field)
                if isinstance(value, Permission):
                    result[field] = value
        return result

    # ---- Resolution ----------------------------------------------------------

    def resolve(
        self,
        cls: type,
        field: str,
        mode: ResolutionMode = ResolutionMode.INHERIT,
    ) -> Permission | None:
        """Find the permission declared for ``field`` along ``cls``'s lineage.

        Returns:
            The declared permission, or None when nothing applies and the
            caller should fall back to its default policy.
        """
        for owner in self.lineage(cls):
            entry = self._entries.get(owner)
            if entry is None:
                continue
            if mode == ResolutionMode.NEAREST or field in entry:
                value = entry.get(field)
                return value if isinstance(value, Permission) else None
        return None


registry = PermissionRegistry()


def restrict(
    field: str,
    permission: Permission | str | None = None,
    *,
    target: PermissionRegistry | None = None,
) -> Callable[[_T], _T]:
    """Class decorator declaring a restriction on a store type.

    Without a permission the field is cleared for the decorated type.

    Usage:
        @restrict("name")
        @restrict("user", Permission.READ)
        class AdminStore(Store):
            ...
    """

    def decorator(cls: _T) -> _T:
        (target or getattr(cls, "permission_registry", registry)).declare(cls, field, permission)
        return cls

    return decorator


__all__ = [
    "Declaration",
    "PermissionRegistry",
    "registry",
    "restrict",
]
