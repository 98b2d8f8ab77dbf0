"""Per-access permission resolution for store instances.

Turns ``(store, field)`` into an effective :class:`Permission` by
consulting the registry along the store's dynamic type lineage and
falling back to the store's own ``default_policy``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import RESERVED_FIELDS, Permission, ResolutionMode
from .registry import PermissionRegistry, registry

if TYPE_CHECKING:
    from ..store import Store


class PermissionResolver:
    """Resolve field permissions against a :class:`PermissionRegistry`.

    Args:
        permission_registry: Registry to consult (defaults to the
            process-wide one).
        mode: Lineage walk strategy, see :class:`ResolutionMode`.
    """

    __slots__ = ("registry", "mode")

    def __init__(
        self,
        permission_registry: PermissionRegistry | None = None,
        mode: ResolutionMode = ResolutionMode.INHERIT,
    ) -> None:
        self.registry = permission_registry or registry
        self.mode = ResolutionMode(mode)

    def declared_permission(self, store: Store, field: str) -> Permission | None:
        """Permission declared for ``field`` on the store's type chain, if any."""
        return self.registry.resolve(type(store), field, self.mode)

    def permission_for(self, store: Store, field: str) -> Permission:
        """Effective permission: reserved keys are always NONE."""
        if field in RESERVED_FIELDS:
            return Permission.NONE
        declared = self.declared_permission(store, field)
        if declared is not None:
            return declared
        return Permission.parse(store.default_policy)

    def allowed_to_read(self, store: Store, field: str) -> bool:
        return self.permission_for(store, field).allows_read

    def allowed_to_write(self, store: Store, field: str) -> bool:
        return self.permission_for(store, field).allows_write

    def __repr__(self) -> str:
        return f"PermissionResolver(mode={self.mode.value!r})"


__all__ = ["PermissionResolver"]
