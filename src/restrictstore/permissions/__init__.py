"""Field-level permission registry and resolution for restrictstore.

Defines:
- Permission: Access level of one field (r / w / rw / none)
- ResolutionMode: Lineage walk strategy (inherit / nearest)
- CLEAR: Marker removing a type's own declaration
- PermissionRegistry / registry: Type-keyed restriction table
- restrict(): Class decorator declaring restrictions
- PermissionResolver: Effective permission for a store instance
"""

from .constants import CLEAR, RESERVED_FIELDS, Permission, ResolutionMode
from .registry import PermissionRegistry, registry, restrict
from .resolver import PermissionResolver

__all__ = [
    "CLEAR",
    "RESERVED_FIELDS",
    "Permission",
    "PermissionRegistry",
    "PermissionResolver",
    "ResolutionMode",
    "registry",
    "restrict",
]
