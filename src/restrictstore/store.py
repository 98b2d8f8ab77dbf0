"""Permission-gated hierarchical store.

A ``Store`` holds an open set of named fields. Every access through the
path API (``read``, ``write``, ``write_entries``, ``entries``) resolves the
field's permission at that moment, from the restrictions declared on the
store's type lineage or, failing that, from the store's ``default_policy``.

Paths cross store boundaries transparently: when a segment lands on a
nested store (directly or through a :class:`~restrictstore.values.Lazy`
provider), that store takes over the remaining segments and applies its
own restrictions. Inside plain JSON structure no checks are made.

Declaring a restricted type::

    class UserStore(Store):
        restrictions = {"name": Permission.READ_WRITE}

    @restrict("user", Permission.READ)
    @restrict("get_credentials", Permission.READ_WRITE)
    class AdminStore(Store):
        def __init__(self, user: UserStore) -> None:
            super().__init__(default_policy=Permission.NONE)
            self.define("user", user)
            self.define("get_credentials", Lazy(lambda: credentials))

Stores are not thread-safe; share them across threads only under external
locking.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, Optional

from .config import StoreConfig, get_store_config
from .exceptions import PermissionDenied
from .interfaces import BaseStore
from .logging import get_store_logger, safe_log_value
from .path import Path
from .permissions.constants import Permission
from .permissions.registry import PermissionRegistry, registry
from .permissions.resolver import PermissionResolver
from .values import Lazy, preprocess, realize, untag

logger = get_store_logger(__name__)

_MISSING = object()


def _index(key: str) -> Optional[int]:
    return int(key) if key.isascii() and key.isdigit() else None


def _member(container: Any, key: str) -> Any:
    """Structural lookup of ``key`` in a dict or list, or _MISSING."""
    if isinstance(container, dict):
        return container.get(key, _MISSING)
    if isinstance(container, list):
        i = _index(key)
        if i is not None and i < len(container):
            return container[i]
    return _MISSING


def _accepts(container: Any, key: str) -> bool:
    """Whether ``key`` can be looked up or assigned inside ``container``."""
    if isinstance(container, dict):
        return True
    if isinstance(container, list):
        i = _index(key)
        return i is not None
    return False


def _assign(container: dict | list, key: str, value: Any) -> None:
    if isinstance(container, dict):
        container[key] = value
        return
    i = int(key)
    if i >= len(container):
        container.extend([None] * (i + 1 - len(container)))
    container[i] = value


def _nest(segments: tuple[str, ...], value: Any) -> Any:
    for segment in reversed(segments):
        value = {segment: value}
    return value


class Store(BaseStore):
    """Hierarchical key-value store with per-field permissions.

    Args:
        entries: Initial entries, applied through :meth:`write_entries`.
        default_policy: Fallback permission for undeclared fields
            (defaults to ``config.default_policy``).
        config: Settings for this store and the children it promotes
            (defaults to the active process-wide config).
    """

    permission_registry: ClassVar[PermissionRegistry] = registry
    restrictions: ClassVar[Mapping[str, Permission | str | None]] = {}
    child_store_class: ClassVar[Optional[type[Store]]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parents = [base for base in cls.__bases__ if isinstance(base, type) and issubclass(base, Store)]
        cls.permission_registry.register_type(cls, parents)
        for field, permission in cls.__dict__.get("restrictions", {}).items():
            cls.permission_registry.declare(cls, field, permission)

    def __init__(
        self,
        entries: Optional[Mapping[str, Any]] = None,
        *,
        default_policy: Permission | str | None = None,
        config: Optional[StoreConfig] = None,
    ) -> None:
        self._config = config or get_store_config()
        self._resolver = PermissionResolver(self.permission_registry, self._config.resolution)
        self._fields: dict[str, Any] = {}
        self.default_policy = self._config.default_policy if default_policy is None else default_policy
        if entries:
            self.write_entries(entries)

    @property
    def default_policy(self) -> Permission:
        return self._default_policy

    @default_policy.setter
    def default_policy(self, value: Permission | str) -> None:
        self._default_policy = Permission.parse(value)

    @property
    def config(self) -> StoreConfig:
        return self._config

    # ---- Permissions ---------------------------------------------------------

    def permission_for(self, key: str) -> Permission:
        return self._resolver.permission_for(self, key)

    def allowed_to_read(self, key: str) -> bool:
        return self._resolver.allowed_to_read(self, key)

    def allowed_to_write(self, key: str) -> bool:
        return self._resolver.allowed_to_write(self, key)

    def _require(self, operation: str, key: str, path: Path) -> None:
        allowed = self.allowed_to_read(key) if operation == "read" else self.allowed_to_write(key)
        if not allowed:
            logger.debug("%s denied on '%s' (path '%s')", operation, key, path, store=self)
            raise PermissionDenied(operation, key, str(path))

    # ---- Owner-side access ---------------------------------------------------

    def define(self, name: str, value: Any) -> Any:
        """Set a field without permission checks or preprocessing.

        Meant for a store type seeding its own fields in ``__init__``.
        """
        self._fields[name] = value
        return value

    # ---- Path API ------------------------------------------------------------

    def read(self, path: str | Path) -> Optional[Any]:
        """Read the value at ``path``.

        Returns:
            The value, a nested store when the path ends on one, or None
            when the path runs out of structure.

        Raises:
            PermissionDenied: If a store crossed by the path denies reading
                the segment that enters it.
        """
        return self._read_at(self._parse(path), 0)

    def _read_at(self, path: Path, start: int) -> Optional[Any]:
        key = path[start]
        self._require("read", key, path)

        value = realize(self._fields.get(key, _MISSING))
        for index in range(start + 1, len(path)):
            if isinstance(value, Store):
                return value._read_at(path, index)
            value = realize(_member(value, path[index]))
            if value is _MISSING:
                return None

        return None if value is _MISSING else value

    def write(self, path: str | Path, value: Any) -> Any:
        """Write ``value`` at ``path``, materializing missing objects.

        Only the final segment is permission checked, by the store that
        owns it. Tagged fragments in ``value`` become child stores.

        Returns:
            The (preprocessed) value written.

        Raises:
            PermissionDenied: If the final segment is not writable. Nothing
                is modified in that case.
        """
        return self._write_at(self._parse(path), self._preprocess(value), 0)

    def _write_at(self, path: Path, value: Any, start: int) -> Any:
        container: Any = self._fields
        for index in range(start, path.last):
            key = path[index]
            nested = realize(_member(container, key))
            if isinstance(nested, Store):
                return nested._write_at(path, value, index + 1)
            if isinstance(nested, list) and not _accepts(nested, path[index + 1]):
                # Lists are never replaced by an object.
                self._require("write", path[path.last], path)
                logger.debug("write %s skipped: '%s' is not a list index", path, path[index + 1], store=self)
                return value
            if not _accepts(nested, path[index + 1]):
                self._require("write", path[path.last], path)
                _assign(container, key, _nest(path.segments[index + 1 :], value))
                self._log_write(path, value, "materialized")
                return value
            container = nested

        self._require("write", path[path.last], path)
        _assign(container, path[path.last], value)
        self._log_write(path, value)
        return value

    def _log_write(self, path: Path, value: Any, note: str = "") -> None:
        if logger.isEnabledFor(logging.DEBUG):
            suffix = f" ({note})" if note else ""
            logger.debug("write %s = %s%s", path, safe_log_value(value), suffix, store=self)

    # ---- Bulk access ---------------------------------------------------------

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Best-effort merge of top-level entries.

        Keys that are not writable are skipped. An existing nested store is
        merged through its own ``write_entries`` and is never replaced.
        """
        sentinel = self._config.sentinel_key
        for key, value in entries.items():
            if not self.allowed_to_write(key):
                logger.debug("write_entries skipped '%s': not writable", key, store=self)
                continue

            existing = self._fields.get(key)
            if isinstance(existing, Store):
                if isinstance(value, dict):
                    existing.write_entries(untag(value, sentinel) if sentinel in value else value)
                else:
                    logger.debug("write_entries skipped '%s': cannot merge %s into a store", key, type(value).__name__, store=self)
                continue

            self._fields[key] = self._preprocess(value)

    def entries(self) -> dict[str, Any]:
        """Plain-JSON snapshot of every readable field.

        Nested stores are flattened through their own ``entries()``. Lazy
        providers are omitted unless ``config.export_providers`` is set.
        """
        return {
            key: self._export(value)
            for key, value in self._fields.items()
            if self.allowed_to_read(key) and self._exportable(value)
        }

    def _exportable(self, value: Any) -> bool:
        return not isinstance(value, Lazy) or self._config.export_providers

    def _export(self, value: Any) -> Any:
        if isinstance(value, Lazy):
            value = value()
        if isinstance(value, Store):
            return value.entries()
        if isinstance(value, dict):
            return {k: self._export(v) for k, v in value.items() if self._exportable(v)}
        if isinstance(value, list):
            return [self._export(v) for v in value if self._exportable(v)]
        return value

    # ---- Internals -----------------------------------------------------------

    def _parse(self, path: str | Path) -> Path:
        return Path.parse(path, self._config.path_separator)

    def _preprocess(self, value: Any) -> Any:
        return preprocess(value, self._create_child, self._config.sentinel_key)

    def _create_child(self) -> Store:
        return (self.child_store_class or Store)(config=self._config)

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(default_policy={self.default_policy.value!r}, fields={sorted(self._fields)!r})"


registry.register_type(Store)


__all__ = ["Store"]
