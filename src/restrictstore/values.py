"""Stored value variants and the write-side value preprocessor.

A field holds a JSON value, a nested store, or a :class:`Lazy` provider.
Plain callables are ordinary values: only ``Lazy`` is ever invoked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from .store import Store

logger = logging.getLogger(__name__)

JSONPrimitive = Union[str, int, float, bool, None]
JSONValue = Union[JSONPrimitive, list, dict]

DEFAULT_SENTINEL = "store"


@dataclass(frozen=True)
class Lazy:
    """Zero-argument provider evaluated on access.

    Example::

        shared = Store({"username": "user1"})
        admin.define("get_credentials", Lazy(lambda: shared))
        admin.read("get_credentials:username")
    """

    provider: Callable[[], Any]

    def __call__(self) -> Any:
        return self.provider()


def realize(value: Any) -> Any:
    """Invoke a ``Lazy`` provider; anything else is returned as is."""
    if isinstance(value, Lazy):
        return value()
    return value


def is_tagged(value: Any, sentinel: str = DEFAULT_SENTINEL) -> bool:
    return isinstance(value, dict) and sentinel in value


def untag(value: dict, sentinel: str = DEFAULT_SENTINEL) -> dict:
    """Flatten a tagged fragment into the entries it describes.

    The sentinel's own value (when it is an object) is merged over the
    fragment's remaining keys.
    """
    entries = {key: val for key, val in value.items() if key != sentinel}
    inner = value.get(sentinel)
    if isinstance(inner, dict):
        entries.update(inner)
    elif inner is not None:
        logger.debug("Ignoring non-object sentinel value of type %s", type(inner).__name__)
    return entries


def preprocess(
    value: Any,
    store_factory: Callable[[], Store],
    sentinel: str = DEFAULT_SENTINEL,
) -> Any:
    """Copy ``value``, promoting tagged objects into fresh stores.

    Dicts and lists are copied recursively. A dict carrying ``sentinel`` is
    replaced by ``store_factory()`` seeded with :func:`untag` of the dict
    through the new store's own ``write_entries``, so the child obeys its
    own policy. Stores and ``Lazy`` values pass through unchanged.
    """
    from .store import Store

    if isinstance(value, (Store, Lazy)):
        return value
    if isinstance(value, list):
        return [preprocess(item, store_factory, sentinel) for item in value]
    if not isinstance(value, dict):
        return value

    if sentinel in value:
        child = store_factory()
        child.write_entries(untag(value, sentinel))
        logger.debug("Promoted tagged fragment to %s", type(child).__qualname__)
        return child

    return {key: preprocess(val, store_factory, sentinel) for key, val in value.items()}


__all__ = [
    "DEFAULT_SENTINEL",
    "JSONPrimitive",
    "JSONValue",
    "Lazy",
    "is_tagged",
    "preprocess",
    "realize",
    "untag",
]
