"""Colon-delimited field paths.

``"user:profile:name"`` addresses field ``user``, then member ``profile``,
then member ``name``. There is no escaping: a literal separator cannot
appear inside a segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

DEFAULT_SEPARATOR = ":"


@dataclass(frozen=True)
class Path:
    """Immutable, ordered sequence of segment keys."""

    segments: tuple[str, ...]
    separator: str = DEFAULT_SEPARATOR

    @classmethod
    def parse(cls, raw: str | Path, separator: str = DEFAULT_SEPARATOR) -> Path:
        if isinstance(raw, Path):
            return raw
        return cls(tuple(str(raw).split(separator)), separator)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> str:
        return self.segments[index]

    @property
    def last(self) -> int:
        return len(self.segments) - 1

    def __str__(self) -> str:
        return self.separator.join(self.segments)


__all__ = ["DEFAULT_SEPARATOR", "Path"]
