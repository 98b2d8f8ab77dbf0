from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class BaseStore(ABC):
    """Contract every permission-gated store exposes to its callers."""

    @abstractmethod
    def allowed_to_read(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def allowed_to_write(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def write(self, path: str, value: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def write_entries(self, entries: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def entries(self) -> Dict[str, Any]:
        raise NotImplementedError


__all__ = ["BaseStore"]
