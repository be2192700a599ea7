from abc import ABC, abstractmethod
from typing import Any


class IValueComparator(ABC):
    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Return a sort key for value, or raise TypeError/ValueError."""
        pass

    @abstractmethod
    def compare(self, a: Any, b: Any) -> int:
        pass
