"""
Identity equality for domain objects
"""

from typing import Any


class IdEquality:
    """Objects are equal when they share a concrete type and an id"""

    id: Any

    def __eq__(self, other: object) -> bool:
        return other is not None and type(self) is type(other) and self.id == other.id

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self.id)
