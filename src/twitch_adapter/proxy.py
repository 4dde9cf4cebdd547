"""
LazyReference module for objects that are only fetched when first needed
"""

import logging
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar('T')


class LazyReference(Generic[T]):
    """
    Stand-in for an object whose full representation needs another request

    Fields in `known` are answered directly. Anything else resolves the
    target once through `resolve` and is read from the cached result.
    """

    def __init__(self, known: Dict[str, Any], resolve: Callable[[], T],
                 target_type: Optional[type] = None):
        self._known = dict(known)
        self._resolve = resolve
        self._target_type = target_type
        self._resolved: Optional[T] = None
        self._is_resolved = False
        self._logger = logging.getLogger(__name__)

    @property
    def is_resolved(self) -> bool:
        return self._is_resolved

    def resolve(self) -> T:
        """Fetch the target on first call and return the cached object afterwards"""
        if not self._is_resolved:
            self._logger.debug(f"Resolving lazy reference {self._known}")
            self._resolved = self._resolve()
            self._is_resolved = True
        return self._resolved

    def get(self, name: str) -> Any:
        if name in self._known:
            return self._known[name]
        return getattr(self.resolve(), name)

    def can_provide(self, name: str) -> bool:
        """
        Check whether an attribute is available

        Uses the known fields, the resolved object or the declared target
        type, and only resolves when none of those can answer.
        """
        if name in self._known:
            return True
        if self._is_resolved:
            return hasattr(self._resolved, name)
        if self._target_type is not None:
            fields = getattr(self._target_type, '__dataclass_fields__', {})
            return name in fields or hasattr(self._target_type, name)
        return hasattr(self.resolve(), name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        return self.get(name)

    def __repr__(self) -> str:
        state = 'resolved' if self._is_resolved else 'unresolved'
        return f"LazyReference({self._known!r}, {state})"
