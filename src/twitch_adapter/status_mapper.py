"""
StatusMapper module for turning expected HTTP error statuses into plain values
"""

from typing import Any, Callable, Dict, TypeVar

from .errors import ClientError, ServerError

T = TypeVar('T')


class StatusMapper:
    """Runs a callable and substitutes values for selected HTTP error statuses"""

    @staticmethod
    def map(status_map: Dict[int, Any], block: Callable[[], T]) -> Any:
        """
        Call block, returning status_map[status] if it raises a mapped HTTP error

        Args:
            status_map: HTTP status code to substitute value, e.g. {404: None}
            block: Zero-argument callable to run

        Returns:
            The block's return value, or the substitute for a mapped status

        Raises:
            ClientError, ServerError: When the status is not in status_map
        """
        try:
            return block()
        except (ClientError, ServerError) as e:
            if e.status in status_map:
                return status_map[e.status]
            raise
