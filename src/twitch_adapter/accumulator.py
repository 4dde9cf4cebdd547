"""
Accumulator module for collecting deduplicated domain objects across pages
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, TypeVar

from .errors import InvalidArgumentError
from .pagination_strategy import Paginator

T = TypeVar('T')


def _default_key(obj: Any) -> Hashable:
    return obj.id


class Accumulator:
    """
    Builds domain objects from paged responses

    Each call owns its own seen-key set and result list. Items are
    deduplicated by identity key, a total limit can end the walk mid-page,
    and results are either returned as a list or passed one by one to a
    callback.
    """

    def __init__(self, paginator: Paginator, max_page_size: Optional[int] = None):
        self.paginator = paginator
        self.max_page_size = max_page_size or paginator.http_client.config.max_page_size
        self.logger = logging.getLogger(__name__)

    def page_size(self, limit: Optional[int]) -> int:
        return min(limit or self.max_page_size, self.max_page_size)

    def iter_items(self, path: str, json_key: str, create: Callable[[Any], T],
                   params: Optional[Dict[str, Any]] = None,
                   sub_json: Optional[str] = None,
                   limit: Optional[int] = None,
                   offset: int = 0,
                   key: Optional[Callable[[T], Hashable]] = None) -> Iterator[T]:
        """
        Yield distinct objects in page order

        Raises:
            InvalidArgumentError: If path, json_key or create is missing
        """
        if not json_key:
            raise InvalidArgumentError('json_key')
        if not path:
            raise InvalidArgumentError('path')
        if create is None:
            raise InvalidArgumentError('create')

        key = key or _default_key
        page_limit = self.page_size(limit)
        seen = set()

        for page in self.paginator.iter_pages(path, page_limit, offset or 0, params,
                                              items_key=json_key):
            items = page.get(json_key) or []

            for item_json in items:
                if sub_json:
                    item_json = item_json[sub_json]
                obj = create(item_json)
                identity = key(obj)
                if identity in seen:
                    continue

                seen.add(identity)
                yield obj

                if limit and len(seen) >= limit:
                    self.logger.debug(f"Reached limit of {limit} items for {path}")
                    return

    def accumulate(self, path: str, json_key: str, create: Callable[[Any], T],
                   params: Optional[Dict[str, Any]] = None,
                   sub_json: Optional[str] = None,
                   limit: Optional[int] = None,
                   offset: int = 0,
                   on_item: Optional[Callable[[T], None]] = None,
                   key: Optional[Callable[[T], Hashable]] = None) -> Optional[List[T]]:
        """
        Collect objects from every page of a resource

        Args:
            path: Resource path, relative to the base URL
            json_key: Key of the item array in each page
            create: Class or callable mapping one JSON item to an object
            params: Extra query parameters sent with every page
            sub_json: Optional key to descend into for each item
            limit: Maximum number of distinct objects to produce; None or 0 means no limit
            offset: Offset of the first page
            on_item: Callback for streaming mode; no list is built when given
            key: Identity key function, defaults to the object's id

        Returns:
            List of objects, or None in streaming mode

        Exceptions raised by on_item propagate and stop pagination.
        """
        items = self.iter_items(path, json_key, create, params=params, sub_json=sub_json,
                                limit=limit, offset=offset, key=key)

        if on_item is not None:
            for obj in items:
                on_item(obj)
            return None

        return list(items)
