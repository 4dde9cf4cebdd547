"""
PaginationStrategy module for walking Twitch's link-based paged responses
"""

import json
import logging
from typing import Dict, Any, Iterator, Optional, Protocol, Callable
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from .errors import FormatError
from .http_client import HTTPClient


class PaginationStrategy(Protocol):
    """Protocol for pagination strategies"""

    def first_page_url(self, path: str, limit: int, offset: int) -> str:
        """Return the URL of the first page"""
        ...

    def get_next_page_url(self, page: Dict[str, Any]) -> Optional[str]:
        """Return the URL of the next page, or None if no more pages"""
        ...

    def extract_total_results(self, page: Dict[str, Any]) -> Optional[int]:
        """Extract total result count from a page"""
        ...

    def has_more(self, page: Dict[str, Any], limit: int, items_key: Optional[str] = None) -> bool:
        """False when the page shows there is nothing left to fetch"""
        ...


def _extract_path(data: Any, path: str) -> Any:
    for part in path.split('.'):
        data = data[part]
    return data


class LinkOffsetPagination:
    """Offset pagination driven by the `_links.next` URL of each page"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.limit_param = config.get('limit_param', 'limit')
        self.offset_param = config.get('offset_param', 'offset')
        self.next_link_path = config.get('next_link_path', '_links.next')
        self.total_results_path = config.get('total_results_path', '_total')

    def first_page_url(self, path: str, limit: int, offset: int) -> str:
        """Merge limit/offset into the path's own query string, pagination keys winning"""
        parts = urlsplit(path)
        query = dict(parse_qsl(parts.query, keep_blank_values=True))
        query[self.limit_param] = str(limit)
        query[self.offset_param] = str(offset)
        return urlunsplit(parts._replace(query=urlencode(query)))

    def get_next_page_url(self, page: Dict[str, Any]) -> Optional[str]:
        """
        Read the next page URL, stopping when it is absent or past the reported total

        Raises:
            FormatError: If the next URL carries no integer offset
        """
        try:
            next_url = _extract_path(page, self.next_link_path)
        except (KeyError, TypeError):
            return None

        if not next_url:
            return None

        offset = self.extract_offset(next_url, page)

        total_results = self.extract_total_results(page)
        if total_results is not None and offset > total_results:
            return None

        return next_url

    def extract_offset(self, url: str, page: Optional[Dict[str, Any]] = None) -> int:
        query = dict(parse_qsl(urlsplit(url).query))
        try:
            return int(query[self.offset_param])
        except (KeyError, ValueError):
            raise FormatError(f"Next page URL has no valid '{self.offset_param}': {url}",
                              url, None, json.dumps(page) if page is not None else '')

    def extract_total_results(self, page: Dict[str, Any]) -> Optional[int]:
        try:
            return int(_extract_path(page, self.total_results_path))
        except (KeyError, ValueError, TypeError):
            return None

    def extract_items(self, page: Dict[str, Any], items_key: Optional[str] = None) -> Optional[list]:
        """
        Return the page's item array

        Without items_key the array is the only list-valued key outside the
        underscore-prefixed envelope; None when that is ambiguous.
        """
        if items_key is not None:
            return page.get(items_key) or []

        candidates = [value for key, value in page.items()
                      if not key.startswith('_') and isinstance(value, list)]
        return candidates[0] if len(candidates) == 1 else None

    def has_more(self, page: Dict[str, Any], limit: int, items_key: Optional[str] = None) -> bool:
        """An empty or short page is the last one"""
        items = self.extract_items(page, items_key)
        if items is None:
            return True
        return bool(items) and len(items) >= limit


def is_unavailable(page: Any) -> bool:
    """True when a success body embeds an error with status 503"""
    return isinstance(page, dict) and bool(page.get('error')) and page.get('status') == 503


class Paginator:
    """Drives HTTPClient requests across pages until a stop condition is met"""

    def __init__(self, http_client: HTTPClient, strategy: Optional[PaginationStrategy] = None,
                 max_pages: Optional[int] = None):
        self.http_client = http_client
        self.strategy = strategy or LinkOffsetPagination()
        self.max_pages = max_pages if max_pages is not None else http_client.config.max_pages
        self.logger = logging.getLogger(__name__)

    def iter_pages(self, path: str, limit: int, offset: int = 0,
                   params: Optional[Dict[str, Any]] = None,
                   items_key: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Yield decoded pages one at a time

        The next page is only requested when the consumer asks for it, so
        breaking out of the loop stops further requests. An empty or short
        page at items_key (or the inferred item array) is the last page.
        """
        reserved = (getattr(self.strategy, 'limit_param', 'limit'),
                    getattr(self.strategy, 'offset_param', 'offset'))
        params = {k: v for k, v in (params or {}).items() if k not in reserved}
        url = self.strategy.first_page_url(path, limit, offset)
        page_count = 0

        while True:
            page = self.http_client.get(url, params or None)
            page_count += 1

            # No retry on an embedded 503; pagination ends with what was collected
            if is_unavailable(page):
                self.logger.warning(f"Service unavailable (embedded 503) at {url}, stopping pagination")
                return

            yield page

            if not self.strategy.has_more(page, limit, items_key):
                self.logger.debug(f"Empty or short page at {url}, stopping pagination")
                return

            next_url = self.strategy.get_next_page_url(page)
            if next_url is None:
                self.logger.debug(f"No more pages after {url}")
                return

            if page_count >= self.max_pages:
                self.logger.warning(f"Reached page cap of {self.max_pages} for {path}, stopping pagination")
                return

            self.logger.debug(f"Fetched page {page_count} of {path}, next: {next_url}")
            url = next_url

    def paginate(self, path: str, limit: int, offset: int,
                 params: Optional[Dict[str, Any]],
                 on_page: Callable[[Dict[str, Any]], bool],
                 items_key: Optional[str] = None) -> None:
        """Call on_page for each page until it returns a falsy value"""
        for page in self.iter_pages(path, limit, offset, params, items_key=items_key):
            if not on_page(page):
                break
