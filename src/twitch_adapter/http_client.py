"""
HTTPClient module for issuing requests to the Twitch API and classifying responses
"""

import logging
import requests
from typing import Dict, Any, Optional
from datetime import datetime
from dataclasses import dataclass, field
from urllib.parse import urljoin

from .config_loader import APIConfig
from .errors import InvalidArgumentError, FormatError, ClientError, ServerError
from .rate_limiter import RateLimiter

LIBRARY_VERSION = '0.1.0'


@dataclass
class APIRequest:
    """Represents a single API request"""
    url: str
    parameters: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Decoded API response"""
    raw_data: Any
    url: str
    status_code: int
    request_timestamp: datetime = field(default_factory=datetime.now)


class HTTPClient:
    """HTTP client that attaches Twitch headers, rate limits and classifies failures"""

    def __init__(self, config: APIConfig, session: Optional[requests.Session] = None,
                 rate_limiter: Optional[RateLimiter] = None):
        self.config = config
        self.base_url = config.base_url
        self.headers: Dict[str, str] = {
            'Client-ID': config.client_id,
            'Kappa-Version': LIBRARY_VERSION,
            'Accept': config.accept_header,
        }
        self.session = session

        if rate_limiter is None and config.rate_limits.get('enabled', True):
            rate_limiter = RateLimiter(float(config.rate_limits.get('min_interval_seconds', 1.0)))
        self.rate_limiter = rate_limiter

        self.logger = logging.getLogger(__name__)

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch a resource and return its decoded JSON body

        Args:
            path: Path relative to the base URL, or an absolute URL
            query: Optional query parameters

        Returns:
            Decoded JSON document

        Raises:
            InvalidArgumentError: If path is empty
            ClientError: For 4xx responses
            ServerError: For 5xx responses
            FormatError: If the body is not valid JSON
        """
        if not path:
            raise InvalidArgumentError('path')

        request = APIRequest(url=self.build_url(path), parameters=query)
        return self.make_request(request).raw_data

    def build_url(self, path: str) -> str:
        """Resolve a path against the base URL; absolute URLs are returned unchanged"""
        return urljoin(self.base_url, path)

    def make_request(self, request: APIRequest) -> APIResponse:
        """
        Issue a single GET request with no retries

        Raises:
            ClientError, ServerError, FormatError: See get()
            requests.exceptions.RequestException: For network-level failures
        """
        if self.session is None:
            self.session = requests.Session()

        combined_headers = {**self.headers, **request.headers}
        request_timestamp = datetime.now()

        if self.rate_limiter is not None:
            with self.rate_limiter.throttle():
                response = self.session.get(request.url, params=request.parameters,
                                            headers=combined_headers,
                                            timeout=self.config.timeout_seconds)
        else:
            response = self.session.get(request.url, params=request.parameters,
                                        headers=combined_headers,
                                        timeout=self.config.timeout_seconds)

        url = response.url or request.url
        status = response.status_code
        body = response.text
        self.logger.debug(f"GET {url} -> {status}")

        if 400 <= status < 500:
            self.logger.warning(f"Client error {status} for {url}")
            raise ClientError(f"HTTP {status} for {url}", url, status, body)

        if 500 <= status < 600:
            self.logger.warning(f"Server error {status} for {url}")
            raise ServerError(f"HTTP {status} for {url}", url, status, body)

        try:
            raw_data = response.json()
        except ValueError as e:
            self.logger.warning(f"Malformed JSON from {url}: {e}")
            raise FormatError(f"Invalid JSON response from {url}: {e}", url, status, body) from e

        return APIResponse(
            raw_data=raw_data,
            url=url,
            status_code=status,
            request_timestamp=request_timestamp
        )

    def close_connection(self) -> None:
        """
        Close HTTP session and release resources
        """
        if self.session:
            self.session.close()
            self.session = None

    def __enter__(self) -> 'HTTPClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close_connection()
