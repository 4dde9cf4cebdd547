"""
Twitch API adapter package
Maps paged REST resources into typed objects with pagination, deduplication and rate limiting
"""

from .errors import (
    TwitchError, InvalidArgumentError, ResponseError, FormatError, ClientError, ServerError
)
from .config_loader import ConfigLoader, APIConfig, ConfigurationError, EnvironmentError
from .rate_limiter import RateLimiter
from .http_client import HTTPClient, APIRequest, APIResponse, LIBRARY_VERSION
from .status_mapper import StatusMapper
from .pagination_strategy import PaginationStrategy, LinkOffsetPagination, Paginator
from .accumulator import Accumulator
from .proxy import LazyReference
from .identity import IdEquality
from .models import Images, Channel, Stream, User, Game, GameSuggestion, Team, Video
from .client import TwitchClient, configure, default_client

__version__ = LIBRARY_VERSION

__all__ = [
    'TwitchError',
    'InvalidArgumentError',
    'ResponseError',
    'FormatError',
    'ClientError',
    'ServerError',
    'ConfigLoader',
    'APIConfig',
    'ConfigurationError',
    'EnvironmentError',
    'RateLimiter',
    'HTTPClient',
    'APIRequest',
    'APIResponse',
    'StatusMapper',
    'PaginationStrategy',
    'LinkOffsetPagination',
    'Paginator',
    'Accumulator',
    'LazyReference',
    'IdEquality',
    'Images',
    'Channel',
    'Stream',
    'User',
    'Game',
    'GameSuggestion',
    'Team',
    'Video',
    'TwitchClient',
    'configure',
    'default_client',
]
