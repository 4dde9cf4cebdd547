"""
Shared fixtures for the Twitch adapter test suite
"""

import json
import pytest
from unittest.mock import Mock

from twitch_adapter.config_loader import APIConfig


BASE_URL = 'https://api.twitch.tv/kraken/'


def make_response(body=None, status=200, text=None, url=BASE_URL + 'test'):
    """Build a mock requests.Response"""
    response = Mock()
    response.status_code = status
    response.url = url

    if text is None:
        text = json.dumps(body)
    response.text = text

    if body is None:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body

    return response


def make_page(items, next_offset, total=None, key='streams', limit=100):
    """Build a paged response body in Twitch's envelope"""
    page = {
        key: items,
        '_links': {'next': f"{BASE_URL}{key}?limit={limit}&offset={next_offset}"},
    }
    if total is not None:
        page['_total'] = total
    return page


def make_items(start, count):
    return [{'_id': i, 'name': f"item{i}"} for i in range(start, start + count)]


class Item:
    """Minimal domain object with an identity key"""

    def __init__(self, data):
        self.id = data['_id']
        self.name = data['name']


@pytest.fixture
def config():
    """Configuration with rate limiting disabled"""
    return APIConfig(
        name='twitch',
        base_url=BASE_URL,
        client_id='test-client-id',
        rate_limits={'enabled': False, 'min_interval_seconds': 1.0},
    )


@pytest.fixture
def mock_session():
    return Mock()
