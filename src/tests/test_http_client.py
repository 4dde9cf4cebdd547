"""
Test suite for HTTPClient component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
import requests
from unittest.mock import Mock, patch

from twitch_adapter.http_client import HTTPClient, APIRequest, APIResponse, LIBRARY_VERSION
from twitch_adapter.config_loader import APIConfig
from twitch_adapter.errors import (
    InvalidArgumentError, FormatError, ClientError, ServerError, ResponseError, TwitchError
)
from twitch_adapter.rate_limiter import RateLimiter
from conftest import make_response, BASE_URL


class TestHTTPClient:
    """Test suite for HTTPClient request and classification functionality"""

    def test_init_sets_client_id_version_and_accept_headers(self, config):
        """
        Test that the client identifier and API version headers are configured
        """
        # Act
        http_client = HTTPClient(config)

        # Assert
        assert http_client.headers['Client-ID'] == 'test-client-id'
        assert http_client.headers['Kappa-Version'] == LIBRARY_VERSION
        assert http_client.headers['Accept'] == 'application/vnd.twitchtv.v2+json'

    def test_init_with_api_version_three_uses_matching_accept_header(self):
        """
        Test that the Accept media type follows the configured API version
        """
        # Arrange
        config = APIConfig(name='twitch', client_id='abc', api_version=3)

        # Act
        http_client = HTTPClient(config)

        # Assert
        assert http_client.headers['Accept'] == 'application/vnd.twitchtv.v3+json'

    def test_get_with_successful_response_returns_decoded_json(self, config, mock_session):
        """
        Test that a 200 response returns the parsed JSON body
        """
        # Arrange
        mock_session.get.return_value = make_response({'name': 'destiny'})
        http_client = HTTPClient(config, session=mock_session)

        # Act
        result = http_client.get('channels/destiny', {'foo': 'bar'})

        # Assert
        assert result == {'name': 'destiny'}
        mock_session.get.assert_called_once()
        call_args = mock_session.get.call_args
        assert call_args[0][0] == BASE_URL + 'channels/destiny'
        assert call_args[1]['params'] == {'foo': 'bar'}
        assert call_args[1]['headers']['Client-ID'] == 'test-client-id'

    def test_get_with_absolute_url_uses_url_unchanged(self, config, mock_session):
        """
        Test that pagination links (absolute URLs) are not re-resolved
        """
        # Arrange
        mock_session.get.return_value = make_response({})
        http_client = HTTPClient(config, session=mock_session)
        next_url = 'https://api.twitch.tv/kraken/streams?limit=100&offset=100'

        # Act
        http_client.get(next_url)

        # Assert
        assert mock_session.get.call_args[0][0] == next_url

    @pytest.mark.parametrize('path', ['', None])
    def test_get_with_empty_path_raises_invalid_argument(self, config, mock_session, path):
        """
        Test that a missing path is rejected before any request is made
        """
        # Arrange
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(InvalidArgumentError):
            http_client.get(path)

        mock_session.get.assert_not_called()

    def test_get_with_invalid_json_raises_format_error_with_context(self, config, mock_session):
        """
        Test that a malformed body raises FormatError carrying url, status and body
        """
        # Arrange
        mock_session.get.return_value = make_response(
            None, status=200, text='"Invalid JSON', url=BASE_URL + 'test'
        )
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(FormatError) as exc_info:
            http_client.get('test')

        error = exc_info.value
        assert 'test' in error.url
        assert error.status == 200
        assert error.body == '"Invalid JSON'

    def test_get_with_404_raises_client_error(self, config, mock_session):
        """
        Test that 4xx responses raise ClientError without parsing the body
        """
        # Arrange
        mock_session.get.return_value = make_response(None, status=404, text='Not found.')
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(ClientError) as exc_info:
            http_client.get('test')

        assert exc_info.value.status == 404
        assert exc_info.value.body == 'Not found.'
        assert 'test' in exc_info.value.url

    def test_get_with_500_raises_server_error(self, config, mock_session):
        """
        Test that 5xx responses raise ServerError
        """
        # Arrange
        mock_session.get.return_value = make_response(None, status=500, text='Internal server error.')
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(ServerError) as exc_info:
            http_client.get('test')

        assert exc_info.value.status == 500
        assert exc_info.value.body == 'Internal server error.'

    def test_response_errors_share_common_base_classes(self):
        """
        Test that every response error can be caught as ResponseError and TwitchError
        """
        # Assert
        for error_class in (FormatError, ClientError, ServerError):
            assert issubclass(error_class, ResponseError)
            assert issubclass(error_class, TwitchError)
        assert issubclass(InvalidArgumentError, ValueError)

    def test_get_does_not_retry_server_errors(self, config, mock_session):
        """
        Test that exactly one request is made even for a 503 response
        """
        # Arrange
        mock_session.get.return_value = make_response(None, status=503, text='Unavailable')
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(ServerError):
            http_client.get('streams')

        assert mock_session.get.call_count == 1

    def test_get_with_network_failure_propagates_request_exception(self, config, mock_session):
        """
        Test that connection errors from requests are not wrapped or retried
        """
        # Arrange
        mock_session.get.side_effect = requests.exceptions.ConnectionError("refused")
        http_client = HTTPClient(config, session=mock_session)

        # Act & Assert
        with pytest.raises(requests.exceptions.ConnectionError):
            http_client.get('streams')

        assert mock_session.get.call_count == 1

    def test_make_request_returns_api_response(self, config, mock_session):
        """
        Test that make_request wraps the decoded body with status and url
        """
        # Arrange
        mock_session.get.return_value = make_response({'ok': True}, url=BASE_URL + 'streams')
        http_client = HTTPClient(config, session=mock_session)

        # Act
        result = http_client.make_request(APIRequest(url=BASE_URL + 'streams'))

        # Assert
        assert isinstance(result, APIResponse)
        assert result.raw_data == {'ok': True}
        assert result.status_code == 200
        assert result.url == BASE_URL + 'streams'

    @patch('requests.Session')
    def test_make_request_creates_session_when_missing(self, mock_session_class, config):
        """
        Test that a requests.Session is created lazily on first request
        """
        # Arrange
        mock_session = Mock()
        mock_session.get.return_value = make_response({})
        mock_session_class.return_value = mock_session
        http_client = HTTPClient(config)

        # Act
        http_client.get('streams')

        # Assert
        mock_session_class.assert_called_once()
        assert http_client.session is mock_session

    def test_get_applies_rate_limiter_around_request(self, config, mock_session):
        """
        Test that the rate limiter waits before and records after each request
        """
        # Arrange
        now = [100.0]
        sleeps = []
        limiter = RateLimiter(1.0, clock=lambda: now[0], sleep=sleeps.append)
        mock_session.get.return_value = make_response({})
        http_client = HTTPClient(config, session=mock_session, rate_limiter=limiter)

        # Act
        http_client.get('streams')
        now[0] = 100.25
        http_client.get('streams')

        # Assert
        assert sleeps == [0.75]
        assert limiter.last_request_time == 100.25

    def test_get_records_request_time_even_when_request_fails(self, config, mock_session):
        """
        Test that the last request time is updated when the request raises
        """
        # Arrange
        limiter = RateLimiter(1.0, clock=lambda: 42.0, sleep=lambda s: None)
        mock_session.get.side_effect = requests.exceptions.Timeout("timeout")
        http_client = HTTPClient(config, session=mock_session, rate_limiter=limiter)

        # Act
        with pytest.raises(requests.exceptions.Timeout):
            http_client.get('streams')

        # Assert
        assert limiter.last_request_time == 42.0

    def test_init_with_rate_limits_enabled_creates_limiter(self):
        """
        Test that rate limiting is on by default with a one second interval
        """
        # Act
        http_client = HTTPClient(APIConfig(name='twitch'))

        # Assert
        assert isinstance(http_client.rate_limiter, RateLimiter)
        assert http_client.rate_limiter.min_interval_seconds == 1.0

    def test_init_with_rate_limits_disabled_has_no_limiter(self, config):
        """
        Test that disabling rate limits in configuration removes the limiter
        """
        # Act
        http_client = HTTPClient(config)

        # Assert
        assert http_client.rate_limiter is None

    def test_close_connection_closes_session(self, config, mock_session):
        """
        Test that closing the client closes and releases the session
        """
        # Arrange
        with HTTPClient(config, session=mock_session) as http_client:
            pass

        # Assert
        mock_session.close.assert_called_once()
        assert http_client.session is None

    def test_get_passes_configured_timeout(self, config, mock_session):
        """
        Test that every request is bounded by the configured timeout
        """
        # Arrange
        config.timeout_seconds = 5.0
        mock_session.get.return_value = make_response({})
        http_client = HTTPClient(config, session=mock_session)

        # Act
        http_client.get('streams')

        # Assert
        assert mock_session.get.call_args[1]['timeout'] == 5.0

    def test_get_with_rate_limiter_passes_default_timeout(self, mock_session):
        """
        Test that the default thirty second timeout applies on the rate-limited path
        """
        # Arrange
        limiter = RateLimiter(1.0, clock=lambda: 0.0, sleep=lambda s: None)
        mock_session.get.return_value = make_response({})
        http_client = HTTPClient(APIConfig(name='twitch'), session=mock_session, rate_limiter=limiter)

        # Act
        http_client.get('streams')

        # Assert
        assert mock_session.get.call_args[1]['timeout'] == 30.0
