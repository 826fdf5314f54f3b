"""
Tests for the HTTP GET unsubscribe executor.
"""

from unittest.mock import Mock, patch

import requests
from requests.structures import CaseInsensitiveDict

from src.unsubscribe_executor.http_executor import HttpUnsubscribeExecutor
from src.unsubscribe_executor.types import ERROR_TRANSPORT


class TestHttpUnsubscribeExecutor:
    """Bounded, non-raising GET requests."""

    def test_default_timeout_is_five_seconds(self):
        executor = HttpUnsubscribeExecutor()

        assert executor.timeout == 5.0

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_success_on_2xx(self, mock_get):
        mock_get.return_value = Mock(status_code=200)
        executor = HttpUnsubscribeExecutor(user_agent='TestAgent/1.0')

        result = executor.execute('https://list.example.com/unsubscribe?token=abc')

        assert result.success is True
        assert result.status_code == 200
        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args == ('https://list.example.com/unsubscribe?token=abc',)
        assert kwargs['headers'] == {'User-Agent': 'TestAgent/1.0'}
        assert 0 < kwargs['timeout'] <= 5.0
        assert kwargs['allow_redirects'] is False

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_timeout_returns_false(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout('read timed out')
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://slow.example.com/unsubscribe')

        assert result.success is False
        assert result.error_kind == ERROR_TRANSPORT
        assert 'timed out' in result.error_message

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_connection_error_returns_false(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('refused')
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://down.example.com/unsubscribe')

        assert result.success is False
        assert result.error_kind == ERROR_TRANSPORT

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_non_2xx_returns_false(self, mock_get):
        mock_get.return_value = Mock(status_code=404)
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://list.example.com/gone')

        assert result.success is False
        assert result.status_code == 404

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_unexpected_error_is_not_raised(self, mock_get):
        mock_get.side_effect = ValueError('bad url')
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('not a url')

        assert result.success is False
        assert 'bad url' in result.error_message

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_follows_redirects(self, mock_get):
        mock_get.side_effect = [
            Mock(status_code=302, headers=CaseInsensitiveDict({'Location': '/unsubscribe/done'})),
            Mock(status_code=200),
        ]
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://list.example.com/u?token=abc')

        assert result.success is True
        assert mock_get.call_args_list[1].args == ('https://list.example.com/unsubscribe/done',)

    @patch('src.unsubscribe_executor.http_executor.time.monotonic')
    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_redirects_share_one_deadline(self, mock_get, mock_clock):
        ticks = iter([0.0, 0.0])
        mock_clock.side_effect = lambda: next(ticks, 6.0)
        mock_get.return_value = Mock(
            status_code=302, headers=CaseInsensitiveDict({'Location': 'https://slow.example.com/next'})
        )
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://list.example.com/u')

        assert result.success is False
        assert result.error_kind == ERROR_TRANSPORT
        assert 'timed out' in result.error_message
        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs['timeout'] == 5.0

    @patch('src.unsubscribe_executor.http_executor.requests.get')
    def test_redirect_loop_fails(self, mock_get):
        mock_get.return_value = Mock(
            status_code=301, headers=CaseInsensitiveDict({'Location': 'https://list.example.com/u'})
        )
        executor = HttpUnsubscribeExecutor()

        result = executor.execute('https://list.example.com/u')

        assert result.success is False
        assert 'redirects' in result.error_message
        assert mock_get.call_count == executor.max_redirects + 1
