"""Unit tests for confluence_client.retry_logic module."""

import pytest
from unittest.mock import MagicMock, patch

from src.confluence_client.errors import PageNotFoundError, RemoteRequestFailed
from src.confluence_client.retry_logic import (
    MAX_RETRIES,
    _is_rate_limit_error,
    retry_on_rate_limit,
)


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_429(self):
        assert _is_rate_limit_error(RemoteRequestFailed(429, "Too Many Requests")) is True

    def test_returns_false_for_other_status(self):
        assert _is_rate_limit_error(RemoteRequestFailed(500)) is False

    def test_returns_false_for_version_conflict(self):
        assert _is_rate_limit_error(RemoteRequestFailed(409)) is False


@patch('src.confluence_client.retry_logic.time.sleep')
class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_returns_result_without_retry(self, mock_sleep):
        func = MagicMock(return_value="ok")

        assert retry_on_rate_limit(func) == "ok"
        func.assert_called_once()
        mock_sleep.assert_not_called()

    def test_retries_with_exponential_backoff(self, mock_sleep):
        rate_limited = RemoteRequestFailed(429)
        func = MagicMock(side_effect=[rate_limited, rate_limited, "ok"])

        assert retry_on_rate_limit(func) == "ok"
        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    def test_gives_up_after_max_retries(self, mock_sleep):
        func = MagicMock(side_effect=RemoteRequestFailed(429))

        with pytest.raises(RemoteRequestFailed) as exc_info:
            retry_on_rate_limit(func)

        assert exc_info.value.status_code == 429
        assert func.call_count == MAX_RETRIES + 1
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 4]

    def test_other_failures_fail_fast(self, mock_sleep):
        func = MagicMock(side_effect=RemoteRequestFailed(409, "Conflict"))

        with pytest.raises(RemoteRequestFailed):
            retry_on_rate_limit(func)

        func.assert_called_once()
        mock_sleep.assert_not_called()

    def test_non_request_errors_pass_through(self, mock_sleep):
        func = MagicMock(side_effect=PageNotFoundError("123"))

        with pytest.raises(PageNotFoundError):
            retry_on_rate_limit(func)

        func.assert_called_once()

    def test_logs_retries_on_given_logger(self, mock_sleep):
        log = MagicMock()
        func = MagicMock(side_effect=[RemoteRequestFailed(429), "ok"])

        retry_on_rate_limit(func, log)

        assert "retrying in 1s" in log.info.call_args.args[0]
