"""Tests for boto3 client creation and retry helpers."""

from __future__ import annotations

from unittest.mock import Mock, call, patch

import pytest
from botocore.exceptions import ClientError

from stackpurge.aws.client import BOTO_CONFIG, call_with_retry, create_boto_client, error_code
from tests.fixtures.stack_resources import client_error


class TestCreateBotoClient:
    """Test suite for create_boto_client."""

    @patch("stackpurge.aws.client.boto3.Session")
    def test_client_uses_session_and_retry_config(self, mock_session) -> None:
        client = create_boto_client("s3", region_name="eu-west-1", profile_name="dev")

        mock_session.assert_called_once_with(profile_name="dev", region_name="eu-west-1")
        mock_session.return_value.client.assert_called_once_with("s3", config=BOTO_CONFIG)
        assert client is mock_session.return_value.client.return_value


class TestErrorCode:
    def test_error_code(self) -> None:
        assert error_code(client_error("NoSuchEntity")) == "NoSuchEntity"

    def test_missing_code(self) -> None:
        assert error_code(ClientError({}, "GetRole")) == "Unknown"


@patch("stackpurge.aws.client.time.sleep")
class TestCallWithRetry:
    """Test suite for call_with_retry."""

    def test_returns_result(self, mock_sleep) -> None:
        assert call_with_retry(lambda: "done", {"Throttling"}, 5) == "done"
        mock_sleep.assert_not_called()

    def test_retries_retryable_errors(self, mock_sleep) -> None:
        func = Mock(side_effect=[client_error("DeleteConflict"), client_error("Throttling"), "done"])

        assert call_with_retry(func, {"DeleteConflict", "Throttling"}, 5) == "done"
        assert func.call_count == 3
        assert mock_sleep.call_args_list == [call(5), call(5)]

    def test_non_retryable_error_raised_immediately(self, mock_sleep) -> None:
        error = client_error("AccessDenied")
        func = Mock(side_effect=error)

        with pytest.raises(ClientError) as exc_info:
            call_with_retry(func, {"Throttling"}, 5)

        assert exc_info.value is error
        func.assert_called_once()
        mock_sleep.assert_not_called()

    def test_gives_up_after_max_attempts(self, mock_sleep) -> None:
        func = Mock(side_effect=client_error("Throttling"))

        with pytest.raises(ClientError):
            call_with_retry(func, {"Throttling"}, 1, max_attempts=3)

        assert func.call_count == 3
        assert mock_sleep.call_count == 2
