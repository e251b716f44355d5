"""Tests for BucketOperator class."""

from __future__ import annotations

from unittest.mock import Mock, call

import pytest

from stackpurge.aws.s3 import S3
from stackpurge.operation.bucket import MAX_EMPTY_PASSES, BucketOperator
from stackpurge.operation.errors import BucketNotEmptyError, DeleteObjectsError
from tests.fixtures.stack_resources import InFlightRecorder, client_error, create_resource, object_versions


@pytest.fixture
def s3() -> Mock:
    """Create a mock S3 capability for an existing, empty bucket."""
    client = Mock(spec=S3)
    client.bucket_exists.return_value = True
    client.list_object_versions.return_value = []
    client.delete_objects.return_value = []
    return client


class TestDeleteBucket:
    """Test suite for BucketOperator.delete_bucket."""

    def test_delete_empty_bucket(self, s3: Mock) -> None:
        """Test that an empty bucket is deleted without any object deletion."""
        BucketOperator(s3).delete_bucket("test")

        s3.delete_objects.assert_not_called()
        s3.delete_bucket.assert_called_once_with("test")

    def test_delete_bucket_already_deleted(self, s3: Mock) -> None:
        """Test that a missing bucket succeeds without further calls."""
        s3.bucket_exists.return_value = False

        BucketOperator(s3).delete_bucket("test")

        s3.list_object_versions.assert_not_called()
        s3.delete_bucket.assert_not_called()

    def test_emptying_converges_on_shrinking_listing(self, s3: Mock) -> None:
        """Test that listing and deleting repeat until a listing comes back empty."""
        first, second = object_versions(3), object_versions(1, prefix="late")
        s3.list_object_versions.side_effect = [first, second, []]

        BucketOperator(s3).delete_bucket("test")

        assert s3.list_object_versions.call_count == 3
        assert s3.delete_objects.call_args_list == [call("test", first), call("test", second)]
        s3.delete_bucket.assert_called_once_with("test")

    def test_batches_at_most_1000_objects(self, s3: Mock) -> None:
        """Test that large listings are split into DeleteObjects sized batches."""
        s3.list_object_versions.side_effect = [object_versions(2500), []]

        BucketOperator(s3, concurrency=2).delete_bucket("test")

        batch_sizes = sorted(len(c.args[1]) for c in s3.delete_objects.call_args_list)
        assert batch_sizes == [500, 1000, 1000]

    def test_batches_of_one_bucket_are_sequential(self, s3: Mock) -> None:
        """Test that a single bucket never has two DeleteObjects calls in flight."""
        recorder = InFlightRecorder(return_value=[])
        s3.list_object_versions.side_effect = [object_versions(5000), []]
        s3.delete_objects.side_effect = recorder

        BucketOperator(s3, concurrency=4).delete_bucket("test")

        assert recorder.calls == 5
        assert recorder.peak == 1

    def test_delete_objects_error_with_remaining_objects(self, s3: Mock) -> None:
        """Test that a failing DeleteObjects call is fatal while objects remain."""
        error = client_error("DeleteObjectsError")
        s3.list_object_versions.return_value = object_versions(2)
        s3.delete_objects.side_effect = error

        with pytest.raises(Exception) as exc_info:
            BucketOperator(s3).delete_bucket("test")

        assert exc_info.value is error
        s3.delete_bucket.assert_not_called()

    def test_delete_objects_error_after_zero_remaining(self, s3: Mock) -> None:
        """Test that a would-be failing delete is never fatal once nothing remains."""
        s3.list_object_versions.return_value = []
        s3.delete_objects.side_effect = client_error("DeleteObjectsError")

        BucketOperator(s3).delete_bucket("test")

        s3.delete_objects.assert_not_called()
        s3.delete_bucket.assert_called_once_with("test")

    def test_delete_objects_output_errors_are_formatted(self, s3: Mock) -> None:
        """Test that per-object errors are reported with every field."""
        s3.list_object_versions.return_value = object_versions(1)
        s3.delete_objects.return_value = [
            {"Code": "AccessDenied", "Key": "key-0", "VersionId": "v0", "Message": "Access Denied"},
        ]

        with pytest.raises(DeleteObjectsError) as exc_info:
            BucketOperator(s3).delete_bucket("test")

        message = str(exc_info.value)
        assert message.startswith("DeleteObjectsError")
        assert "Code: AccessDenied\nKey: key-0\nVersionId: v0\nMessage: Access Denied\n" in message
        assert exc_info.value.bucket_name == "test"
        s3.delete_bucket.assert_not_called()

    def test_bucket_never_empties(self, s3: Mock) -> None:
        """Test that emptying stops with an error after the maximum number of passes."""
        s3.list_object_versions.return_value = object_versions(1)

        with pytest.raises(BucketNotEmptyError) as exc_info:
            BucketOperator(s3).delete_bucket("test")

        assert exc_info.value.remaining == 1
        assert s3.delete_objects.call_count == MAX_EMPTY_PASSES
        s3.delete_bucket.assert_not_called()

    @pytest.mark.parametrize(
        "method, code",
        [
            ("bucket_exists", "ListBucketsError"),
            ("list_object_versions", "ListObjectVersionsError"),
            ("delete_bucket", "DeleteBucketError"),
        ],
    )
    def test_remote_errors_propagate_unchanged(self, s3: Mock, method: str, code: str) -> None:
        """Test that capability failures are raised verbatim."""
        error = client_error(code)
        getattr(s3, method).side_effect = error

        with pytest.raises(Exception) as exc_info:
            BucketOperator(s3).delete_bucket("test")

        assert exc_info.value is error


class TestBucketOperatorDeleteResources:
    """Test suite for BucketOperator.delete_resources."""

    def test_no_resources_makes_no_calls(self, s3: Mock) -> None:
        """Test that an empty operator does not touch S3."""
        operator = BucketOperator(s3)

        operator.delete_resources()

        assert operator.resource_count() == 0
        assert s3.mock_calls == []

    def test_deletes_every_resource(self, s3: Mock) -> None:
        """Test that every collected bucket is deleted by physical ID."""
        operator = BucketOperator(s3, concurrency=2)
        operator.add_resource(create_resource("Bucket1", "AWS::S3::Bucket", "bucket-1"))
        operator.add_resource(create_resource("Bucket2", "AWS::S3::Bucket", "bucket-2"))

        operator.delete_resources()

        assert operator.resource_count() == 2
        assert sorted(c.args[0] for c in s3.delete_bucket.call_args_list) == ["bucket-1", "bucket-2"]

    def test_first_failure_is_raised(self, s3: Mock) -> None:
        """Test that a failing bucket fails the whole operator."""
        s3.bucket_exists.side_effect = client_error("ListBucketsError")
        operator = BucketOperator(s3)
        operator.add_resource(create_resource("Bucket1", "AWS::S3::Bucket"))

        with pytest.raises(Exception, match="ListBucketsError"):
            operator.delete_resources()

    @pytest.mark.parametrize("concurrency", [1, 2, 3])
    def test_in_flight_calls_never_exceed_concurrency(self, s3: Mock, concurrency: int) -> None:
        """Test that emptying several large buckets keeps at most C DeleteObjects calls in flight."""
        listings = {f"bucket-{i}": object_versions(4000) for i in range(4)}
        recorder = InFlightRecorder(return_value=[])
        s3.list_object_versions.side_effect = lambda name: listings.pop(name, [])
        s3.delete_objects.side_effect = recorder
        operator = BucketOperator(s3, concurrency=concurrency)
        for name in listings:
            operator.add_resource(create_resource(name, "AWS::S3::Bucket", name))

        operator.delete_resources()

        assert recorder.calls == 16
        assert 1 <= recorder.peak <= concurrency
        assert s3.delete_bucket.call_count == 4
