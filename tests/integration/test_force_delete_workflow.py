"""Integration tests for the force deletion workflow.

Runs the whole pipeline (root deleter, classification, operators, nested stack
recursion) against fake AWS capabilities.
"""

from __future__ import annotations

from unittest.mock import call

import pytest

from stackpurge.models.operation import OperationStatus
from stackpurge.operation.deleter import StackDeleter
from stackpurge.resource_types import SUPPORTED_RESOURCE_TYPES
from tests.fixtures.stack_resources import FakeOperatorFactory, create_resource, object_versions

ROOT_ID = "arn:aws:cloudformation:us-east-1:123456789012:stack/S/root"
CHILD_ID = "arn:aws:cloudformation:us-east-1:123456789012:stack/S-Child/child"


@pytest.fixture
def factory() -> FakeOperatorFactory:
    factory = FakeOperatorFactory(concurrency=4)
    factory.cloudformation.describe_stack.return_value = {
        "StackName": "S",
        "StackId": ROOT_ID,
        "StackStatus": "DELETE_FAILED",
    }
    return factory


def bucket_contents(factory: FakeOperatorFactory, contents: dict) -> None:
    """Serve each bucket's listing once, then report it empty."""
    listings = {name: [versions] for name, versions in contents.items()}
    factory.s3.list_object_versions.side_effect = lambda name: listings.get(name, []).pop() if listings.get(name) else []


class TestForceDeleteWorkflow:
    """End to end force deletion scenarios."""

    def test_unsupported_resource_with_selected_bucket_and_role(self, factory: FakeOperatorFactory) -> None:
        """Test that selected resources are cleared and the unknown type fails the stack."""
        factory.cloudformation.list_stack_resources.return_value = [
            create_resource("Bucket", "AWS::S3::Bucket", "s-bucket"),
            create_resource("Role", "AWS::IAM::Role", "s-role"),
            create_resource("Thing", "AWS::Unknown::Thing"),
        ]
        factory.iam.list_attached_role_policies.return_value = ["arn:aws:iam::aws:policy/ReadOnlyAccess"]

        operation = StackDeleter(factory, ["AWS::S3::Bucket", "AWS::IAM::Role"]).execute("S")

        assert operation.status == OperationStatus.FAILED
        assert operation.logical_resource_ids == ["Bucket", "Role", "Thing"]
        assert operation.error_message.startswith("UnsupportedResourceError: S deletion is FAILED !!!")
        assert ROOT_ID not in operation.error_message
        assert "AWS::Unknown::Thing" in operation.error_message
        factory.s3.delete_bucket.assert_called_once_with("s-bucket")
        factory.iam.detach_role_policies.assert_called_once_with(
            "s-role", ["arn:aws:iam::aws:policy/ReadOnlyAccess"], 0
        )
        factory.iam.delete_role.assert_called_once_with("s-role", 0)
        factory.cloudformation.delete_stack.assert_not_called()

    def test_nested_stack_tree_is_deleted_bottom_up(self, factory: FakeOperatorFactory) -> None:
        """Test that every level is cleared and deleted before the level above it."""
        factory.cloudformation.list_stack_resources.side_effect = lambda name: {
            ROOT_ID: [
                create_resource("Bucket", "AWS::S3::Bucket", "root-bucket"),
                create_resource("Child", "AWS::CloudFormation::Stack", CHILD_ID),
                create_resource("Provider", "Custom::Provider", "provider-id"),
                create_resource("Queue", "AWS::SQS::Queue", resource_status="DELETE_COMPLETE"),
            ],
            CHILD_ID: [
                create_resource("Repository", "AWS::ECR::Repository", "child-repo"),
                create_resource("Vault", "AWS::Backup::BackupVault", "child-vault"),
                create_resource("ChildBucket", "AWS::S3::Bucket", "child-bucket"),
            ],
        }[name]
        bucket_contents(factory, {"root-bucket": object_versions(2500), "child-bucket": object_versions(3)})
        factory.backup.list_recovery_points.return_value = ["arn:rp-1", "arn:rp-2"]

        operation = StackDeleter(factory, SUPPORTED_RESOURCE_TYPES).execute("S")

        assert operation.status == OperationStatus.COMPLETED
        assert operation.force_deleted is True
        assert operation.logical_resource_ids == ["Bucket", "Child", "Provider"]
        assert sorted(len(c.args[1]) for c in factory.s3.delete_objects.call_args_list) == [3, 500, 1000, 1000]
        assert sorted(c.args[0] for c in factory.s3.delete_bucket.call_args_list) == [
            "child-bucket",
            "root-bucket",
        ]
        factory.ecr.delete_repository.assert_called_once_with("child-repo")
        assert factory.backup.delete_recovery_point.call_count == 2
        factory.backup.delete_backup_vault.assert_called_once_with("child-vault")
        assert factory.cloudformation.delete_stack.call_args_list == [call(CHILD_ID), call(ROOT_ID)]
        operation.validate()

    def test_object_deletion_errors_fail_the_run(self, factory: FakeOperatorFactory) -> None:
        factory.cloudformation.list_stack_resources.return_value = [
            create_resource("Bucket", "AWS::S3::Bucket", "s-bucket"),
        ]
        bucket_contents(factory, {"s-bucket": object_versions(1)})
        factory.s3.delete_objects.return_value = [
            {"Key": "key-0", "VersionId": "v0", "Code": "AccessDenied", "Message": "Access Denied"}
        ]

        operation = StackDeleter(factory, SUPPORTED_RESOURCE_TYPES).execute("S")

        assert operation.status == OperationStatus.FAILED
        assert operation.error_message == (
            "DeleteObjectsError: failed to delete the following objects from s-bucket\n"
            "Code: AccessDenied\n"
            "Key: key-0\n"
            "VersionId: v0\n"
            "Message: Access Denied\n"
        )
        factory.s3.delete_bucket.assert_not_called()
        factory.cloudformation.delete_stack.assert_not_called()
