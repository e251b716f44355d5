"""Thin boto3 wrappers for the remote calls used by the operators."""

from __future__ import annotations

from .backup import Backup
from .client import create_boto_client
from .cloudformation import CloudFormation
from .ecr import ECR
from .iam import IAM
from .s3 import S3

__all__ = [
    "Backup",
    "CloudFormation",
    "ECR",
    "IAM",
    "S3",
    "create_boto_client",
]
