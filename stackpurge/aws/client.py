"""boto3 client creation and shared call helpers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Optional, TypeVar

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Adaptive retries cover throttling on the bulk delete calls
BOTO_CONFIG = Config(retries={"max_attempts": 10, "mode": "adaptive"})


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
) -> Any:
    """Create a boto3 client for a service.

    Args:
        service_name: AWS service name (e.g., "s3")
        region_name: AWS region (optional, falls back to the profile/environment)
        profile_name: AWS profile name (optional)

    Returns:
        boto3 client
    """
    session = boto3.Session(profile_name=profile_name, region_name=region_name)
    return session.client(service_name, config=BOTO_CONFIG)


def error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "Unknown")


def call_with_retry(
    func: Callable[[], T],
    retryable_codes: Iterable[str],
    sleep_seconds: float,
    max_attempts: int = 10,
) -> T:
    """Call ``func`` and retry it with a fixed delay on retryable error codes.

    Args:
        func: Zero-argument callable performing one remote call
        retryable_codes: AWS error codes that should be retried
        sleep_seconds: Delay between attempts
        max_attempts: Maximum number of attempts

    Returns:
        Result of ``func``

    Raises:
        ClientError: If the error is not retryable or attempts are exhausted
    """
    codes = set(retryable_codes)
    attempt = 1
    while True:
        try:
            return func()
        except ClientError as e:
            code = error_code(e)
            if code not in codes or attempt >= max_attempts:
                raise
            logger.debug(f"{code}, retrying in {sleep_seconds}s (attempt {attempt}/{max_attempts})")
            time.sleep(sleep_seconds)
            attempt += 1
