"""CLI configuration.

Loaded once at startup from a YAML file, then overridden by environment
variables and command line options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..aws.iam import DEFAULT_SLEEP_SECONDS
from ..operation.concurrency import DEFAULT_CONCURRENCY
from ..resource_types import SUPPORTED_RESOURCE_TYPES, validate_resource_types

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STACKPURGE_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".stackpurge" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """Runtime configuration.

    Attributes:
        aws_profile: AWS profile name (optional)
        region: AWS region (optional)
        log_level: Default log level
        concurrency: Maximum concurrent deletions per operator
        iam_retry_delay: Seconds between IAM detach/delete retries
        resource_types: Resource types allowed to be force deleted
    """

    aws_profile: Optional[str] = None
    region: Optional[str] = None
    log_level: str = "INFO"
    concurrency: int = DEFAULT_CONCURRENCY
    iam_retry_delay: float = DEFAULT_SLEEP_SECONDS
    resource_types: List[str] = field(default_factory=lambda: list(SUPPORTED_RESOURCE_TYPES))

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load configuration.

        Precedence (lowest to highest): defaults, YAML file, environment.

        Args:
            config_path: YAML file path (default: $STACKPURGE_CONFIG or ~/.stackpurge/config.yaml)

        Returns:
            Validated Config

        Raises:
            ValueError: If the file or a value is invalid
        """
        path = Path(config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
        data: Dict[str, Any] = {}

        if path.exists():
            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid config file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ValueError(f"Invalid config file {path}: expected a mapping")
            logger.debug(f"Loaded config from {path}")
        elif config_path:
            raise ValueError(f"Config file not found: {path}")

        config = cls.from_dict(data)
        config.apply_environment(os.environ)
        config.validate()
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        config = cls()
        for key in ("aws_profile", "region", "log_level", "concurrency", "iam_retry_delay", "resource_types"):
            if data.get(key) is not None:
                setattr(config, key, data[key])
        return config

    def apply_environment(self, environ: Any) -> None:
        """Override values from environment variables."""
        if environ.get("AWS_PROFILE"):
            self.aws_profile = environ["AWS_PROFILE"]
        if environ.get("AWS_REGION"):
            self.region = environ["AWS_REGION"]
        if environ.get("STACKPURGE_CONCURRENCY"):
            try:
                self.concurrency = int(environ["STACKPURGE_CONCURRENCY"])
            except ValueError as e:
                raise ValueError(f"STACKPURGE_CONCURRENCY must be an integer: {e}") from e

    def validate(self) -> bool:
        """Validate configuration values.

        Returns:
            True if valid

        Raises:
            ValueError: If any value is invalid
        """
        if not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ValueError(f"concurrency must be a positive integer, got {self.concurrency}")

        if self.iam_retry_delay < 0:
            raise ValueError(f"iam_retry_delay cannot be negative, got {self.iam_retry_delay}")

        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}")
        self.log_level = str(self.log_level).upper()

        if not isinstance(self.resource_types, list) or not self.resource_types:
            raise ValueError("resource_types must be a non-empty list")
        self.resource_types = validate_resource_types(self.resource_types)

        return True
