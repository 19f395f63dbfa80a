import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


class SimpleDBConfig(BaseModel):
    """Configuration for the SimpleDB connection and domain naming."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # SimpleDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("SIMPLEDB_ENDPOINT_URL"),
        description="SimpleDB endpoint URL (for local emulators)"
    )

    # Domain configuration
    domain_prefix: str = Field(
        default_factory=lambda: os.getenv("SIMPLEDB_DOMAIN_PREFIX", ""),
        description="Prefix to add to all domain names"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of botocore retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Connect and read timeout in seconds for every round trip"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("SIMPLEDB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for SimpleDB operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('retries', 'max_pool_connections')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Connection settings must not be negative")
        return v

    @field_validator('timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Timeout must be greater than zero")
        return v

    def get_domain_name(self, base_name: str) -> str:
        """Get the full domain name with the configured prefix.

        Args:
            base_name: Base domain name

        Returns:
            Full domain name
        """
        if self.domain_prefix:
            return f"{self.domain_prefix}_{base_name}"
        return base_name

    @classmethod
    def from_env(cls) -> 'SimpleDBConfig':
        """Create configuration from environment variables.

        Returns:
            SimpleDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = "http://localhost:8080") -> 'SimpleDBConfig':
        """Create configuration for a local SimpleDB emulator.

        Args:
            endpoint_url: Emulator endpoint

        Returns:
            SimpleDBConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
