"""
Order Export Configuration

Constants and configuration struct for the order CSV export job.

Business Context:
    Exports are requested from the back office and produced asynchronously.
    The requester polls a short-lived status record until the file URL is
    available. Files are namespaced by environment and tenant so that
    staging exports never mix with production ones in a shared bucket.

Design Principles:
    - Configuration as code with environment overrides
    - Immutable config passed explicitly to the use case (no global lookups)
"""

import os
from dataclasses import dataclass
from typing import Final

# ============================================================================
# EXPORT CONSTANTS
# ============================================================================

# Orders fetched per page. Bounds memory regardless of result-set size.
DEFAULT_BATCH_SIZE: Final[int] = 1000

# Status records expire after 24 hours
DEFAULT_STATUS_TTL_SECONDS: Final[int] = 24 * 60 * 60

# File naming
DEFAULT_FILE_PREFIX: Final[str] = "orders"
FILE_TOKEN_LENGTH: Final[int] = 5

# Storage namespacing
PRODUCTION_ENVIRONMENT: Final[str] = "production"
NON_PRODUCTION_ENVIRONMENT: Final[str] = "staging"
DEFAULT_TENANT_DOMAIN: Final[str] = "default"

# Visibility passed to blob storage
VISIBILITY_PUBLIC: Final[str] = "public"
VISIBILITY_PRIVATE: Final[str] = "private"


# ============================================================================
# CONFIGURATION DATACLASS
# ============================================================================


@dataclass(frozen=True)
class ExportConfig:
    """
    Settings for one export run.

    Attributes:
        environment: Application environment name (APP_ENV), e.g. "production"
        tenant_domain: Primary domain of the current tenant, None if unknown
        batch_size: Orders per page when streaming from the database
        status_ttl_seconds: Expiry of the status record in the cache
        visibility: Visibility requested from blob storage
        file_prefix: Fixed label at the start of every export file name

    Examples:
        >>> config = ExportConfig(environment="production", tenant_domain="acme.run")
        >>> config.storage_environment
        'production'
        >>> ExportConfig(environment="local").storage_environment
        'staging'
    """

    environment: str = NON_PRODUCTION_ENVIRONMENT
    tenant_domain: str | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    status_ttl_seconds: int = DEFAULT_STATUS_TTL_SECONDS
    visibility: str = VISIBILITY_PUBLIC
    file_prefix: str = DEFAULT_FILE_PREFIX

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.status_ttl_seconds < 1:
            raise ValueError(
                f"status_ttl_seconds must be >= 1, got {self.status_ttl_seconds}"
            )

    @property
    def storage_environment(self) -> str:
        """Top-level storage folder: 'production' or 'staging'."""
        if self.environment == PRODUCTION_ENVIRONMENT:
            return PRODUCTION_ENVIRONMENT
        return NON_PRODUCTION_ENVIRONMENT

    @property
    def storage_domain(self) -> str:
        """Tenant folder, 'default' when no tenant domain is known."""
        return self.tenant_domain or DEFAULT_TENANT_DOMAIN

    @classmethod
    def from_env(cls) -> "ExportConfig":
        """
        Build config from environment variables.

        Variables:
            APP_ENV: application environment (default "staging")
            TENANT_DOMAIN: tenant's primary domain (default unset)
            EXPORT_BATCH_SIZE: page size (default 1000)
            EXPORT_STATUS_TTL: status expiry in seconds (default 86400)
            EXPORT_VISIBILITY: "public" or "private" (default "public")
        """
        return cls(
            environment=os.getenv("APP_ENV", NON_PRODUCTION_ENVIRONMENT),
            tenant_domain=os.getenv("TENANT_DOMAIN") or None,
            batch_size=int(os.getenv("EXPORT_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
            status_ttl_seconds=int(
                os.getenv("EXPORT_STATUS_TTL", str(DEFAULT_STATUS_TTL_SECONDS))
            ),
            visibility=os.getenv("EXPORT_VISIBILITY", VISIBILITY_PUBLIC),
        )
