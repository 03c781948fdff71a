"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - DatabaseConfig (connection string, timeouts)
    - TenantConfig (namespace contract, advisory locking, audit settings)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
    Components receive an AppConfig at construction; get_config() only
    supplies the default instance.
"""

import os
from pydantic import BaseModel, Field

from exceptions import ConfigurationError
from .database_config import DatabaseConfig
from .tenant_config import TenantConfig


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    debug_logging: bool = Field(
        default=False,
        description="Verbose DEBUG logging for every component (DEBUG_LOGGING)"
    )

    database: DatabaseConfig = Field(
        ...,
        description="PostgreSQL connection configuration"
    )

    tenant: TenantConfig = Field(
        default_factory=TenantConfig,
        description="Tenant namespace and audit configuration"
    )

    def debug_dict(self) -> dict:
        """Sanitized configuration for logging."""
        return {
            "debug_logging": self.debug_logging,
            "database": self.database.debug_dict(),
            "tenant": self.tenant.debug_dict(),
        }

    @classmethod
    def from_environment(cls):
        """
        Load all configs from environment.

        Raises:
            ConfigurationError: Missing or malformed setting
        """
        database = DatabaseConfig.from_environment()
        try:
            tenant = TenantConfig.from_environment()
        except ValueError as e:
            raise ConfigurationError(f"Invalid tenant setting: {e}") from e
        return cls(
            debug_logging=os.environ.get("DEBUG_LOGGING", "false").lower() == "true",
            database=database,
            tenant=tenant,
        )
