# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: Single import point for config models and the get_config singleton
# EXPORTS: AppConfig, DatabaseConfig, TenantConfig, get_config, reset_config,
#          debug_config
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── database_config.py       # Connection string and timeouts
    ├── tenant_config.py         # Namespace contract and audit settings
    ├── env_validation.py        # Regex validation of env vars
    └── defaults.py              # Default values

Usage:
    # Singleton pattern (default for CLIs)
    from config import get_config
    config = get_config()
    prefix = config.tenant.namespace_prefix

    # Explicit injection (library callers and tests)
    from config import AppConfig, DatabaseConfig
    config = AppConfig(database=DatabaseConfig(connection_string="postgresql://..."))
    provisioner = TenantProvisioner(config=config)
"""

from typing import Optional

from .database_config import DatabaseConfig
from .tenant_config import TenantConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).
    """
    try:
        return get_config().debug_dict()
    except Exception as e:
        return {'error': f"{type(e).__name__}: {e}"}


__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'TenantConfig',
    'get_config',
    'reset_config',
    'debug_config',
]
