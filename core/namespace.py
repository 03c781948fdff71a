# ============================================================================
# NAMESPACE RESOLVER - TENANT SLUG TO SCHEMA NAME
# ============================================================================
# STATUS: Core - Pure functions, no database access
# PURPOSE: Deterministic, reversible mapping between organization slugs and
#          tenant schema names
# ============================================================================
"""
NamespaceResolver - Tenant Slug to Namespace Mapping.

The mapping is a fixed contract with the host application: both sides must
turn 'acme-corp' into 'org_acme_corp'. The transform lower-cases the slug and
replaces every non-alphanumeric character with an underscore.

Slugs accepted by the application's validation rule (lowercase alphanumeric
words joined by single hyphens) map collision-free, and ``reverse`` restores
them exactly. Other input is still resolved, but two such slugs may land on
the same namespace ('Acme Corp' and 'acme-corp'); ``is_canonical_slug`` lets
callers reject them up front.

Usage:
    from core.namespace import NamespaceResolver

    resolver = NamespaceResolver()
    resolver.resolve('acme-corp')        # 'org_acme_corp'
    resolver.reverse('org_acme_corp')    # 'acme-corp'

Exports:
    NamespaceResolver: Resolver bound to a namespace prefix
    SLUG_PATTERN: Compiled canonical slug rule
"""

import re
import secrets
import time
from typing import Optional

from config.defaults import TenantDefaults, AuditDefaults
from exceptions import NamespaceError


SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


class NamespaceResolver:
    """
    Map organization slugs to tenant namespaces and back.
    """

    def __init__(self, prefix: str = TenantDefaults.NAMESPACE_PREFIX,
                 max_length: int = TenantDefaults.MAX_IDENTIFIER_LENGTH):
        self.prefix = prefix
        self.max_length = max_length

    @staticmethod
    def is_canonical_slug(slug: str) -> bool:
        """True if the slug satisfies the application's slug rule."""
        return bool(slug) and SLUG_PATTERN.match(slug) is not None

    def resolve(self, slug: str) -> str:
        """
        Resolve a slug to its namespace name.

        Raises:
            NamespaceError: Empty slug, or result longer than a Postgres identifier
        """
        if slug is None or not slug.strip():
            raise NamespaceError("Organization slug must not be empty")

        body = _NON_ALNUM.sub("_", slug.strip().lower())
        namespace = f"{self.prefix}{body}"

        if len(namespace.encode("utf-8")) > self.max_length:
            raise NamespaceError(
                f"Namespace '{namespace}' exceeds {self.max_length} bytes; shorten slug '{slug}'"
            )
        return namespace

    def reverse(self, namespace: str) -> str:
        """
        Recover the canonical slug from a namespace name.

        Raises:
            NamespaceError: Name does not carry the tenant prefix
        """
        if not self.is_tenant_namespace(namespace):
            raise NamespaceError(
                f"'{namespace}' is not a tenant namespace (expected prefix '{self.prefix}')"
            )
        return namespace[len(self.prefix):].replace("_", "-")

    def is_tenant_namespace(self, name: Optional[str]) -> bool:
        """True for names that start with the prefix and have a non-empty body."""
        return bool(name) and name.startswith(self.prefix) and len(name) > len(self.prefix)

    def like_pattern(self) -> str:
        """SQL LIKE pattern matching every tenant namespace."""
        escaped = self.prefix.replace("\\", "\\\\").replace("_", "\\_").replace("%", "\\%")
        return f"{escaped}%"

    @staticmethod
    def ephemeral_slug(prefix: str = AuditDefaults.EPHEMERAL_SLUG_PREFIX) -> str:
        """Unique throw-away slug, e.g. 'test-audit-1718000000-3fa2'."""
        return f"{prefix}-{int(time.time())}-{secrets.token_hex(2)}"


__all__ = [
    'NamespaceResolver',
    'SLUG_PATTERN',
]
