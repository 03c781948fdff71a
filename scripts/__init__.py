"""Command-line entry points: provision-tenant and audit-tenants."""
