# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by every layer
# PURPOSE: Exception hierarchy separating programming bugs from expected
#          runtime failures of provisioning and audit runs
# EXPORTS: ContractViolationError, ProvisioningSystemError, DatabaseError,
#          DatabaseConnectionError, NamespaceError, CatalogDefinitionError,
#          PhaseOrderError, AuditError, ConfigurationError
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Runtime failures (unreachable database, bad slug, broken catalog)

Provisioning runs never let these escape: the provisioner converts them into
entries of the report's error log. They do escape from lower layers
(repository, inspector, catalog) so the orchestrator can classify them.
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Plain string passed where a psycopg sql.Composed statement is required
        - Catalog element handed to a phase it does not belong to
    """
    pass


class ProvisioningSystemError(Exception):
    """
    Base class for expected runtime failures.

    Subclasses represent specific categories of failure.
    """
    pass


class DatabaseError(ProvisioningSystemError):
    """
    Database operation failures.

    Examples:
        - Statement timeout
        - Lock timeout
        - Type mismatch while adding a column
        - Missing dependency (table referenced by a constraint is absent)
    """

    def __init__(self, message: str, sqlstate: str = None):
        super().__init__(message)
        self.sqlstate = sqlstate


class DatabaseConnectionError(DatabaseError):
    """
    Cannot open a connection to the database.

    Always fatal for a provisioning run.
    """
    pass


class NamespaceError(ProvisioningSystemError):
    """
    Tenant slug or namespace name is unusable.

    Examples:
        - Empty slug
        - Slug that produces an identifier longer than 63 bytes
        - Namespace that does not carry the tenant prefix
    """
    pass


class CatalogDefinitionError(ProvisioningSystemError):
    """
    The declarative catalog is internally inconsistent.

    Examples:
        - Index on a table the catalog does not declare
        - Constraint referencing an unknown column
        - Two elements of the same kind with the same name
    """
    pass


class PhaseOrderError(ProvisioningSystemError):
    """
    A catalog phase was applied before the phase it depends on completed.
    """
    pass


class AuditError(ProvisioningSystemError):
    """
    A drift audit cannot proceed.

    Examples:
        - Ephemeral namespace could not be materialized
        - Reference namespace does not exist
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - DATABASE_URL not set
        - Non-numeric timeout value
        - Namespace prefix that is not a valid identifier fragment
    """
    pass


__all__ = [
    'ContractViolationError',
    'ProvisioningSystemError',
    'DatabaseError',
    'DatabaseConnectionError',
    'NamespaceError',
    'CatalogDefinitionError',
    'PhaseOrderError',
    'AuditError',
    'ConfigurationError',
]
