"""Namespace-local functions and the updatedAt triggers that use them."""

from functools import partial

from config.defaults import TenantDefaults
from ..ddl import FunctionBuilder
from ..elements import FunctionElement, TriggerElement


# Tables whose "updatedAt" is maintained in the database rather than by the ORM
UPDATED_AT_TABLES = (
    "Campaign",
    "Show",
    "Episode",
    "Agency",
    "Advertiser",
    "Order",
    "Invoice",
    "Contract",
    "HierarchicalBudget",
    "workflow_settings",
    "BillingSettings",
)


def build_functions(prefix: str = TenantDefaults.NAMESPACE_PREFIX):
    """Functions first, then triggers: a trigger needs its function."""
    functions = (
        FunctionElement("update_updated_at_column", FunctionBuilder.updated_at_function),
        FunctionElement("set_org_context", partial(FunctionBuilder.set_org_context, prefix=prefix)),
    )
    triggers = tuple(TriggerElement(table) for table in UPDATED_AT_TABLES)
    return functions + triggers
