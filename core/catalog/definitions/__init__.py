"""
Catalog definitions - the desired tenant schema as data.

Modules:
    base_tables: Core application tables every tenant has carried since launch
    workflow_tables: Workflow, inventory, schedule and billing tables
    extension_tables: Tables added by later feature migrations
    columns: Columns added to existing tables after they first shipped
    constraints: Named CHECK / UNIQUE / FOREIGN KEY constraints
    indexes: Named secondary indexes
    functions: Namespace-local functions and updatedAt triggers
    seeds: Default per-tenant rows
"""
