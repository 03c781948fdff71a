"""
Workflow, inventory, scheduling, rate-card and billing tables.

These arrived after the base schema and were historically back-filled into
older tenants one table at a time.
"""

from ..elements import TableElement, columns


_CREATED = "createdAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP"
_UPDATED = "updatedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP"


WORKFLOW_TABLES = (
    # Workflow and automation
    TableElement("workflow_settings", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "thresholds JSONB",
        "automationEnabled BOOLEAN DEFAULT true",
        "emailNotifications BOOLEAN DEFAULT true",
        _CREATED,
        _UPDATED,
    )),
    TableElement("WorkflowTrigger", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "triggerType TEXT NOT NULL",
        "conditions JSONB NOT NULL",
        "actions JSONB NOT NULL",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
    )),
    TableElement("WorkflowAutomationSetting", columns(
        "id TEXT NOT NULL",
        "key TEXT NOT NULL",
        "value JSONB NOT NULL",
        "description TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("CampaignApproval", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "requestedBy TEXT NOT NULL",
        "requestedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "approvedBy TEXT",
        "approvedAt TIMESTAMP(3)",
        "rejectedBy TEXT",
        "rejectedAt TIMESTAMP(3)",
        "comments TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("TalentApprovalRequest", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "requestedBy TEXT NOT NULL",
        "requestedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "approvedBy TEXT",
        "approvedAt TIMESTAMP(3)",
        "rejectedBy TEXT",
        "rejectedAt TIMESTAMP(3)",
        "reason TEXT",
        "notes TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("CampaignTimeline", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "eventType TEXT NOT NULL",
        "eventDate TIMESTAMP(3) NOT NULL",
        "description TEXT",
        "metadata JSONB",
        "createdBy TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),

    # Notifications
    TableElement("Notification", columns(
        "id TEXT NOT NULL",
        "userId TEXT NOT NULL",
        "type TEXT NOT NULL",
        "title TEXT NOT NULL",
        "message TEXT NOT NULL",
        "data JSONB",
        "isRead BOOLEAN DEFAULT false",
        "readAt TIMESTAMP(3)",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),

    # Budget hierarchy
    TableElement("HierarchicalBudget", columns(
        "id TEXT NOT NULL",
        "year INTEGER NOT NULL",
        "month INTEGER NOT NULL",
        "entityType TEXT NOT NULL",
        "entityId TEXT NOT NULL",
        "entityName TEXT NOT NULL",
        "sellerId TEXT",
        "budgetAmount DOUBLE PRECISION NOT NULL DEFAULT 0",
        "actualAmount DOUBLE PRECISION NOT NULL DEFAULT 0",
        "isActive BOOLEAN DEFAULT true",
        "notes TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),

    # Inventory management
    TableElement("EpisodeInventory", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "totalSpots INTEGER NOT NULL DEFAULT 0",
        "availableSpots INTEGER NOT NULL DEFAULT 0",
        "reservedSpots INTEGER NOT NULL DEFAULT 0",
        "soldSpots INTEGER NOT NULL DEFAULT 0",
        "blockedSpots INTEGER NOT NULL DEFAULT 0",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("InventoryReservation", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "quantity INTEGER NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "expiresAt TIMESTAMP(3)",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
    )),
    TableElement("InventoryAlert", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "episodeId TEXT",
        "alertType TEXT NOT NULL",
        "threshold INTEGER NOT NULL",
        "currentValue INTEGER NOT NULL",
        "message TEXT NOT NULL",
        "isResolved BOOLEAN DEFAULT false",
        "resolvedAt TIMESTAMP(3)",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("InventoryChangeLog", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "changeType TEXT NOT NULL",
        "previousValue INTEGER NOT NULL",
        "newValue INTEGER NOT NULL",
        "reason TEXT",
        "campaignId TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        "createdBy TEXT",
    )),
    TableElement("InventoryVisibility", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "episodeId TEXT",
        "visibilityLevel TEXT NOT NULL DEFAULT 'internal'",
        "restrictions JSONB",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),

    # Scheduling
    TableElement("ScheduledSpot", columns(
        "id TEXT NOT NULL",
        "scheduleId TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "spotNumber INTEGER",
        "rate DOUBLE PRECISION NOT NULL",
        "status TEXT NOT NULL DEFAULT 'scheduled'",
        "airedAt TIMESTAMP(3)",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ScheduleBuilder", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "name TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'draft'",
        "configuration JSONB",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),
    TableElement("ScheduleBuilderItem", columns(
        "id TEXT NOT NULL",
        "builderId TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "spotCount INTEGER NOT NULL DEFAULT 1",
        "rate DOUBLE PRECISION NOT NULL",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("ScheduleTemplate", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "template JSONB NOT NULL",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
    )),
    TableElement("ScheduleApproval", columns(
        "id TEXT NOT NULL",
        "scheduleId TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "requestedBy TEXT NOT NULL",
        "requestedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "approvedBy TEXT",
        "approvedAt TIMESTAMP(3)",
        "comments TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("BulkScheduleIdempotency", columns(
        "id TEXT NOT NULL",
        "idempotencyKey TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "operation TEXT NOT NULL",
        "status TEXT NOT NULL",
        "result JSONB",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),

    # Activity, categories, competitive groups
    TableElement("Activity", columns(
        "id TEXT NOT NULL",
        "type TEXT NOT NULL",
        "entityType TEXT NOT NULL",
        "entityId TEXT NOT NULL",
        "description TEXT NOT NULL",
        "metadata JSONB",
        "userId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("Category", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "parentId TEXT",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("CompetitiveGroup", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "categories TEXT[]",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),

    # Rate cards
    TableElement("RateCard", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "showId TEXT",
        "rates JSONB NOT NULL",
        "effectiveDate TIMESTAMP(3) NOT NULL",
        "expiryDate TIMESTAMP(3)",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
    )),
    TableElement("ShowRateCard", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "preRollRate DOUBLE PRECISION",
        "midRollRate DOUBLE PRECISION",
        "postRollRate DOUBLE PRECISION",
        "effectiveDate TIMESTAMP(3) NOT NULL",
        "expiryDate TIMESTAMP(3)",
        "isActive BOOLEAN DEFAULT true",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ShowRateHistory", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "rate DOUBLE PRECISION NOT NULL",
        "effectiveDate TIMESTAMP(3) NOT NULL",
        "endDate TIMESTAMP(3)",
        "reason TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        "createdBy TEXT",
    )),

    # Requests and billing
    TableElement("AdRequest", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "type TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "requestDetails JSONB",
        "submittedBy TEXT NOT NULL",
        "submittedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "organizationId TEXT NOT NULL",
    )),
    TableElement("BillingSettings", columns(
        "id TEXT NOT NULL",
        "invoicePrefix TEXT",
        "invoiceStartNumber INTEGER DEFAULT 1000",
        "defaultPaymentTerms INTEGER DEFAULT 30",
        "taxRate DOUBLE PRECISION DEFAULT 0",
        "currency TEXT DEFAULT 'USD'",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),

    # Show <-> user join table (ORM implicit many-to-many, no primary key)
    TableElement("_ShowToUser", columns(
        "A TEXT NOT NULL",
        "B TEXT NOT NULL",
    ), primary_key=None),
)
