"""
Named constraints.

Names match what Postgres generates for the equivalent inline declarations
(<table>_<column>_check, <table>_<cols>_key, <table>_<column>_fkey), so a
tenant created from older inline DDL already satisfies them.
"""

from ..elements import ConstraintElement


_check = ConstraintElement.check
_unique = ConstraintElement.unique
_fk = ConstraintElement.foreign_key


CONSTRAINTS = (
    # CHECK
    _check("Invoice", "invoice_type_check",
           "\"type\" IN ('incoming', 'outgoing')", ("type",)),
    _check("DeletionRequest", "DeletionRequest_entityType_check",
           "\"entityType\" IN ('advertiser', 'agency', 'campaign')", ("entityType",)),
    _check("DeletionRequest", "DeletionRequest_status_check",
           "\"status\" IN ('pending', 'approved', 'denied', 'cancelled')", ("status",)),
    _check("ShowTalentAllowedCategory", "ShowTalentAllowedCategory_check",
           "(\"showId\" IS NOT NULL) OR (\"talentId\" IS NOT NULL)", ("showId", "talentId")),
    _check("TalentVoicingHistory", "TalentVoicingHistory_spotType_check",
           "\"spotType\" IN ('host_read', 'endorsement', 'pre_produced')", ("spotType",)),
    _check("InvoiceSchedule", "InvoiceSchedule_dayOfMonth_check",
           "\"dayOfMonth\" >= 1 AND \"dayOfMonth\" <= 28", ("dayOfMonth",)),

    # UNIQUE
    _unique("ShowMetrics", "ShowMetrics_showId_key", "showId"),
    _unique("Inventory", "Inventory_showId_date_placementType_key",
            "showId", "date", "placementType"),
    _unique("MegaphoneIntegration", "MegaphoneIntegration_organizationId_key", "organizationId"),
    _unique("QuickBooksIntegration", "QuickBooksIntegration_organizationId_key", "organizationId"),
    _unique("FinancialData", "FinancialData_organizationId_accountCode_year_month_key",
            "organizationId", "accountCode", "year", "month"),
    _unique("CampaignCategory", "CampaignCategory_campaignId_category_key", "campaignId", "category"),
    _unique("AdvertiserCategory", "AdvertiserCategory_unique", "advertiserId", "categoryId"),
    _unique("ShowRateCard", "ShowRateCard_showId_effectiveDate_key", "showId", "effectiveDate"),
    _unique("PreBillAdvertiser", "PreBillAdvertiser_organizationId_advertiserId_key",
            "organizationId", "advertiserId"),
    _unique("InvoiceSchedule", "InvoiceSchedule_organizationId_orderId_key", "organizationId", "orderId"),
    _unique("workflow_settings", "workflow_settings_organizationId_key", "organizationId"),
    _unique("BillingSettings", "BillingSettings_organizationId_key", "organizationId"),

    # FOREIGN KEY
    _fk("ShowConfiguration", "ShowConfiguration_showId_fkey", "showId", "Show", "CASCADE"),
    _fk("ShowRestriction", "ShowRestriction_showId_fkey", "showId", "Show", "CASCADE"),
    _fk("CampaignCategory", "CampaignCategory_campaignId_fkey", "campaignId", "Campaign", "CASCADE"),
    _fk("AdvertiserCategory", "AdvertiserCategory_advertiserId_fkey", "advertiserId", "Advertiser", "CASCADE"),
    _fk("AdvertiserCategory", "AdvertiserCategory_categoryId_fkey", "categoryId", "Category", "CASCADE"),
    _fk("ShowTalentAllowedCategory", "ShowTalentAllowedCategory_categoryId_fkey",
        "categoryId", "Category", "CASCADE"),
    _fk("CreativeRequest", "CreativeRequest_orderId_fkey", "orderId", "Order", "CASCADE"),
    _fk("CategoryExclusivity", "CategoryExclusivity_showId_fkey", "showId", "Show", "CASCADE"),
)
