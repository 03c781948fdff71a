"""Named secondary indexes."""

from ..elements import IndexElement


def _idx(table: str, *cols: str, name: str = None) -> IndexElement:
    return IndexElement(table, name or f"{table}_{'_'.join(cols)}_idx", cols)


INDEXES = (
    # Tenant scoping
    _idx("Campaign", "organizationId"),
    _idx("Show", "organizationId"),
    _idx("Episode", "organizationId"),
    _idx("Agency", "organizationId"),
    _idx("Advertiser", "organizationId"),
    _idx("AdApproval", "organizationId"),
    _idx("Order", "organizationId"),
    _idx("Invoice", "organizationId"),
    _idx("Contract", "organizationId"),

    # Lookups
    _idx("Episode", "showId"),
    _idx("DeletionRequest", "status"),
    _idx("DeletionRequest", "entityType", "entityId", name="DeletionRequest_entity_idx"),
    _idx("DeletionRequest", "requestedBy"),
    _idx("Order", "orderNumber"),
    _idx("Invoice", "invoiceNumber"),
    _idx("Contract", "contractNumber"),
    _idx("Notification", "userId"),
    _idx("HierarchicalBudget", "entityType", "entityId", "year", "month",
         name="HierarchicalBudget_entity_period_idx"),

    # Evolution columns
    _idx("Invoice", "type"),
    _idx("Advertiser", "sellerId"),
    _idx("Agency", "sellerId"),
    _idx("Campaign", "status", "startDate", name="idx_campaign_status_date"),
    _idx("Reservation", "campaignId"),
    _idx("Reservation", "status"),
    _idx("Show", "megaphonePodcastId", name="idx_show_megaphone_podcast_id"),

    # Episode metadata
    _idx("EpisodeGuest", "episodeId"),
    _idx("EpisodeSponsor", "episodeId"),
    _idx("EpisodeSponsor", "campaignId"),
)
