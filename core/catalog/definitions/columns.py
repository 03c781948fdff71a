"""
Columns added to tables after they first shipped.

Tenants created before a column existed only receive it through these
elements, which is why they are not folded into the table definitions.
"""

from ..elements import ColumnDef, ColumnElement


def _add(table: str, spec: str) -> ColumnElement:
    return ColumnElement(table, ColumnDef.parse(spec))


EVOLUTION_COLUMNS = (
    # Billing direction
    _add("Invoice", "type TEXT NOT NULL DEFAULT 'incoming'"),

    # Seller assignment and credit
    _add("Advertiser", "sellerId TEXT"),
    _add("Advertiser", "creditTerms INTEGER DEFAULT 30"),
    _add("Advertiser", "creditLimit DOUBLE PRECISION"),
    _add("Advertiser", "requiresPreBill BOOLEAN DEFAULT false"),
    _add("Advertiser", "categories TEXT[]"),
    _add("Agency", "sellerId TEXT"),

    # Campaign pipeline
    _add("Campaign", "probability INTEGER DEFAULT 50"),
    _add("Campaign", "description TEXT"),
    _add("Campaign", "industry TEXT"),
    _add("Campaign", "reservationId TEXT"),
    _add("Campaign", "approvalRequestId TEXT"),
    _add("Campaign", "preBillRequired BOOLEAN DEFAULT false"),
    _add("Campaign", "preBillInvoiceId TEXT"),

    # Show inventory configuration
    _add("Show", "spotConfiguration JSONB"),
    _add("Show", "defaultSpotLoadType TEXT DEFAULT 'standard'"),
    _add("Show", "enableDynamicSpots BOOLEAN DEFAULT false"),
    _add("Show", "selloutProjection DOUBLE PRECISION"),
    _add("Show", "estimatedEpisodeValue DOUBLE PRECISION"),
    _add("Show", "megaphonePodcastId TEXT"),

    # Contract billing automation
    _add("Order", "contractId TEXT"),
    _add("Order", "requiresPreBill BOOLEAN DEFAULT false"),
    _add("Order", "preBillStatus TEXT"),
)
