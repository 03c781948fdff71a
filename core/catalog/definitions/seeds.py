"""Default rows every tenant starts with."""

from ..elements import SeedRowElement


DEFAULT_WORKFLOW_THRESHOLDS = {
    "approval10": 10,
    "approval35": 35,
    "approval65": 65,
    "approval90": 90,
    "autoRejectThreshold": 95,
    "preBillThreshold": 50,
    "talentApprovalRequired": True,
    "producerApprovalRequired": True,
}


SEED_ROWS = (
    SeedRowElement(
        "workflow_settings",
        id_prefix="ws",
        values={
            "thresholds": DEFAULT_WORKFLOW_THRESHOLDS,
            "automationEnabled": True,
            "emailNotifications": True,
        },
        json_columns=("thresholds",),
    ),
    SeedRowElement(
        "BillingSettings",
        id_prefix="bs",
        values={
            "invoicePrefix": "INV",
            "invoiceStartNumber": 1000,
            "defaultPaymentTerms": 30,
            "taxRate": 0,
            "currency": "USD",
        },
    ),
)
