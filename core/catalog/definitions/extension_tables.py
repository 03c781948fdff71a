"""
Tables introduced by later feature migrations: episode metadata, schedule
builder, talent approval, creative workflow and contract billing automation.
"""

from ..elements import TableElement, columns


_CREATED = "createdAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP"
_UPDATED = "updatedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP"
_UUID_ID = "id TEXT NOT NULL DEFAULT gen_random_uuid()::text"


EXTENSION_TABLES = (
    # Episode metadata
    TableElement("EpisodeGuest", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "guestName TEXT NOT NULL",
        "guestTitle TEXT",
        "guestCompany TEXT",
        "guestBio TEXT",
        "contactEmail TEXT",
        "contactPhone TEXT",
        "confirmationStatus TEXT DEFAULT 'pending'",
        _CREATED,
        _UPDATED,
    )),
    TableElement("EpisodeSponsor", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "slotType TEXT NOT NULL",
        "slotDuration INTEGER NOT NULL",
        "slotPosition INTEGER DEFAULT 1",
        "talkingPoints TEXT",
        "scriptStatus TEXT DEFAULT 'pending'",
        _CREATED,
        _UPDATED,
    )),

    # Schedule builder
    TableElement("ShowConfiguration", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "name TEXT NOT NULL",
        "episodeLength INTEGER NOT NULL",
        "adLoadType TEXT NOT NULL DEFAULT 'standard'",
        "preRollSlots INTEGER DEFAULT 1",
        "midRollSlots INTEGER DEFAULT 2",
        "postRollSlots INTEGER DEFAULT 1",
        "preRollDuration INTEGER DEFAULT 30",
        "midRollDuration INTEGER DEFAULT 60",
        "postRollDuration INTEGER DEFAULT 30",
        "releaseDays TEXT[]",
        "releaseTime TIME",
        "isActive BOOLEAN DEFAULT true",
        _CREATED,
        "updatedAt TIMESTAMP(3) NOT NULL",
    )),
    TableElement("ShowRestriction", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "restrictionType TEXT NOT NULL",
        "category TEXT",
        "advertiserId TEXT",
        "startDate DATE",
        "endDate DATE",
        "notes TEXT",
        "createdBy TEXT NOT NULL",
        _CREATED,
        "updatedAt TIMESTAMP(3) NOT NULL",
    )),
    TableElement("CampaignCategory", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "category TEXT NOT NULL",
        "isPrimary BOOLEAN DEFAULT false",
        "exclusivityLevel TEXT DEFAULT 'none'",
        "exclusivityStartDate DATE",
        "exclusivityEndDate DATE",
        _CREATED,
    )),

    # Talent approval
    TableElement("AdvertiserCategory", columns(
        _UUID_ID,
        "advertiserId TEXT NOT NULL",
        "categoryId TEXT NOT NULL",
        "competitiveGroupId TEXT",
        "isPrimary BOOLEAN DEFAULT false",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ShowTalentAllowedCategory", columns(
        _UUID_ID,
        "showId TEXT",
        "talentId TEXT",
        "categoryId TEXT NOT NULL",
        "isAllowed BOOLEAN DEFAULT true",
        "reason TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),
    TableElement("TalentVoicingHistory", columns(
        _UUID_ID,
        "talentId TEXT NOT NULL",
        "advertiserId TEXT NOT NULL",
        "campaignId TEXT",
        "showId TEXT",
        "startDate DATE NOT NULL",
        "endDate DATE",
        "spotType TEXT",
        "notes TEXT",
        "organizationId TEXT NOT NULL",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),

    # Creative workflow
    TableElement("CreativeRequest", columns(
        _UUID_ID,
        "orderId TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "assignedToId TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "priority TEXT DEFAULT 'medium'",
        "dueDate TIMESTAMP(3)",
        "title TEXT NOT NULL",
        "description TEXT",
        "requiredAssets JSONB DEFAULT '[]'::jsonb",
        "submittedAssets JSONB DEFAULT '[]'::jsonb",
        "feedbackHistory JSONB DEFAULT '[]'::jsonb",
        "submittedAt TIMESTAMP(3)",
        "approvedAt TIMESTAMP(3)",
        "approvedBy TEXT",
        _CREATED,
        _UPDATED,
        "createdBy TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
    )),
    TableElement("CategoryExclusivity", columns(
        _UUID_ID,
        "showId TEXT NOT NULL",
        "category TEXT NOT NULL",
        "level TEXT NOT NULL DEFAULT 'episode'",
        "advertiserId TEXT",
        "campaignId TEXT",
        "startDate DATE NOT NULL",
        "endDate DATE NOT NULL",
        "isActive BOOLEAN DEFAULT true",
        "notes TEXT",
        _CREATED,
        _UPDATED,
        "createdBy TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
    )),

    # Contract billing automation
    TableElement("ContractTemplate", columns(
        _UUID_ID,
        "organizationId TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "templateType TEXT NOT NULL DEFAULT 'insertion_order'",
        "htmlTemplate TEXT NOT NULL",
        "variables JSONB DEFAULT '[]'::jsonb",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        "isDefault BOOLEAN NOT NULL DEFAULT false",
        "version INTEGER NOT NULL DEFAULT 1",
        _CREATED,
        _UPDATED,
        "createdById TEXT",
        "updatedById TEXT",
    )),
    TableElement("PreBillAdvertiser", columns(
        _UUID_ID,
        "organizationId TEXT NOT NULL",
        "advertiserId TEXT NOT NULL",
        "reason TEXT NOT NULL",
        "flaggedDate TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "flaggedById TEXT NOT NULL",
        "notes TEXT",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
        _UPDATED,
    )),
    TableElement("InvoiceSchedule", columns(
        _UUID_ID,
        "organizationId TEXT NOT NULL",
        "orderId TEXT NOT NULL",
        "scheduleType TEXT NOT NULL DEFAULT 'monthly'",
        "dayOfMonth INTEGER",
        "frequency TEXT DEFAULT 'monthly'",
        "nextInvoiceDate DATE NOT NULL",
        "lastInvoiceDate DATE",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        "autoSend BOOLEAN NOT NULL DEFAULT false",
        _CREATED,
        _UPDATED,
    )),
)
