"""
Base tables created for every organization since the schema-per-tenant split.

Columns that arrived later (Invoice.type, Advertiser.sellerId, ...) live in
definitions.columns so existing tenants pick them up as well.
"""

from ..elements import TableElement, columns


_CREATED = "createdAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP"
_UPDATED = "updatedAt TIMESTAMP(3) NOT NULL"


BASE_TABLES = (
    TableElement("Campaign", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "advertiserId TEXT NOT NULL",
        "agencyId TEXT",
        "organizationId TEXT NOT NULL",
        "startDate TIMESTAMP(3) NOT NULL",
        "endDate TIMESTAMP(3) NOT NULL",
        "budget DOUBLE PRECISION",
        "spent DOUBLE PRECISION DEFAULT 0",
        "impressions INTEGER DEFAULT 0",
        "targetImpressions INTEGER DEFAULT 0",
        "clicks INTEGER DEFAULT 0",
        "conversions INTEGER DEFAULT 0",
        "targetAudience TEXT",
        "status TEXT NOT NULL DEFAULT 'draft'",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),
    TableElement("Show", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "organizationId TEXT NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
        "host TEXT",
        "category TEXT",
        "releaseFrequency TEXT",
        "releaseDay TEXT",
        "revenueSharingType TEXT",
        "revenueSharingPercentage DOUBLE PRECISION",
        "revenueSharingFixedAmount DOUBLE PRECISION",
        "revenueSharingNotes TEXT",
    )),
    TableElement("Episode", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "title TEXT NOT NULL",
        "episodeNumber INTEGER NOT NULL",
        "airDate TIMESTAMP(3)",
        "duration INTEGER",
        "status TEXT NOT NULL DEFAULT 'draft'",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
        "organizationId TEXT NOT NULL",
        "producerNotes TEXT",
        "talentNotes TEXT",
        "recordingDate TIMESTAMP(3)",
        "publishUrl TEXT",
    )),
    TableElement("Agency", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "contactEmail TEXT",
        "contactPhone TEXT",
        "website TEXT",
        "address TEXT",
        "city TEXT",
        "state TEXT",
        "zipCode TEXT",
        "country TEXT",
        "organizationId TEXT NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),
    TableElement("Advertiser", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "contactEmail TEXT",
        "contactPhone TEXT",
        "website TEXT",
        "industry TEXT",
        "address TEXT",
        "city TEXT",
        "state TEXT",
        "zipCode TEXT",
        "country TEXT",
        "agencyId TEXT",
        "organizationId TEXT NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
        _UPDATED,
        "createdBy TEXT",
        "updatedBy TEXT",
    )),
    TableElement("AdApproval", columns(
        "id TEXT NOT NULL",
        "title TEXT NOT NULL",
        "advertiserId TEXT NOT NULL",
        "advertiserName TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "showName TEXT NOT NULL",
        "type TEXT NOT NULL",
        "duration INTEGER NOT NULL",
        "script TEXT",
        "talkingPoints TEXT[]",
        "priority TEXT NOT NULL DEFAULT 'medium'",
        "deadline TIMESTAMP(3)",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "salesRepId TEXT",
        "salesRepName TEXT",
        "submittedBy TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "workflowStage TEXT NOT NULL DEFAULT 'pending_creation'",
        "revisionCount INTEGER NOT NULL DEFAULT 0",
        _CREATED,
        _UPDATED,
        "approvedAt TIMESTAMP(3)",
        "rejectedAt TIMESTAMP(3)",
    )),
    TableElement("DeletionRequest", columns(
        "id TEXT NOT NULL DEFAULT gen_random_uuid()::text",
        "entityType VARCHAR(50) NOT NULL",
        "entityId TEXT NOT NULL",
        "entityName VARCHAR(255) NOT NULL",
        "reason TEXT",
        "requestedBy TEXT NOT NULL",
        "reviewedBy TEXT",
        "status VARCHAR(20) NOT NULL DEFAULT 'pending'",
        "reviewNotes TEXT",
        "requestedAt TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        "createdAt TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        "updatedAt TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
        "reviewedAt TIMESTAMP",
    )),
    TableElement("AdCreative", columns(
        "id TEXT NOT NULL",
        "name TEXT NOT NULL",
        "description TEXT",
        "organizationId TEXT NOT NULL",
        "type TEXT NOT NULL",
        "format TEXT NOT NULL",
        "duration INTEGER NOT NULL",
        "status TEXT NOT NULL DEFAULT 'active'",
        "script TEXT",
        "talkingPoints TEXT[]",
        "audioUrl TEXT",
        "videoUrl TEXT",
        "thumbnailUrl TEXT",
        "s3Key TEXT",
        "fileSize INTEGER",
        "fileType TEXT",
        "advertiserId TEXT",
        "campaignId TEXT",
        "tags TEXT[]",
        "category TEXT",
        "impressions INTEGER DEFAULT 0",
        "clicks INTEGER DEFAULT 0",
        "conversions INTEGER DEFAULT 0",
        "revenue DOUBLE PRECISION DEFAULT 0",
        "restrictedTerms TEXT[]",
        "legalDisclaimer TEXT",
        "expiryDate TIMESTAMP(3)",
        "createdBy TEXT NOT NULL",
        "updatedBy TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("SpotSubmission", columns(
        "id TEXT NOT NULL",
        "adApprovalId TEXT NOT NULL",
        "submittedBy TEXT NOT NULL",
        "submitterRole TEXT NOT NULL",
        "audioUrl TEXT",
        "s3Key TEXT",
        "fileName TEXT",
        "fileSize INTEGER",
        "fileType TEXT",
        "audioDuration INTEGER",
        "notes TEXT",
        _CREATED,
    )),
    TableElement("Order", columns(
        "id TEXT NOT NULL",
        "orderNumber TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "version INTEGER NOT NULL DEFAULT 1",
        "parentOrderId TEXT",
        "organizationId TEXT NOT NULL",
        "advertiserId TEXT NOT NULL",
        "agencyId TEXT",
        "status TEXT NOT NULL DEFAULT 'draft'",
        "totalAmount DOUBLE PRECISION NOT NULL",
        "discountAmount DOUBLE PRECISION NOT NULL DEFAULT 0",
        "discountReason TEXT",
        "netAmount DOUBLE PRECISION NOT NULL",
        "submittedAt TIMESTAMP(3)",
        "submittedBy TEXT",
        "approvedAt TIMESTAMP(3)",
        "approvedBy TEXT",
        "bookedAt TIMESTAMP(3)",
        "bookedBy TEXT",
        "confirmedAt TIMESTAMP(3)",
        "confirmedBy TEXT",
        "ioNumber TEXT",
        "ioGeneratedAt TIMESTAMP(3)",
        "contractUrl TEXT",
        "signedContractUrl TEXT",
        "contractSignedAt TIMESTAMP(3)",
        "notes TEXT",
        "internalNotes TEXT",
        _CREATED,
        _UPDATED,
        "createdBy TEXT NOT NULL",
    )),
    TableElement("OrderItem", columns(
        "id TEXT NOT NULL",
        "orderId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "episodeId TEXT",
        "placementType TEXT NOT NULL",
        "spotNumber INTEGER",
        "airDate TIMESTAMP(3) NOT NULL",
        "length INTEGER NOT NULL",
        "isLiveRead BOOLEAN NOT NULL DEFAULT false",
        "rate DOUBLE PRECISION NOT NULL",
        "actualRate DOUBLE PRECISION NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "adTitle TEXT",
        "adScript TEXT",
        "adTalkingPoints TEXT[]",
        "adAudioUrl TEXT",
        "adApprovalStatus TEXT NOT NULL DEFAULT 'pending'",
        _CREATED,
        _UPDATED,
    )),
    TableElement("Invoice", columns(
        "id TEXT NOT NULL",
        "invoiceNumber TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "amount DOUBLE PRECISION NOT NULL",
        "currency TEXT NOT NULL DEFAULT 'USD'",
        "description TEXT NOT NULL",
        "billingPeriod TEXT",
        "plan TEXT NOT NULL DEFAULT 'starter'",
        "issueDate TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "dueDate TIMESTAMP(3) NOT NULL",
        "paidDate TIMESTAMP(3)",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "notes TEXT",
        "taxAmount DOUBLE PRECISION",
        "discountAmount DOUBLE PRECISION",
        "totalAmount DOUBLE PRECISION NOT NULL",
        _CREATED,
        _UPDATED,
        "createdById TEXT",
    )),
    TableElement("InvoiceItem", columns(
        "id TEXT NOT NULL",
        "invoiceId TEXT NOT NULL",
        "description TEXT NOT NULL",
        "quantity DOUBLE PRECISION NOT NULL DEFAULT 1",
        "unitPrice DOUBLE PRECISION NOT NULL",
        "amount DOUBLE PRECISION NOT NULL",
        "campaignId TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("Payment", columns(
        "id TEXT NOT NULL",
        "paymentNumber TEXT NOT NULL DEFAULT gen_random_uuid()::text",
        "invoiceId TEXT NOT NULL",
        "amount DOUBLE PRECISION NOT NULL",
        "currency TEXT NOT NULL DEFAULT 'USD'",
        "paymentMethod TEXT NOT NULL",
        "transactionId TEXT",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "paymentDate TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "processedDate TIMESTAMP(3)",
        "notes TEXT",
        "processorFee DOUBLE PRECISION",
        "netAmount DOUBLE PRECISION",
        _CREATED,
        _UPDATED,
        "createdById TEXT",
    )),
    TableElement("Contract", columns(
        "id TEXT NOT NULL",
        "contractNumber TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "campaignId TEXT",
        "orderId TEXT",
        "advertiserId TEXT NOT NULL",
        "agencyId TEXT",
        "contractType TEXT NOT NULL DEFAULT 'insertion_order'",
        "title TEXT NOT NULL",
        "description TEXT",
        "totalAmount DOUBLE PRECISION NOT NULL",
        "discountAmount DOUBLE PRECISION NOT NULL DEFAULT 0",
        "netAmount DOUBLE PRECISION NOT NULL",
        "commissionRate DOUBLE PRECISION NOT NULL DEFAULT 0",
        "startDate TIMESTAMP(3) NOT NULL",
        "endDate TIMESTAMP(3) NOT NULL",
        "paymentTerms TEXT NOT NULL DEFAULT 'Net 30'",
        "cancellationTerms TEXT",
        "deliveryTerms TEXT",
        "specialTerms TEXT",
        "status TEXT NOT NULL DEFAULT 'draft'",
        "isExecuted BOOLEAN NOT NULL DEFAULT false",
        "executedAt TIMESTAMP(3)",
        "executedById TEXT",
        "templateId TEXT",
        "generatedDocument JSONB",
        "documentUrl TEXT",
        "signatureUrl TEXT",
        "sentAt TIMESTAMP(3)",
        "signedAt TIMESTAMP(3)",
        "completedAt TIMESTAMP(3)",
        _CREATED,
        _UPDATED,
        "createdById TEXT NOT NULL",
    )),
    TableElement("ContractLineItem", columns(
        "id TEXT NOT NULL",
        "contractId TEXT NOT NULL",
        "orderItemId TEXT",
        "description TEXT NOT NULL",
        "quantity INTEGER NOT NULL DEFAULT 1",
        "unitPrice DOUBLE PRECISION NOT NULL",
        "totalPrice DOUBLE PRECISION NOT NULL",
        "discountRate DOUBLE PRECISION NOT NULL DEFAULT 0",
        "netPrice DOUBLE PRECISION NOT NULL",
        "startDate TIMESTAMP(3)",
        "endDate TIMESTAMP(3)",
        "showId TEXT",
        "episodeCount INTEGER",
        "spotLength INTEGER",
        "spotPosition TEXT",
        "metadata JSONB",
        _CREATED,
        _UPDATED,
    )),
    TableElement("Expense", columns(
        "id TEXT NOT NULL",
        "description TEXT NOT NULL",
        "vendor TEXT NOT NULL",
        "amount DOUBLE PRECISION NOT NULL",
        "category TEXT NOT NULL",
        "type TEXT NOT NULL DEFAULT 'oneTime'",
        "frequency TEXT",
        "startDate TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "endDate TIMESTAMP(3)",
        "nextDueDate TIMESTAMP(3)",
        "organizationId TEXT NOT NULL",
        "createdBy TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'pending'",
        "notes TEXT",
        "invoiceNumber TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("BudgetCategory", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "name TEXT NOT NULL",
        "type TEXT NOT NULL",
        "parentCategoryId TEXT",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
    )),
    TableElement("BudgetEntry", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "categoryId TEXT NOT NULL",
        "year INTEGER NOT NULL",
        "month INTEGER NOT NULL",
        "budgetAmount DOUBLE PRECISION NOT NULL",
        "actualAmount DOUBLE PRECISION NOT NULL DEFAULT 0",
        "notes TEXT",
        _CREATED,
        _UPDATED,
        "createdBy TEXT NOT NULL",
    )),
    TableElement("CampaignAnalytics", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "date TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "impressions INTEGER DEFAULT 0",
        "clicks INTEGER DEFAULT 0",
        "conversions INTEGER DEFAULT 0",
        "ctr DOUBLE PRECISION DEFAULT 0",
        "conversionRate DOUBLE PRECISION DEFAULT 0",
        "spent DOUBLE PRECISION DEFAULT 0",
        "cpc DOUBLE PRECISION DEFAULT 0",
        "cpa DOUBLE PRECISION DEFAULT 0",
        "engagementRate DOUBLE PRECISION DEFAULT 0",
        "averageViewTime INTEGER DEFAULT 0",
        "bounceRate DOUBLE PRECISION DEFAULT 0",
        "adPlaybacks INTEGER DEFAULT 0",
        "completionRate DOUBLE PRECISION DEFAULT 0",
        "skipRate DOUBLE PRECISION DEFAULT 0",
        _CREATED,
        _UPDATED,
    )),
    TableElement("EpisodeAnalytics", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "date TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "downloads INTEGER DEFAULT 0",
        "uniqueListeners INTEGER DEFAULT 0",
        "completions INTEGER DEFAULT 0",
        "avgListenTime DOUBLE PRECISION DEFAULT 0",
        "spotifyListens INTEGER DEFAULT 0",
        "appleListens INTEGER DEFAULT 0",
        "googleListens INTEGER DEFAULT 0",
        "otherListens INTEGER DEFAULT 0",
        "shares INTEGER DEFAULT 0",
        "likes INTEGER DEFAULT 0",
        "comments INTEGER DEFAULT 0",
        "adRevenue DOUBLE PRECISION DEFAULT 0",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ShowAnalytics", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "date TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "periodType TEXT NOT NULL DEFAULT 'daily'",
        "totalDownloads INTEGER DEFAULT 0",
        "totalListeners INTEGER DEFAULT 0",
        "avgDownloadsPerEpisode DOUBLE PRECISION DEFAULT 0",
        "avgRating DOUBLE PRECISION DEFAULT 0",
        "totalRatings INTEGER DEFAULT 0",
        "newSubscribers INTEGER DEFAULT 0",
        "lostSubscribers INTEGER DEFAULT 0",
        "netSubscribers INTEGER DEFAULT 0",
        "totalRevenue DOUBLE PRECISION DEFAULT 0",
        "adRevenue DOUBLE PRECISION DEFAULT 0",
        "sponsorRevenue DOUBLE PRECISION DEFAULT 0",
        _CREATED,
        _UPDATED,
    )),
    TableElement("AnalyticsEvent", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "eventType TEXT NOT NULL",
        "entityType TEXT NOT NULL",
        "entityId TEXT NOT NULL",
        "userId TEXT",
        "sessionId TEXT",
        "platform TEXT",
        "deviceType TEXT",
        "location TEXT",
        "referrer TEXT",
        "metadata JSONB DEFAULT '{}'",
        "timestamp TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
    )),
    TableElement("ShowMetrics", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "totalSubscribers INTEGER DEFAULT 0",
        "newSubscribers INTEGER DEFAULT 0",
        "lostSubscribers INTEGER DEFAULT 0",
        "subscriberGrowth DOUBLE PRECISION DEFAULT 0",
        "averageListeners INTEGER DEFAULT 0",
        "totalDownloads INTEGER DEFAULT 0",
        "monthlyDownloads INTEGER DEFAULT 0",
        "averageCompletion DOUBLE PRECISION DEFAULT 0",
        "totalRevenue DOUBLE PRECISION DEFAULT 0",
        "monthlyRevenue DOUBLE PRECISION DEFAULT 0",
        "averageCPM DOUBLE PRECISION DEFAULT 0",
        "totalEpisodes INTEGER DEFAULT 0",
        "publishedEpisodes INTEGER DEFAULT 0",
        "averageEpisodeLength INTEGER DEFAULT 0",
        "socialShares INTEGER DEFAULT 0",
        "socialMentions INTEGER DEFAULT 0",
        "sentimentScore DOUBLE PRECISION DEFAULT 0",
        "spotifyListeners INTEGER DEFAULT 0",
        "appleListeners INTEGER DEFAULT 0",
        "googleListeners INTEGER DEFAULT 0",
        "otherListeners INTEGER DEFAULT 0",
        "demographics JSONB DEFAULT '{}'",
        "lastUpdated TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "periodStart TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "periodEnd TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
    )),
    TableElement("UsageRecord", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "date TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
        "apiCalls INTEGER DEFAULT 0",
        "storage DOUBLE PRECISION DEFAULT 0",
        "bandwidth DOUBLE PRECISION DEFAULT 0",
        "campaigns INTEGER DEFAULT 0",
        "emailSends INTEGER DEFAULT 0",
        _CREATED,
    )),
    TableElement("Comment", columns(
        "id TEXT NOT NULL",
        "adApprovalId TEXT NOT NULL",
        "userId TEXT NOT NULL",
        "message TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("EpisodeSpot", columns(
        "id TEXT NOT NULL",
        "episodeId TEXT NOT NULL",
        "orderItemId TEXT",
        "placementType TEXT NOT NULL",
        "spotNumber INTEGER NOT NULL",
        "startTime INTEGER",
        "endTime INTEGER",
        "actualLength INTEGER",
        "status TEXT NOT NULL DEFAULT 'scheduled'",
        "audioUrl TEXT",
        "transcript TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("UploadedFile", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "originalName TEXT NOT NULL",
        "fileName TEXT NOT NULL",
        "fileSize INTEGER NOT NULL",
        "mimeType TEXT NOT NULL",
        "category TEXT NOT NULL",
        "s3Key TEXT NOT NULL",
        "s3Url TEXT NOT NULL",
        "entityType TEXT",
        "entityId TEXT",
        "description TEXT",
        "uploadedById TEXT NOT NULL",
        "status TEXT NOT NULL DEFAULT 'active'",
        _CREATED,
        _UPDATED,
    )),
    TableElement("CreativeUsage", columns(
        "id TEXT NOT NULL",
        "creativeId TEXT NOT NULL",
        "entityType TEXT NOT NULL",
        "entityId TEXT NOT NULL",
        "entityName TEXT",
        "startDate TIMESTAMP(3) NOT NULL",
        "endDate TIMESTAMP(3)",
        "impressions INTEGER DEFAULT 0",
        "clicks INTEGER DEFAULT 0",
        "conversions INTEGER DEFAULT 0",
        "revenue DOUBLE PRECISION DEFAULT 0",
        "notes TEXT",
        "createdBy TEXT NOT NULL",
        _CREATED,
    )),
    TableElement("Reservation", columns(
        "id TEXT NOT NULL",
        "reservationNumber TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "campaignId TEXT",
        "advertiserId TEXT NOT NULL",
        "agencyId TEXT",
        "status TEXT NOT NULL DEFAULT 'held'",
        "holdDuration INTEGER NOT NULL DEFAULT 48",
        "expiresAt TIMESTAMP(3) NOT NULL",
        "confirmedAt TIMESTAMP(3)",
        "cancelledAt TIMESTAMP(3)",
        "totalAmount DOUBLE PRECISION NOT NULL",
        "estimatedRevenue DOUBLE PRECISION NOT NULL",
        "createdBy TEXT NOT NULL",
        "confirmedBy TEXT",
        "cancelledBy TEXT",
        "notes TEXT",
        "priority TEXT NOT NULL DEFAULT 'normal'",
        "source TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ReservationItem", columns(
        "id TEXT NOT NULL",
        "reservationId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "episodeId TEXT",
        "date TIMESTAMP(3) NOT NULL",
        "placementType TEXT NOT NULL",
        "spotNumber INTEGER",
        "length INTEGER NOT NULL",
        "rate DOUBLE PRECISION NOT NULL",
        "status TEXT NOT NULL DEFAULT 'held'",
        "inventoryId TEXT",
        "notes TEXT",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ReservationStatusHistory", columns(
        "id TEXT NOT NULL",
        "reservationId TEXT NOT NULL",
        "fromStatus TEXT",
        "toStatus TEXT NOT NULL",
        "reason TEXT",
        "notes TEXT",
        "changedBy TEXT NOT NULL",
        "changedAt TIMESTAMP(3) NOT NULL DEFAULT CURRENT_TIMESTAMP",
    )),
    TableElement("BlockedSpot", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "spotNumber INTEGER NOT NULL",
        "advertiserId TEXT",
        "campaignId TEXT",
        "startDate TIMESTAMP(3)",
        "endDate TIMESTAMP(3)",
        "reason TEXT",
        _CREATED,
    )),
    TableElement("Inventory", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "date TIMESTAMP(3) NOT NULL",
        "placementType TEXT NOT NULL",
        "totalSpots INTEGER NOT NULL",
        "availableSpots INTEGER NOT NULL",
        "reservedSpots INTEGER NOT NULL DEFAULT 0",
        "bookedSpots INTEGER NOT NULL DEFAULT 0",
        _CREATED,
        _UPDATED,
    )),
    TableElement("ShowPlacement", columns(
        "id TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "placementType TEXT NOT NULL",
        "totalSpots INTEGER NOT NULL DEFAULT 1",
        "liveReadSpots INTEGER NOT NULL DEFAULT 0",
        "liveReadPercentage DOUBLE PRECISION",
        "defaultLength INTEGER NOT NULL DEFAULT 30",
        "availableLengths INTEGER[]",
        "baseRate DOUBLE PRECISION NOT NULL",
        "rates JSONB NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        _CREATED,
        _UPDATED,
    )),
    TableElement("CampaignSchedule", columns(
        "id TEXT NOT NULL",
        "campaignId TEXT NOT NULL",
        "name TEXT NOT NULL",
        "version INTEGER NOT NULL DEFAULT 1",
        "status TEXT NOT NULL DEFAULT 'draft'",
        "exportedAt TIMESTAMP(3)",
        "exportedBy TEXT",
        "exportUrl TEXT",
        "clientApprovedAt TIMESTAMP(3)",
        "notes TEXT",
        _CREATED,
        _UPDATED,
        "createdBy TEXT NOT NULL",
    )),
    TableElement("ScheduleItem", columns(
        "id TEXT NOT NULL",
        "scheduleId TEXT NOT NULL",
        "showId TEXT NOT NULL",
        "airDate TIMESTAMP(3) NOT NULL",
        "placementType TEXT NOT NULL",
        "length INTEGER NOT NULL",
        "rate DOUBLE PRECISION NOT NULL",
        "isLiveRead BOOLEAN NOT NULL DEFAULT false",
        "notes TEXT",
        "sortOrder INTEGER",
    )),
    TableElement("MegaphoneIntegration", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "apiToken TEXT NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        "syncFrequency TEXT NOT NULL DEFAULT 'daily'",
        "lastSyncAt TIMESTAMP(3)",
        "syncStatus TEXT NOT NULL DEFAULT 'idle'",
        "lastError TEXT",
        "settings JSONB DEFAULT '{}'",
        _CREATED,
        _UPDATED,
    )),
    TableElement("QuickBooksIntegration", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "accessToken TEXT NOT NULL",
        "refreshToken TEXT NOT NULL",
        "companyId TEXT NOT NULL",
        "companyName TEXT NOT NULL",
        "expiresAt TIMESTAMP(3) NOT NULL",
        "isActive BOOLEAN NOT NULL DEFAULT true",
        "syncSettings JSONB NOT NULL",
        "lastSyncAt TIMESTAMP(3)",
        _CREATED,
        _UPDATED,
    )),
    TableElement("QuickBooksSync", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "syncType TEXT NOT NULL",
        "status TEXT NOT NULL",
        "startDate TIMESTAMP(3)",
        "endDate TIMESTAMP(3)",
        "recordsProcessed INTEGER NOT NULL DEFAULT 0",
        "errors JSONB",
        "startedAt TIMESTAMP(3)",
        "completedAt TIMESTAMP(3)",
        _CREATED,
    )),
    TableElement("FinancialData", columns(
        "id TEXT NOT NULL",
        "organizationId TEXT NOT NULL",
        "accountCode TEXT NOT NULL",
        "accountName TEXT NOT NULL",
        "accountType TEXT NOT NULL",
        "year INTEGER NOT NULL",
        "month INTEGER NOT NULL",
        "amount DOUBLE PRECISION NOT NULL",
        "quickbooksId TEXT",
        "syncId TEXT",
        _CREATED,
        _UPDATED,
    )),
)
