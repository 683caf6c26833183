from apps.receipts.infrastructure.persistence.models import (  # noqa: F401
    BaseModel,
    Category,
    LedgerSettings,
    LineItem,
    Receipt,
    Report,
    ReportStatus,
)
