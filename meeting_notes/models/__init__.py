from .email_log import EMAIL_STATUS, EmailLogSQL
from .requests import (
    CamelModel,
    CreateSummaryRequest,
    ShareRequest,
    SummarizeRequest,
    UpdateSummaryRequest,
)
from .summary import Summary, SummarySQL
from .timestamps import UTCDateTime, utc_now

__all__ = [
    "CamelModel",
    "CreateSummaryRequest",
    "EMAIL_STATUS",
    "EmailLogSQL",
    "ShareRequest",
    "Summary",
    "SummarizeRequest",
    "SummarySQL",
    "UTCDateTime",
    "UpdateSummaryRequest",
    "utc_now",
]
