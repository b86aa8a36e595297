from datetime import datetime
from enum import StrEnum
from typing import Optional

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from .timestamps import UTCDateTime


class EMAIL_STATUS(StrEnum):
    sent = "sent"
    failed = "failed"


class EmailLogSQL(SQLModel, table=True):
    __tablename__ = "email_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    # soft reference, SQLite does not enforce it without PRAGMA foreign_keys
    summary_id: Optional[int] = Field(
        default=None, foreign_key="summaries.id", index=True
    )
    recipients: str
    subject: str
    sent_at: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))
    status: str = EMAIL_STATUS.sent

    @property
    def recipient_list(self) -> list[str]:
        return [r.strip() for r in self.recipients.split(",") if r.strip()]
