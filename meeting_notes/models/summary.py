from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from .timestamps import UTCDateTime


class SummarySQL(SQLModel, table=True):
    __tablename__ = "summaries"
    # ids of deleted summaries are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    original_text: str
    custom_instruction: Optional[str] = None
    generated_summary: str
    edited_summary: str
    created_at: datetime = Field(
        sa_column=Column(UTCDateTime, index=True, nullable=False)
    )
    updated_at: datetime = Field(sa_column=Column(UTCDateTime, nullable=False))


class Summary(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    title: str
    original_text: str
    custom_instruction: Optional[str] = None
    generated_summary: str
    edited_summary: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_sql_model(cls, summary: SummarySQL) -> "Summary":
        return cls(
            id=summary.id,
            title=summary.title,
            original_text=summary.original_text,
            custom_instruction=summary.custom_instruction,
            generated_summary=summary.generated_summary,
            edited_summary=summary.edited_summary,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )
