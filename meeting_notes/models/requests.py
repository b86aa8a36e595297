from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSummaryRequest(CamelModel):
    title: Optional[str] = None
    original_text: Optional[str] = None
    custom_instruction: Optional[str] = None
    generated_summary: Optional[str] = None
    edited_summary: Optional[str] = None


class UpdateSummaryRequest(CamelModel):
    title: Optional[str] = None
    edited_summary: Optional[str] = None


class SummarizeRequest(CamelModel):
    text: Optional[str] = None
    custom_instruction: Optional[str] = None
    title: Optional[str] = None


class ShareRequest(CamelModel):
    summary_id: Optional[int] = None
    recipients: Optional[list[str]] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    summary_content: Optional[str] = None
