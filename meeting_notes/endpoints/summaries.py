from typing import List

from fastapi import APIRouter, Depends

from ..app_context import AppContext, get_context
from ..errors import unwrap_or_raise
from ..models import CamelModel, CreateSummaryRequest, Summary, UpdateSummaryRequest
from ..summaries import (
    create_summary,
    delete_summary,
    get_summary,
    list_summaries,
    update_summary,
)

router = APIRouter(tags=["Summaries"])


class SummaryListResponse(CamelModel):
    success: bool = True
    summaries: List[Summary]


class SummaryResponse(CamelModel):
    success: bool = True
    summary: Summary


class SummaryCreatedResponse(CamelModel):
    success: bool = True
    message: str = "Summary saved successfully"
    summary_id: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str


@router.get("/api/summaries", response_model=SummaryListResponse)
def get_summaries(context: AppContext = Depends(get_context)):
    """Lists all saved summaries, newest first."""
    return SummaryListResponse(summaries=list_summaries(context.db))


@router.get("/api/summaries/{summary_id}", response_model=SummaryResponse)
def get_summary_by_id(summary_id: int, context: AppContext = Depends(get_context)):
    return SummaryResponse(summary=unwrap_or_raise(get_summary(context.db, summary_id)))


@router.post(
    "/api/summaries", response_model=SummaryCreatedResponse, status_code=201
)
def save_summary(
    request: CreateSummaryRequest, context: AppContext = Depends(get_context)
):
    """Saves a summary that was generated (and possibly edited) on the client."""
    summary_id = unwrap_or_raise(
        create_summary(
            context.db,
            title=request.title,
            original_text=request.original_text,
            generated_summary=request.generated_summary,
            custom_instruction=request.custom_instruction,
            edited_summary=request.edited_summary,
        )
    )
    return SummaryCreatedResponse(summary_id=summary_id)


@router.put("/api/summaries/{summary_id}", response_model=MessageResponse)
def edit_summary(
    summary_id: int,
    request: UpdateSummaryRequest,
    context: AppContext = Depends(get_context),
):
    """
    Updates the title and/or the edited summary text. Fields left out of the
    body are not touched.
    """
    unwrap_or_raise(
        update_summary(
            context.db,
            summary_id,
            title=request.title,
            edited_summary=request.edited_summary,
        )
    )
    return MessageResponse(message="Summary updated successfully")


@router.delete("/api/summaries/{summary_id}", response_model=MessageResponse)
def remove_summary(summary_id: int, context: AppContext = Depends(get_context)):
    unwrap_or_raise(delete_summary(context.db, summary_id))
    return MessageResponse(message="Summary deleted successfully")
