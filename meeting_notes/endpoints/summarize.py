from fastapi import APIRouter, Depends

from ..app_context import AppContext, get_context
from ..errors import unwrap_or_raise
from ..models import CamelModel, Summary, SummarizeRequest
from ..summarize import summarize

router = APIRouter(tags=["Summarize"])


class SummarizeResponse(CamelModel):
    success: bool = True
    summary: Summary


@router.post("/api/summarize", response_model=SummarizeResponse)
def generate_summary(
    request: SummarizeRequest, context: AppContext = Depends(get_context)
):
    """
    Summarizes the given transcript with the configured language model and
    stores the result as a new summary.
    """
    summary = unwrap_or_raise(
        summarize(
            context,
            text=request.text,
            custom_instruction=request.custom_instruction,
            title=request.title,
        )
    )
    return SummarizeResponse(summary=summary)
