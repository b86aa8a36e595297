from typing import List

from fastapi import APIRouter, Depends

from ..app_context import AppContext, get_context
from ..errors import unwrap_or_raise
from ..models import CamelModel, ShareRequest
from ..share import share_summary, verify_configuration

router = APIRouter(tags=["Share"])


class ShareResponse(CamelModel):
    success: bool = True
    message: str = "Summary shared successfully"
    message_id: str
    recipients: List[str]


class ShareTestResponse(CamelModel):
    success: bool = True
    message: str = "Email configuration is valid"


@router.post("/api/share", response_model=ShareResponse)
def share(request: ShareRequest, context: AppContext = Depends(get_context)):
    """Emails a summary to all recipients in a single message."""
    receipt = unwrap_or_raise(
        share_summary(
            context,
            recipients=request.recipients,
            summary_content=request.summary_content,
            summary_id=request.summary_id,
            subject=request.subject,
            message=request.message,
        )
    )
    return ShareResponse(message_id=receipt.message_id, recipients=receipt.recipients)


@router.get("/api/share/test", response_model=ShareTestResponse)
def test_email_configuration(context: AppContext = Depends(get_context)):
    unwrap_or_raise(verify_configuration(context))
    return ShareTestResponse()
