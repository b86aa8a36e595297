from typing import Optional

import groq
from loguru import logger
from result import Result, is_err

from .app_context import AppContext
from .errors import AppError, ErrorKind
from .llms import generate_summary_with_llm
from .models import Summary
from .summaries import create_summary, get_summary
from .utils import LogLevel, return_error_and_log

DEFAULT_TITLE = "Untitled Summary"
AUTH_STATUS_CODES = (401, 403)


def _unauthorized(message: Optional[str] = None) -> AppError:
    return AppError(
        kind=ErrorKind.unauthorized,
        error="Invalid or missing LLM API key. Please check your configuration.",
        message=message,
    )


def classify_llm_error(exc: Exception) -> AppError:
    """Map a provider failure onto unauthorized or upstream by its type or status."""
    status_code = getattr(exc, "status_code", None)
    if isinstance(exc, groq.AuthenticationError) or status_code in AUTH_STATUS_CODES:
        return _unauthorized(str(exc))

    return AppError(
        kind=ErrorKind.upstream,
        error="Failed to generate summary",
        message=str(exc),
    )


def summarize(
    context: AppContext,
    text: Optional[str],
    custom_instruction: Optional[str] = None,
    title: Optional[str] = None,
) -> Result[Summary, AppError]:
    if text is None or not text.strip():
        return return_error_and_log(
            AppError(kind=ErrorKind.bad_request, error="Text content is required"),
            level=LogLevel.warning,
        )

    if context.llm is None:
        return return_error_and_log(_unauthorized(context.llm_error))

    try:
        logger.debug(
            f"Generating summary for {len(text)} characters with provider {context.settings.llm_provider}"
        )
        generated = generate_summary_with_llm(context.llm, text, custom_instruction)
    except Exception as exc:
        logger.exception(f"Summarization failed: {exc}")
        return return_error_and_log(classify_llm_error(exc))

    res = create_summary(
        context.db,
        title=title if title and title.strip() else DEFAULT_TITLE,
        original_text=text,
        generated_summary=generated,
        custom_instruction=custom_instruction,
    )
    if is_err(res):
        return res

    return get_summary(context.db, res.ok_value)
