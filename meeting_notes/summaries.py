from typing import List, Optional

from loguru import logger
from result import Ok, Result
from sqlalchemy import delete, insert, update
from sqlmodel import select

from .database import NotesDB
from .errors import AppError, ErrorKind
from .models import EMAIL_STATUS, EmailLogSQL, Summary, SummarySQL, utc_now
from .utils import LogLevel, return_error_and_log


def _not_found(summary_id: int) -> AppError:
    return AppError(
        kind=ErrorKind.not_found,
        error="Summary not found",
        message=f"no summary with id {summary_id}",
    )


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def list_summaries(db: NotesDB) -> List[Summary]:
    rows: List[SummarySQL] = db.fetch_all(
        select(SummarySQL).order_by(SummarySQL.created_at.desc(), SummarySQL.id.desc())
    )
    return [Summary.from_sql_model(row) for row in rows]


def get_summary(db: NotesDB, summary_id: int) -> Result[Summary, AppError]:
    row: Optional[SummarySQL] = db.fetch_one(
        select(SummarySQL).where(SummarySQL.id == summary_id)
    )
    if row is None:
        return return_error_and_log(_not_found(summary_id), level=LogLevel.debug)
    return Ok(Summary.from_sql_model(row))


def create_summary(
    db: NotesDB,
    title: Optional[str],
    original_text: Optional[str],
    generated_summary: Optional[str],
    custom_instruction: Optional[str] = None,
    edited_summary: Optional[str] = None,
) -> Result[int, AppError]:
    """Insert a new summary and return its id.

    An absent ``edited_summary`` starts out as a copy of ``generated_summary``;
    a blank one is rejected like any other blank required field.
    """
    if _is_blank(title) or _is_blank(original_text) or _is_blank(generated_summary):
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="Title, original text, and generated summary are required",
            ),
            level=LogLevel.warning,
        )
    if edited_summary is not None and _is_blank(edited_summary):
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="Edited summary must not be empty",
            ),
            level=LogLevel.warning,
        )

    now = utc_now()
    result = db.execute(
        insert(SummarySQL).values(
            title=title,
            original_text=original_text,
            custom_instruction=None if _is_blank(custom_instruction) else custom_instruction,
            generated_summary=generated_summary,
            edited_summary=edited_summary if edited_summary is not None else generated_summary,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info(f"Saved summary {result.inserted_id} ({title!r})")
    return Ok(result.inserted_id)


def update_summary(
    db: NotesDB,
    summary_id: int,
    title: Optional[str] = None,
    edited_summary: Optional[str] = None,
) -> Result[Summary, AppError]:
    if title is None and edited_summary is None:
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="At least one field to update is required",
            ),
            level=LogLevel.warning,
        )

    blank = [
        name
        for name, value in (("title", title), ("editedSummary", edited_summary))
        if value is not None and _is_blank(value)
    ]
    if blank:
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="Fields must not be empty",
                message=", ".join(blank),
            ),
            level=LogLevel.warning,
        )

    existing = get_summary(db, summary_id)
    if existing.is_err():
        return existing

    values = {"updated_at": utc_now()}
    if title is not None:
        values["title"] = title
    if edited_summary is not None:
        values["edited_summary"] = edited_summary

    db.execute(update(SummarySQL).where(SummarySQL.id == summary_id).values(**values))
    logger.info(f"Updated summary {summary_id} ({', '.join(sorted(values))})")
    return get_summary(db, summary_id)


def delete_summary(db: NotesDB, summary_id: int) -> Result[None, AppError]:
    existing = get_summary(db, summary_id)
    if existing.is_err():
        return existing

    # email logs first so no row is left pointing at the removed summary
    logs_result, _ = db.execute_in_transaction(
        delete(EmailLogSQL).where(EmailLogSQL.summary_id == summary_id),
        delete(SummarySQL).where(SummarySQL.id == summary_id),
    )
    logger.info(
        f"Deleted summary {summary_id} and {logs_result.rows_affected} email log(s)"
    )
    return Ok(None)


def log_email(
    db: NotesDB, summary_id: int, recipients: List[str], subject: str
) -> int:
    result = db.execute(
        insert(EmailLogSQL).values(
            summary_id=summary_id,
            recipients=", ".join(recipients),
            subject=subject,
            sent_at=utc_now(),
            status=str(EMAIL_STATUS.sent),
        )
    )
    logger.debug(f"Logged email {result.inserted_id} for summary {summary_id}")
    return result.inserted_id
