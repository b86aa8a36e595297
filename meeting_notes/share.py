import re
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel
from result import Ok, Result

from .app_context import AppContext
from .errors import AppError, ErrorKind
from .smtp import SmtpConfigurationError, smtp_is_configured
from .summaries import log_email
from .utils import LogLevel, return_error_and_log

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DEFAULT_SUBJECT = "Meeting Summary Shared"
SETUP_INSTRUCTIONS = (
    "Set EMAIL_USER and EMAIL_PASS in your .env file to enable email sharing."
)


class ShareReceipt(BaseModel):
    message_id: str
    recipients: List[str]


def find_invalid_recipients(recipients: List[str]) -> List[str]:
    return [r for r in recipients if not EMAIL_PATTERN.match(r)]


def render_email_body(
    subject: str, summary_content: str, message: Optional[str] = None
) -> str:
    # content comes from our own summaries and is embedded as is
    personal_message = (
        f'<p style="color: #666; margin-bottom: 20px;">{message}</p>' if message else ""
    )
    return f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #333;">{subject}</h2>

        {personal_message}

        <div style="background-color: #f9f9f9; padding: 20px; border-radius: 8px; margin: 20px 0;">
          <h3 style="color: #444; margin-top: 0;">Summary</h3>
          <div style="white-space: pre-wrap; color: #333; line-height: 1.6;">
            {summary_content}
          </div>
        </div>

        <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
        <p style="color: #999; font-size: 12px;">
          This summary was generated using AI Meeting Notes Summarizer.
        </p>
      </div>
    """


def build_message(
    sender: str,
    recipients: List[str],
    subject: str,
    summary_content: str,
    message: Optional[str] = None,
) -> EmailMessage:
    mail = EmailMessage()
    mail["From"] = sender
    mail["To"] = ", ".join(recipients)
    mail["Subject"] = subject
    domain = sender.rsplit("@", 1)[-1] if "@" in sender else None
    mail["Message-ID"] = make_msgid(domain=domain)

    mail.set_content(summary_content)
    mail.add_alternative(
        render_email_body(subject, summary_content, message), subtype="html"
    )
    return mail


def _not_configured(message: Optional[str] = None) -> AppError:
    return AppError(
        kind=ErrorKind.not_configured,
        error="Email service not configured. Please set up email credentials in your .env file.",
        message=message,
        setup_instructions=SETUP_INSTRUCTIONS,
    )


def classify_smtp_error(exc: Exception) -> AppError:
    # SMTPException derives from OSError, so the order of checks matters
    if isinstance(exc, SmtpConfigurationError):
        return _not_configured(str(exc))
    if isinstance(exc, smtplib.SMTPAuthenticationError):
        return AppError(
            kind=ErrorKind.auth_failed,
            error="Email authentication failed. Please check your email credentials.",
        )
    if isinstance(exc, (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected)) or (
        isinstance(exc, OSError) and not isinstance(exc, smtplib.SMTPException)
    ):
        return AppError(
            kind=ErrorKind.connection_failed,
            error="Failed to connect to email server. Please check your email configuration.",
            message=str(exc),
        )
    return AppError(
        kind=ErrorKind.upstream,
        error="Failed to share summary",
        message=str(exc),
    )


def share_summary(
    context: AppContext,
    recipients: Optional[List[str]],
    summary_content: Optional[str],
    summary_id: Optional[int] = None,
    subject: Optional[str] = None,
    message: Optional[str] = None,
) -> Result[ShareReceipt, AppError]:
    if not recipients:
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="At least one recipient is required",
            ),
            level=LogLevel.warning,
        )

    if not summary_content:
        return return_error_and_log(
            AppError(kind=ErrorKind.bad_request, error="Summary content is required"),
            level=LogLevel.warning,
        )

    invalid = find_invalid_recipients(recipients)
    if invalid:
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="Invalid email addresses",
                invalid_emails=invalid,
            ),
            level=LogLevel.warning,
        )

    email_subject = subject or DEFAULT_SUBJECT
    if "\r" in email_subject or "\n" in email_subject:
        return return_error_and_log(
            AppError(
                kind=ErrorKind.bad_request,
                error="Subject must be a single line",
            ),
            level=LogLevel.warning,
        )

    if not smtp_is_configured(context.settings):
        return return_error_and_log(_not_configured())

    mail = build_message(
        sender=context.settings.sender_address,
        recipients=recipients,
        subject=email_subject,
        summary_content=summary_content,
        message=message,
    )

    try:
        with context.smtp_client(settings=context.settings) as client:
            message_id = client.send_message(mail)
    except Exception as exc:
        logger.exception(f"Email sharing failed: {exc}")
        return return_error_and_log(classify_smtp_error(exc))

    logger.info(f"Shared summary {summary_id} with {len(recipients)} recipient(s)")

    if summary_id is not None:
        log_email(context.db, summary_id, recipients, email_subject)

    return Ok(ShareReceipt(message_id=message_id, recipients=recipients))


def verify_configuration(context: AppContext) -> Result[None, AppError]:
    """Log in to the SMTP server without sending anything."""
    if not smtp_is_configured(context.settings):
        return return_error_and_log(
            _not_configured("Please set up EMAIL_USER and EMAIL_PASS in your .env file.")
        )

    try:
        with context.smtp_client(settings=context.settings) as client:
            client.verify()
    except Exception as exc:
        logger.exception(f"Email configuration test failed: {exc}")
        if isinstance(exc, SmtpConfigurationError):
            return return_error_and_log(_not_configured(str(exc)))
        return return_error_and_log(
            AppError(
                kind=ErrorKind.upstream,
                error="Email configuration test failed",
                message=str(exc),
            )
        )

    return Ok(None)
