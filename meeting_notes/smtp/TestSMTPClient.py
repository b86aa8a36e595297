from email.message import EmailMessage
from typing import Optional

from loguru import logger

from meeting_notes.settings import Settings

from .config import smtp_is_configured
from .SmtpClientInterface import SmtpClientInterface, SmtpConfigurationError


class TestSMTPClient(SmtpClientInterface):
    """In-memory stand-in for the SMTP server.

    Shared across instances so tests can inspect what was sent. Setting
    ``fail_with`` makes every connection attempt raise that exception.
    """

    __test__ = False
    instance: Optional["TestSMTPClient"] = None
    initialzed: bool = False

    def __new__(cls, *args, **kwargs):
        if cls.instance is None:
            cls.instance = super().__new__(cls)
            return cls.instance

        return cls.instance

    def __init__(self, settings: Settings):
        if not smtp_is_configured(settings):
            raise SmtpConfigurationError(
                "Email credentials not configured. Please set up EMAIL_USER and EMAIL_PASS in your .env file."
            )
        self.settings = settings

        if self.initialzed:
            return
        self.sent: list[EmailMessage] = []
        self.fail_with: Optional[Exception] = None
        self.verified: int = 0

        self.initialzed = True

    @classmethod
    def reset(cls) -> None:
        cls.instance = None
        cls.initialzed = False

    def __enter__(self):
        if self.fail_with is not None:
            raise self.fail_with
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def send_message(self, message: EmailMessage) -> str:
        self.sent.append(message)
        logger.debug(
            f"TestClient: stored message {message['Message-ID']} to {message['To']}"
        )
        return message["Message-ID"]

    def verify(self) -> None:
        self.verified += 1
