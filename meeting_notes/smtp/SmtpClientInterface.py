from abc import ABC, abstractmethod
from email.message import EmailMessage

from meeting_notes.settings import Settings


class SmtpConfigurationError(Exception):
    """Credentials are missing or still hold the example placeholders."""


class SmtpClientInterface(ABC):
    @abstractmethod
    def __init__(self, settings: Settings):
        super().__init__()

    @abstractmethod
    def __enter__(self):
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    @abstractmethod
    def send_message(self, message: EmailMessage) -> str:
        """Send the message once and return its Message-ID."""
        pass

    @abstractmethod
    def verify(self) -> None:
        """Check that the server accepts our credentials. Raise otherwise."""
        pass
