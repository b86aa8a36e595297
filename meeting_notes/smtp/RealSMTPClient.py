import smtplib
from email.message import EmailMessage
from typing import Optional

from loguru import logger

from meeting_notes.settings import Settings

from .config import smtp_is_configured
from .SmtpClientInterface import SmtpClientInterface, SmtpConfigurationError

SMTP_SSL_PORT = 465


class RealSMTPClient(SmtpClientInterface):
    def __init__(self, settings: Settings):
        """
        Prepare a client for the configured SMTP server. The connection is
        only opened when entering the context.

        :param settings: provides EMAIL_HOST, EMAIL_PORT, EMAIL_USER and EMAIL_PASS.
        """
        if not smtp_is_configured(settings):
            raise SmtpConfigurationError(
                "Email credentials not configured. Please set up EMAIL_USER and EMAIL_PASS in your .env file."
            )
        self.settings = settings
        self.connection: Optional[smtplib.SMTP] = None

    def __enter__(self):
        try:
            self.connect()
        except BaseException:
            self.quit()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.quit()

    def connect(self):
        """Connect to the SMTP server, upgrade to TLS when offered and log in."""
        host, port = self.settings.EMAIL_HOST, self.settings.EMAIL_PORT
        logger.info(f"connecting to smtp server {host}:{port}")

        if port == SMTP_SSL_PORT:
            self.connection = smtplib.SMTP_SSL(host, port)
        else:
            self.connection = smtplib.SMTP(host, port)
            self.connection.ehlo()
            if self.connection.has_extn("starttls"):
                self.connection.starttls()
                self.connection.ehlo()

        self.connection.login(self.settings.EMAIL_USER, self.settings.EMAIL_PASS)
        logger.info("smtp login finished")

    def quit(self):
        if self.connection is not None:
            try:
                self.connection.quit()
            except smtplib.SMTPServerDisconnected:
                pass
            except Exception as e:
                logger.error(f"Error while closing smtp connection: {e}")
            finally:
                self.connection.close()
            self.connection = None

    def send_message(self, message: EmailMessage) -> str:
        if self.connection is None:
            raise PermissionError("You need to use the client as a context")

        refused = self.connection.send_message(message)
        if refused:
            logger.warning(f"Server refused recipients: {list(refused)}")
        return message["Message-ID"]

    def verify(self) -> None:
        if self.connection is None:
            raise PermissionError("You need to use the client as a context")

        code, response = self.connection.noop()
        if code != 250:
            raise smtplib.SMTPResponseException(code, response)
