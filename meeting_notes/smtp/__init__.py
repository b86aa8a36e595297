from .config import PLACEHOLDER_EMAIL_PASS, PLACEHOLDER_EMAIL_USER, smtp_is_configured
from .RealSMTPClient import RealSMTPClient
from .SmtpClientInterface import SmtpClientInterface, SmtpConfigurationError
from .TestSMTPClient import TestSMTPClient

__all__ = [
    "PLACEHOLDER_EMAIL_PASS",
    "PLACEHOLDER_EMAIL_USER",
    "RealSMTPClient",
    "SmtpClientInterface",
    "SmtpConfigurationError",
    "TestSMTPClient",
    "smtp_is_configured",
]
