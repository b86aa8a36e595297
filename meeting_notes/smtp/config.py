from meeting_notes.settings import Settings

PLACEHOLDER_EMAIL_USER = "your_email@gmail.com"
PLACEHOLDER_EMAIL_PASS = "your_app_password_here"


def smtp_is_configured(settings: Settings) -> bool:
    return not (
        not settings.EMAIL_USER
        or not settings.EMAIL_PASS
        or settings.EMAIL_USER == PLACEHOLDER_EMAIL_USER
        or settings.EMAIL_PASS == PLACEHOLDER_EMAIL_PASS
    )
