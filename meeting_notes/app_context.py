from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request
from langchain_core.runnables import Runnable

from meeting_notes.database import NotesDB
from meeting_notes.settings import Settings
from meeting_notes.smtp import SmtpClientInterface


@dataclass
class AppContext:
    db: NotesDB
    settings: Settings
    smtp_client: type[SmtpClientInterface]
    # None when the configured provider has no credentials
    llm: Optional[Runnable] = None
    llm_error: Optional[str] = None


class Application:
    def __init__(self, app: FastAPI, context: AppContext, settings: Settings):
        self.app: FastAPI = app
        self.context: AppContext = context
        self.settings: Settings = settings
        app.state.context = context


def get_context(request: Request) -> AppContext:
    context: Optional[AppContext] = getattr(request.app.state, "context", None)
    if context is None:
        raise ValueError("Application not instantiated")

    return context
