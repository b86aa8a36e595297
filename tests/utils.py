from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import select

from meeting_notes.api import Application, create_app
from meeting_notes.models import EmailLogSQL
from meeting_notes.settings import Settings
from meeting_notes.summaries import create_summary

TEST_EMAIL_USER = "notes@example.com"
TEST_EMAIL_PASS = "app-password"


def get_test_client(test_app) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=test_app.app), base_url="http://test"
    )


def make_test_settings(db_path: str, **overrides) -> Settings:
    values = dict(
        _env_file=None,
        TEST_BACKEND="True",
        TEST_DB_PATH=db_path,
        LOG_LEVEL="DEBUG",
        EMAIL_USER=TEST_EMAIL_USER,
        EMAIL_PASS=TEST_EMAIL_PASS,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="function")
def temp_test_dir(tmp_path_factory) -> str:
    d = tmp_path_factory.mktemp("test_db")
    return str(d)


@pytest_asyncio.fixture(scope="function")
async def test_app(temp_test_dir: str) -> Application:
    app = create_app(settings=make_test_settings(temp_test_dir))

    async with app.app.router.lifespan_context(app.app):
        yield app


def save_summary(
    test_app: Application,
    title: str = "Standup",
    original_text: str = "we discussed X",
    generated_summary: str = "X was discussed",
    **kwargs,
) -> int:
    return create_summary(
        test_app.context.db,
        title=title,
        original_text=original_text,
        generated_summary=generated_summary,
        **kwargs,
    ).unwrap()


def email_logs(test_app: Application, summary_id: Optional[int] = None) -> list[EmailLogSQL]:
    query = select(EmailLogSQL)
    if summary_id is not None:
        query = query.where(EmailLogSQL.summary_id == summary_id)
    return test_app.context.db.fetch_all(query)
