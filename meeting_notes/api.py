import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .app_context import AppContext, Application
from .database import NotesDB
from .endpoints import share, summaries, summarize
from .errors import ApiError, StorageError
from .llms import MissingCredentialsError, build_chat_model
from .settings import Settings
from .smtp import RealSMTPClient, TestSMTPClient
from .testing import build_test_chat_model


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return exc.error.to_response()

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Database operation failed", "message": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        logger.warning(f"{request.method} {request.url.path} rejected: {problems}")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "message": "; ".join(problems)},
        )


def create_app(settings: Optional[Settings] = None) -> Application:
    # Override settings if a test configuration is provided.
    if settings is None:
        settings = Settings()
    settings: Settings

    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL)
    if settings.log_path is not None:
        logger.add(settings.log_path, level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context: AppContext = app.state.context
        logger.info("Meeting notes API started")
        yield
        context.db.close()

    app = FastAPI(lifespan=lifespan, title="AI Meeting Notes Summarizer API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(summaries.router)
    app.include_router(summarize.router)
    app.include_router(share.router)

    # Initialize our app context.
    if settings.TEST_BACKEND == "True":
        TestSMTPClient.reset()
        context = AppContext(
            db=NotesDB(base_dir=settings.TEST_DB_PATH),
            settings=settings,
            smtp_client=TestSMTPClient,
            llm=build_test_chat_model(),
        )
    elif settings.TEST_BACKEND == "False":
        context = AppContext(
            db=NotesDB(base_dir=settings.DB_DIR),
            settings=settings,
            smtp_client=RealSMTPClient,
        )
        try:
            context.llm = build_chat_model(settings)
        except MissingCredentialsError as exc:
            logger.warning(f"Summarization disabled: {exc}")
            context.llm_error = str(exc)
    else:
        raise ValueError("TEST_BACKEND must be 'True' or 'False'")

    return Application(app=app, context=context, settings=settings)
