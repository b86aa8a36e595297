from enum import StrEnum
from typing import Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from result import Result, is_err

T = TypeVar("T")


class ErrorKind(StrEnum):
    bad_request = "bad_request"
    not_found = "not_found"
    unauthorized = "unauthorized"
    auth_failed = "auth_failed"
    not_configured = "not_configured"
    connection_failed = "connection_failed"
    upstream = "upstream"
    storage = "storage"


STATUS_CODES = {
    ErrorKind.bad_request: 400,
    ErrorKind.not_found: 404,
    ErrorKind.unauthorized: 401,
    ErrorKind.auth_failed: 401,
    ErrorKind.not_configured: 500,
    ErrorKind.connection_failed: 500,
    ErrorKind.upstream: 500,
    ErrorKind.storage: 500,
}


class AppError(BaseModel):
    """A classified failure, rendered as the JSON body of an error response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    kind: ErrorKind
    error: str
    message: Optional[str] = None
    setup_instructions: Optional[str] = None
    invalid_emails: Optional[list[str]] = None

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.model_dump(by_alias=True, exclude_none=True, exclude={"kind"}),
        )


class ApiError(Exception):
    def __init__(self, error: AppError):
        super().__init__(error.error)
        self.error = error


class StorageError(Exception):
    """Raised by the persistence layer, wrapping the underlying driver error."""


def unwrap_or_raise(result: Result[T, AppError]) -> T:
    if is_err(result):
        raise ApiError(result.err_value)
    return result.ok_value
