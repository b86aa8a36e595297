from enum import StrEnum

from loguru import logger
from result import Err

from .errors import AppError


class LogLevel(StrEnum):
    info = "INFO"
    debug = "DEBUG"
    warning = "WARNING"
    error = "ERROR"


LOG_FUNC = {
    LogLevel.info: logger.info,
    LogLevel.debug: logger.debug,
    LogLevel.warning: logger.warning,
    LogLevel.error: logger.error,
}


def return_error_and_log(error: AppError, level: LogLevel = LogLevel.error) -> Err:
    if error.message:
        LOG_FUNC[level](f"{error.error}: {error.message}")
    else:
        LOG_FUNC[level](error.error)
    return Err(error)
