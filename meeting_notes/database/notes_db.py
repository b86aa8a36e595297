import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from pathlib import Path
from typing import Callable, Iterator, List, Optional, ParamSpec, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.base import Executable
from sqlmodel import Session, SQLModel, create_engine

from meeting_notes.errors import StorageError
from meeting_notes.models import EmailLogSQL, SummarySQL

EmailLogSQL, SummarySQL  # for create all

P = ParamSpec("P")
R = TypeVar("R")


def timed_db_call(fn: Callable[P, R]) -> Callable[P, R]:
    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        result = fn(*args, **kwargs)
        elapsed_ms = (time.perf_counter() - start) * 1000

        args_rendered = [type(arg).__name__ for arg in args[1:]]
        kwargs_rendered = {k: type(v).__name__ for k, v in kwargs.items()}
        logger.debug(
            f"{fn.__qualname__}(args={args_rendered}, kwargs={kwargs_rendered}) took {elapsed_ms:.2f}ms"
        )
        return result

    return wrapper


@dataclass
class ExecuteResult:
    inserted_id: Optional[int]
    rows_affected: int


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"{operation} failed: {exc}")
        raise StorageError(f"{operation} failed: {exc}") from exc


class NotesDB:
    """Handle on the SQLite file holding summaries and email logs.

    Mutating statements go through ``execute`` on a plain connection so the
    caller gets the inserted primary key and the affected row count back;
    queries go through a session and return model instances.
    """

    def __init__(self, base_dir: str, file_name: str = "summaries.db"):
        self.path = Path(base_dir)
        self.path.mkdir(parents=True, exist_ok=True)

        self.db_path = self.path / file_name
        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        with storage_errors("creating tables"):
            SQLModel.metadata.create_all(self.engine)
        logger.info(f"Connected to SQLite database at {self.db_path}")

    @staticmethod
    def _to_execute_result(result) -> ExecuteResult:
        inserted_id = None
        if result.is_insert and result.inserted_primary_key:
            inserted_id = result.inserted_primary_key[0]
        return ExecuteResult(inserted_id=inserted_id, rows_affected=result.rowcount)

    @timed_db_call
    def execute(self, statement: Executable) -> ExecuteResult:
        with storage_errors("execute"):
            with self.engine.begin() as connection:
                return self._to_execute_result(connection.execute(statement))

    @timed_db_call
    def execute_in_transaction(self, *statements: Executable) -> List[ExecuteResult]:
        """Run all statements in one transaction, rolling back on any failure."""
        with storage_errors("transaction"):
            with self.engine.begin() as connection:
                return [
                    self._to_execute_result(connection.execute(statement))
                    for statement in statements
                ]

    @timed_db_call
    def fetch_one(self, query) -> Optional[R]:
        with storage_errors("fetch_one"):
            with Session(self.engine, expire_on_commit=False) as session:
                return session.exec(query).first()

    @timed_db_call
    def fetch_all(self, query) -> List[R]:
        with storage_errors("fetch_all"):
            with Session(self.engine, expire_on_commit=False) as session:
                return list(session.exec(query).all())

    def close(self) -> None:
        self.engine.dispose()
        logger.info(f"Closed database {self.db_path}")
