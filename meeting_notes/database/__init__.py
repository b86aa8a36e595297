from .notes_db import ExecuteResult, NotesDB, timed_db_call

__all__ = ["ExecuteResult", "NotesDB", "timed_db_call"]
