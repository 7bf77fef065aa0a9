"""
Run a statement against whichever schema version the database is on.

Some tables changed shape over time (a renamed link column, a date column
that older databases lack, an optional table). Callers list the candidate
layouts in order; each attempt runs inside a savepoint so a failed candidate
does not poison the surrounding transaction.
"""
import re
from typing import Callable, Optional, Sequence, TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from employee_console.core.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R")

# PostgreSQL SQLSTATE codes
UNDEFINED_COLUMN = "42703"
UNDEFINED_TABLE = "42P01"

_MISSING_COLUMN_MESSAGE = re.compile(r"column .* does not exist|no such column", re.IGNORECASE)
_MISSING_TABLE_MESSAGE = re.compile(r"relation .* does not exist|no such table", re.IGNORECASE)


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_missing_column_error(exc: Exception, column: Optional[str] = None) -> bool:
    """Check whether a database error means a referenced column does not exist"""
    if not isinstance(exc, DBAPIError):
        return False
    if _sqlstate(exc) == UNDEFINED_COLUMN:
        return True
    message = str(getattr(exc, "orig", None) or exc)
    if _MISSING_COLUMN_MESSAGE.search(message):
        return True
    return bool(column) and column.lower() in message.lower()


def is_missing_table_error(exc: Exception, table: Optional[str] = None) -> bool:
    """Check whether a database error means a referenced table does not exist"""
    if not isinstance(exc, DBAPIError):
        return False
    if _sqlstate(exc) == UNDEFINED_TABLE:
        return True
    message = str(getattr(exc, "orig", None) or exc)
    if _MISSING_TABLE_MESSAGE.search(message):
        return True
    return bool(table) and table.lower() in message.lower()


def run_with_column_fallback(
    db_session: Session,
    candidates: Sequence[str],
    attempt: Callable[[str], R],
) -> R:
    """
    Try ``attempt(column)`` for each candidate column name in order.

    A candidate is skipped only when the database reports that its column
    does not exist. Any other error, or a missing column on the last
    candidate, is raised.

    Args:
        db_session: Session the attempts run in
        candidates: Column names, preferred layout first
        attempt: Callable issuing the statement for one column name

    Returns:
        The result of the first attempt that succeeded
    """
    if not candidates:
        raise ValueError("At least one candidate column is required")

    last_index = len(candidates) - 1
    for index, column in enumerate(candidates):
        try:
            with db_session.begin_nested():
                return attempt(column)
        except DBAPIError as e:
            if index < last_index and is_missing_column_error(e, column):
                logger.info(
                    f"Column '{column}' not present, falling back to '{candidates[index + 1]}'"
                )
                continue
            raise
