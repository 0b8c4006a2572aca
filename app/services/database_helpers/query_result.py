# /app/services/database_helpers/query_result.py

"""
The tagged result returned by every repository call.

Callers branch on `status` instead of inspecting driver-specific error codes.
The mapping from those codes to a status lives in `lab_repository_sql`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class QueryStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILURE = "failure"


@dataclass(frozen=True)
class QueryResult:
    status: QueryStatus
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "QueryResult":
        return cls(QueryStatus.OK, data=data)

    @classmethod
    def not_found(cls) -> "QueryResult":
        return cls(QueryStatus.NOT_FOUND, error="no rows found")

    @classmethod
    def conflict(cls, reason: str) -> "QueryResult":
        return cls(QueryStatus.CONFLICT, error=reason)

    @classmethod
    def failure(cls, cause: str) -> "QueryResult":
        return cls(QueryStatus.FAILURE, error=cause)

    @property
    def is_ok(self) -> bool:
        return self.status is QueryStatus.OK
