"""Data-model error codes -- the closed catalog every type validator draws from.

Values are the SCORM 2004 run-time error numbers, so a code can be handed
straight back to the content through GetLastError().
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Result of a data-model operation."""

    NO_ERROR = 0
    UNKNOWN_EXCEPTION = 101
    UNDEFINED_ELEMENT = 401
    NOT_IMPLEMENTED = 402
    NOT_INITIALIZED = 403
    READ_ONLY = 404
    WRITE_ONLY = 405
    TYPE_MISMATCH = 406
    VALUE_OUT_OF_RANGE = 407
    DEPENDENCY_NOT_ESTABLISHED = 408

    @property
    def ok(self) -> bool:
        return self is ErrorCode.NO_ERROR
