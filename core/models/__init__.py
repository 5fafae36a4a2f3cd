"""Pydantic data models and enums shared across all components."""

from core.models.durations import DurationParts
from core.models.errors import ErrorCode

__all__ = [
    "DurationParts",
    "ErrorCode",
]
