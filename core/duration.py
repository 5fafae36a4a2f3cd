"""Duration data type -- validation, normalization and comparison.

Durations use the `P[nY][nM][nD][T[nH][nM][nS]]` form. `M` is months before
the `T` separator and minutes after it. Seconds may carry a fraction.

Both validate() and the seconds parser work from one tokenizing pass, so the
grammar check and the normalizer cannot disagree about what a string means.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import timedelta

from core.models.durations import DurationParts
from core.models.errors import ErrorCode

logger = logging.getLogger(__name__)

# Fixed conversion factors. No leap years, 30.417-day months.
SECONDS_PER_YEAR = 31536000
SECONDS_PER_MONTH = 2628029
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# The stored type is timeinterval (second,10,2)
MAX_FRACTION_DIGITS = 2

# Totals are signed 64-bit values in every other implementation
_MAX_WHOLE_SECONDS = 2**63 - 1

_COMPONENT_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)([A-Z])")

# (designator, field, seconds factor) in the order they must appear
_DATE_FIELDS = (
    ("Y", "years", SECONDS_PER_YEAR),
    ("M", "months", SECONDS_PER_MONTH),
    ("D", "days", SECONDS_PER_DAY),
)
_TIME_FIELDS = (
    ("H", "hours", SECONDS_PER_HOUR),
    ("M", "minutes", SECONDS_PER_MINUTE),
    ("S", "seconds", 1),
)


class DurationFormatError(ValueError):
    """Raised when a string does not follow the duration grammar."""

    def __init__(self, value: object, reason: str) -> None:
        super().__init__(f"Invalid duration {value!r}: {reason}")
        self.value = value
        self.reason = reason


def _scan_half(value: str, text: str, fields: tuple) -> dict:
    """Tokenize one half into {field: raw number text}.

    Designators must appear in order and at most once. Only seconds may
    carry a fraction.
    """
    found: dict[str, str] = {}
    cursor = 0
    position = 0

    while cursor < len(text):
        match = _COMPONENT_RE.match(text, cursor)
        if match is None:
            raise DurationFormatError(value, f"unexpected text {text[cursor:cursor + 20]!r}")

        number, designator = match.group(1), match.group(2)
        for offset, (letter, field, _) in enumerate(fields[position:]):
            if letter == designator:
                position += offset + 1
                break
        else:
            raise DurationFormatError(value, f"unexpected designator {designator!r}")

        if "." in number and field != "seconds":
            raise DurationFormatError(value, f"{field} must be a whole number")

        found[field] = number
        cursor = match.end()

    return found


def tokenize_duration(value: str) -> DurationParts:
    """Split a duration string into its components.

    The string is partitioned at the first `T` and each half is scanned on
    its own, which settles whether an `M` means months or minutes.

    Raises DurationFormatError if the string is not structurally valid.
    Fraction precision and degenerate strings like "P" are left to the caller.
    """
    if not isinstance(value, str) or not value.startswith("P"):
        raise DurationFormatError(value, "must start with 'P'")

    date_text, _, time_text = value[1:].partition("T")
    date_part = _scan_half(value, date_text, _DATE_FIELDS)
    time_part = _scan_half(value, time_text, _TIME_FIELDS)

    return DurationParts(**date_part, **time_part)


def _whole_number(digits: str) -> int | None:
    """Convert a component to int, or None if it cannot fit in 64 bits."""
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(_MAX_WHOLE_SECONDS)):
        return None
    amount = int(significant)
    return amount if amount <= _MAX_WHOLE_SECONDS else None


def parts_to_seconds(parts: DurationParts) -> float | None:
    """Normalize tokenized parts to total seconds.

    Fractional seconds are floored to two decimals. Returns None when a
    component is out of range rather than returning a partial total.
    """
    whole = 0
    for _, field, factor in _DATE_FIELDS + _TIME_FIELDS[:2]:
        digits = getattr(parts, field)
        if digits is None:
            continue
        amount = _whole_number(digits)
        if amount is None:
            return None
        whole += amount * factor

    if whole > _MAX_WHOLE_SECONDS:
        return None

    if parts.seconds is None:
        return float(whole)

    hundredths = float(parts.seconds) * 100.0
    if not math.isfinite(hundredths):
        return None
    return math.floor(hundredths) / 100.0 + float(whole)


def duration_seconds(value: str) -> float | None:
    """Total seconds represented by a duration, or None if it cannot be parsed.

    More lenient than validation: any number of fractional second digits is
    accepted, and "P" / "PT" normalize to 0.0. Never raises.
    """
    try:
        parts = tokenize_duration(value)
    except DurationFormatError as e:
        logger.debug("Unparsable duration: %s", e)
        return None

    total = parts_to_seconds(parts)
    if total is None:
        logger.debug("Duration %r is out of range", value)
    return total


def to_timedelta(value: str) -> timedelta:
    """Parse a duration string like 'PT1H30M' into a timedelta.

    Raises ValueError if the string cannot be parsed.
    """
    seconds = duration_seconds(value)
    if seconds is None:
        raise ValueError(
            f"Invalid duration: {value!r}. Expected 'P[nY][nM][nD][T[nH][nM][nS]]'."
        )
    return timedelta(seconds=seconds)


class DurationValidator:
    """Type validator for the duration data type.

    Stateless; one instance can be shared across threads.
    """

    @property
    def name(self) -> str:
        return "duration"

    def validate(self, value: str | None) -> ErrorCode:
        """Check a value against the duration grammar."""
        if value is None:
            return ErrorCode.UNKNOWN_EXCEPTION

        try:
            parts = tokenize_duration(value)
        except DurationFormatError as e:
            logger.debug("Rejected duration: %s", e)
            return ErrorCode.TYPE_MISMATCH

        if parts.fraction_digits > MAX_FRACTION_DIGITS:
            logger.debug(
                "Rejected duration %r: more than %d fractional digits",
                value, MAX_FRACTION_DIGITS,
            )
            return ErrorCode.TYPE_MISMATCH

        # A bare "P" or a trailing "T" carries no designator. The length check
        # overlaps with the "P" check and is kept to match other runtimes.
        if value.endswith("P") or value.endswith("T") or len(value) == 1:
            logger.debug("Rejected duration %r: no designators", value)
            return ErrorCode.TYPE_MISMATCH

        return ErrorCode.NO_ERROR

    def compare(
        self,
        first: str | None,
        second: str | None,
        delimiters: list[str] | None = None,
    ) -> bool:
        """Return True if both durations normalize to the same number of seconds.

        Durations take no delimiters, so any delimiter context makes the
        comparison fail.
        """
        if first is None or second is None:
            return False
        if delimiters is not None:
            return False

        first_seconds = duration_seconds(first)
        second_seconds = duration_seconds(second)
        if first_seconds is None or second_seconds is None:
            return False

        return first_seconds == second_seconds

    def total_seconds(self, value: str) -> float | None:
        """Total seconds for a duration, or None if it cannot be parsed."""
        return duration_seconds(value)
