"""Duration model -- the tokenized form of a duration string."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DurationParts(BaseModel):
    """Components of a `P[nY][nM][nD][T[nH][nM][nS]]` string.

    Each field holds the digits written before its designator, or None when
    the designator is absent. Numbers stay as text: the grammar puts no limit
    on their length, and conversion is the normalizer's job.
    """

    model_config = ConfigDict(frozen=True)

    years: str | None = None
    months: str | None = None
    days: str | None = None
    hours: str | None = None
    minutes: str | None = None
    seconds: str | None = None

    @property
    def fraction_digits(self) -> int:
        """Number of digits after the decimal point in the seconds field."""
        if self.seconds is None or "." not in self.seconds:
            return 0
        return len(self.seconds.split(".", 1)[1])

