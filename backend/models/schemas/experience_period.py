"""A calendar-month employment span used by the Experience Estimator."""

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def month_index(d: date) -> int:
    """Months since year 0, so spans can be compared and subtracted."""
    return d.year * 12 + (d.month - 1)


class ExperiencePeriod(BaseModel):
    """Half-open span ``[start, end)`` of calendar months, ``start <= end``.

    Both bounds are normalized to the first day of their month.
    """

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @field_validator("start", "end")
    @classmethod
    def _first_of_month(cls, v: date) -> date:
        return v.replace(day=1)

    @model_validator(mode="after")
    def _ordered(self) -> "ExperiencePeriod":
        if self.start > self.end:
            raise ValueError(f"period start {self.start} is after end {self.end}")
        return self

    @property
    def months(self) -> int:
        """Length in months; a same-month span counts as one month."""
        return max(1, month_index(self.end) - month_index(self.start))
