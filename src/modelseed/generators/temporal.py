"""Date/time generator."""

from datetime import date, datetime

from modelseed.generators.base import BaseGenerator
from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource

# Default window: this many years either side of today
DEFAULT_YEAR_SPAN = 10


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def default_bounds(today: date | None = None) -> tuple[datetime, datetime]:
    """
    Get the default date window.

    Returns:
        (Jan 1 of year - 10, Dec 31 of year + 10)
    """
    year = (today or date.today()).year
    return (
        datetime(year - DEFAULT_YEAR_SPAN, 1, 1),
        datetime(year + DEFAULT_YEAR_SPAN, 12, 31),
    )


class TemporalGenerator(BaseGenerator):
    """
    Generate a datetime for date, time and datetime attributes.

    `before` supplies the lower bound and `after` the upper bound; either
    falls back to the default window when absent or when it returns a falsy
    value.
    """

    def generate(self, descriptor: AttributeDescriptor, rng: RandomSource) -> datetime:
        lower, upper = default_bounds()

        if descriptor.before is not None:
            lower = descriptor.before() or lower
        if descriptor.after is not None:
            upper = descriptor.after() or upper

        lower, upper = _as_datetime(lower), _as_datetime(upper)
        # Default bounds are naive; align them with an aware override
        if lower.tzinfo and not upper.tzinfo:
            upper = upper.replace(tzinfo=lower.tzinfo)
        elif upper.tzinfo and not lower.tzinfo:
            lower = lower.replace(tzinfo=upper.tzinfo)

        return rng.datetime_between(lower, upper)
