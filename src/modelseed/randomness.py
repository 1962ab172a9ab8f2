"""Shared randomness source for generators and association picks."""

import random
import string
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, TypeVar

from faker import Faker

T = TypeVar("T")

# Same alphabet as the blueprint string generator, hence the '_'/'-' stripping for emails/urls
STRING_POOL = string.ascii_letters + string.digits + "_-"


class RandomSource:
    """
    Single randomness source passed to every generator and selection call.

    Wraps one Faker instance. Production runs construct it unseeded; tests
    pass a seed to reproduce a run.

    Example:
        >>> rng = RandomSource(seed=42)
        >>> rng.integer(1, 6) in range(1, 7)
        True
    """

    def __init__(self, faker: Faker | None = None, seed: int | None = None):
        self.faker = faker or Faker()
        if seed is not None:
            self.faker.seed_instance(seed)

    @property
    def random(self) -> random.Random:
        """Underlying random.Random of the Faker instance."""
        return self.faker.random

    def pick(self, values: Sequence[T]) -> T:
        """Uniformly pick one element."""
        if not values:
            raise ValueError("Cannot pick from an empty sequence")
        return self.random.choice(values)

    def integer(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]."""
        return self.faker.random_int(min=int(low), max=int(high))

    def real(self, low: float, high: float) -> float:
        """Uniform real number in [low, high]."""
        return self.random.uniform(low, high)

    def boolean(self) -> bool:
        return self.faker.pybool()

    def string(self, length: int) -> str:
        """Random sequence of `length` characters from STRING_POOL."""
        return self.faker.lexify("?" * length, letters=STRING_POOL)

    def datetime_between(self, start: datetime, end: datetime) -> datetime:
        """Uniform datetime in [start, end]."""
        span = (end - start).total_seconds()
        return start + timedelta(seconds=self.random.uniform(0, span))

    def sample_with_replacement(self, values: Sequence[T], k: int) -> list[T]:
        """k independent uniform picks (duplicates possible)."""
        return [self.pick(values) for _ in range(k)]

    def __repr__(self) -> str:
        return f"RandomSource(faker={self.faker!r})"


def default_source() -> RandomSource:
    """Unseeded source used when callers don't inject one."""
    return RandomSource()


def coerce_source(rng: Any = None) -> RandomSource:
    """Accept a RandomSource, an int seed, or None."""
    if isinstance(rng, RandomSource):
        return rng
    if isinstance(rng, int):
        return RandomSource(seed=rng)
    return default_source()
