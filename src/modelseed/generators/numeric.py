"""Numeric generator with size/type-based range policy."""

import math

from modelseed.exceptions import DescriptorError
from modelseed.generators.base import BaseGenerator
from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource

INT16_MAX = 32767
INT32_MAX = 2147483647
MAX_SAFE_INTEGER = 2**53 - 1
DECIMAL_SAFE = 131072

DEFAULT_SAFE = INT16_MAX

# Type name -> safe magnitude when no size hint is given
TYPE_MAGNITUDES = {
    "smallint": INT16_MAX,
    "integer": INT32_MAX,
    "serial": INT32_MAX,
    "bigint": MAX_SAFE_INTEGER,
    "decimal": DECIMAL_SAFE,
    "numeric": DECIMAL_SAFE,
    "real": DECIMAL_SAFE,
}


def safe_magnitude(descriptor: AttributeDescriptor) -> int:
    """
    Get the default bound magnitude for a numeric descriptor.

    A size hint wins over the type name:
        size < 16        -> 32767
        16 <= size <= 32 -> 2147483647
        32 < size <= 64  -> 2**53 - 1
        anything else    -> 32767

    Args:
        descriptor: Normalized attribute descriptor

    Returns:
        Magnitude S so that the default range is [-S, S]
    """
    size = descriptor.size
    if size is not None:
        if size < 16:
            return INT16_MAX
        if size <= 32:
            return INT32_MAX
        if size <= 64:
            return MAX_SAFE_INTEGER
        return DEFAULT_SAFE

    if descriptor.type is not None:
        return TYPE_MAGNITUDES.get(descriptor.type, DEFAULT_SAFE)

    return DEFAULT_SAFE


class NumericGenerator(BaseGenerator):
    """
    Generate integers or reals within the descriptor's bounds.

    Bounds default to [-S, S] where S comes from safe_magnitude(); a lone
    min above S (or max below -S) stretches the other side to meet it. Reals
    are drawn when the type is 'float' or the float hint is set.
    """

    skips_primary_keys = True

    def generate(self, descriptor: AttributeDescriptor, rng: RandomSource) -> int | float:
        safe = safe_magnitude(descriptor)
        low, high = descriptor.min, descriptor.max

        # A single explicit bound widens the defaulted side to include it
        if low is None and high is None:
            low, high = -safe, safe
        elif low is None:
            low = min(-safe, high)
        elif high is None:
            high = max(safe, low)

        if low > high:
            raise DescriptorError(descriptor.name, f"min ({low}) is greater than max ({high})")

        if descriptor.type == "float" or descriptor.is_float:
            return rng.real(low, high)

        int_low, int_high = math.ceil(low), math.floor(high)
        if int_low > int_high:
            raise DescriptorError(
                descriptor.name, f"no integer lies between min ({low}) and max ({high})"
            )
        return rng.integer(int_low, int_high)
