"""String generator shaped by semantic subtype."""

import re

from modelseed.generators.base import BaseGenerator
from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource

DEFAULT_MIN_LENGTH = 50
DEFAULT_MAX_LENGTH = 255

_SEPARATORS = re.compile(r"[_-]")


def _strip_separators(value: str) -> str:
    return _SEPARATORS.sub("", value)


class StringGenerator(BaseGenerator):
    """
    Generate random strings.

    Shape checks are evaluated in order and only the first applies:
    enum > email > url > urlish > plain.

    - enum: one uniformly chosen literal (length bounds ignored)
    - email: "<short>@<short>.com" without '_' or '-'
    - url: "http://<short>.com" without '_' or '-'
    - urlish: "/<short>"
    - plain: the long sequence (max_length characters) unmodified

    The short sequence is min_length characters (default 50), the long one
    max_length characters (default 255).
    """

    def generate(self, descriptor: AttributeDescriptor, rng: RandomSource) -> str:
        if descriptor.enum:
            return rng.pick(descriptor.enum)

        min_length = descriptor.min_length
        if min_length is None:
            min_length = DEFAULT_MIN_LENGTH
        max_length = descriptor.max_length
        if max_length is None:
            max_length = DEFAULT_MAX_LENGTH

        long_value = rng.string(max_length)
        short_value = rng.string(min_length)

        if descriptor.type == "email" or descriptor.email:
            return _strip_separators(f"{short_value}@{short_value}.com")

        if descriptor.url:
            return _strip_separators(f"http://{short_value}.com")

        if descriptor.urlish:
            return f"/{short_value}"

        return long_value
