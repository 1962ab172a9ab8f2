"""Boolean generator."""

from modelseed.generators.base import BaseGenerator
from modelseed.models import AttributeDescriptor
from modelseed.randomness import RandomSource


class BooleanGenerator(BaseGenerator):
    """Uniformly chosen True/False."""

    def generate(self, descriptor: AttributeDescriptor, rng: RandomSource) -> bool:
        return rng.boolean()
