"""Backend implementations for seed data persistence."""

from modelseed.backends.base import Backend
from modelseed.backends.direct import DirectBackend
from modelseed.backends.staging import StagingBackend

__all__ = ["Backend", "DirectBackend", "StagingBackend"]
