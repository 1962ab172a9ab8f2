"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from modelseed.backends import StagingBackend
from modelseed.config import SeedConfig
from modelseed.generators import reset_generators
from modelseed.randomness import RandomSource
from modelseed.schema import ModelDefinition, Schema


class FailingBackend(StagingBackend):
    """Staging backend whose creates fail for selected models."""

    def __init__(self, failing_models: set[str]):
        super().__init__()
        self.failing_models = failing_models
        self.create_calls: list[str] = []
        self.update_calls: list[tuple[str, dict, dict]] = []

    def create(self, model: ModelDefinition, payloads: list[dict[str, Any]]):
        self.create_calls.append(model.name)
        if model.name in self.failing_models:
            raise RuntimeError(f"insert into {model.name} failed")
        return super().create(model, payloads)

    def update(self, model: ModelDefinition, selector: dict, patch: dict) -> None:
        self.update_calls.append((model.name, selector, patch))
        super().update(model, selector, patch)


class RecordingBackend(StagingBackend):
    """Staging backend that records every call."""

    def __init__(self):
        super().__init__()
        self.create_calls: list[tuple[str, list[dict]]] = []
        self.update_calls: list[tuple[str, dict, dict]] = []

    def create(self, model: ModelDefinition, payloads: list[dict[str, Any]]):
        self.create_calls.append((model.name, [dict(p) for p in payloads]))
        return super().create(model, payloads)

    def update(self, model: ModelDefinition, selector: dict, patch: dict) -> None:
        self.update_calls.append((model.name, selector, patch))
        super().update(model, selector, patch)


@pytest.fixture(autouse=True)
def _builtin_generators():
    """Keep custom generator registrations from leaking between tests."""
    yield
    reset_generators()


@pytest.fixture
def rng() -> RandomSource:
    """Seeded randomness source for reproducible tests."""
    return RandomSource(seed=1234)


@pytest.fixture
def staging_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def dev_config() -> SeedConfig:
    return SeedConfig(environment="development")


@pytest.fixture
def user_schema() -> Schema:
    """Single model schema with an identifier, an email and a bounded age."""
    return Schema.from_dict(
        {
            "models": {
                "User": {
                    "attributes": {
                        "id": {"type": "integer", "primaryKey": True},
                        "email": {"type": "email"},
                        "age": {"type": "integer", "min": 18, "max": 65},
                    }
                }
            }
        }
    )


@pytest.fixture
def blog_schema() -> Schema:
    """
    Related models:

        Post.author -> Author (to-one)
        Post.tags   -> Tag    (to-many)
        PostTag              (junction table, never seeded)
    """
    return Schema.from_dict(
        {
            "models": {
                "Author": {
                    "attributes": {
                        "id": {"type": "integer", "primaryKey": True},
                        "name": {"type": "string", "maxLength": 20},
                        "active": "boolean",
                    }
                },
                "Post": {
                    "attributes": {
                        "id": {"type": "integer", "primaryKey": True},
                        "title": {"type": "string", "minLength": 5, "maxLength": 40},
                        "published_at": "datetime",
                        "author": {"model": "Author"},
                        "tags": {"collection": "Tag"},
                    }
                },
                "Tag": {
                    "attributes": {
                        "id": {"type": "integer", "primaryKey": True},
                        "label": {"type": "string", "enum": ["news", "howto", "opinion"]},
                    }
                },
                "PostTag": {
                    "meta": {"junctionTable": True},
                    "attributes": {
                        "post": {"model": "Post"},
                        "tag": {"model": "Tag"},
                    },
                },
            }
        }
    )


@pytest.fixture
def failing_backend():
    """Factory: failing_backend("Tag", ...) -> FailingBackend."""

    def make(*models: str) -> FailingBackend:
        return FailingBackend(set(models))

    return make
