"""End-to-end seeding through a host's startup signal."""

import re

import pytest

from modelseed import Host, Seeder
from modelseed.backends import StagingBackend
from modelseed.config import SeedConfig
from modelseed.seeder import CAPABILITY_NAME, START_SIGNAL

EMAIL_PATTERN = re.compile(r"^[^@]+@[^@]+\.com$")


@pytest.fixture(autouse=True)
def _no_environment(monkeypatch):
    monkeypatch.delenv("MODELSEED_ENVIRONMENT", raising=False)


def start(host_config: SeedConfig, schema, backend, iterations: int):
    host = Host()
    Seeder(host_config, rng=2024).register(host)
    host.request(CAPABILITY_NAME).set_iterations(iterations)
    return host.emit(START_SIGNAL, schema, backend)


def test_user_scenario(user_schema, staging_backend, dev_config):
    """Five users with well-formed emails, bounded ages and store-assigned ids."""
    result = start(dev_config, user_schema, staging_backend, 5)

    payloads = result.payloads["User"]
    assert len(payloads) == 5
    for payload in payloads:
        assert "id" not in payload
        assert EMAIL_PATTERN.match(payload["email"])
        assert "_" not in payload["email"]
        assert "-" not in payload["email"]
        assert 18 <= payload["age"] <= 65

    stored = staging_backend.get_data("User")
    assert [row["id"] for row in stored] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("environment", ["production", None])
def test_no_persistence_outside_development(user_schema, staging_backend, environment):
    result = start(SeedConfig(environment=environment), user_schema, staging_backend, 5)

    assert result is None
    assert staging_backend.create_calls == []
    assert staging_backend.update_calls == []


def test_junction_table_never_seeded(blog_schema, staging_backend, dev_config):
    result = start(dev_config, blog_schema, staging_backend, 3)

    assert "PostTag" not in result.payloads
    assert "PostTag" not in [name for name, _ in staging_backend.create_calls]
    assert staging_backend.get_data("PostTag") == []


def test_failed_create_skips_associations(blog_schema, failing_backend, dev_config):
    backend = failing_backend("Tag")

    result = start(dev_config, blog_schema, backend, 3)

    assert result is None
    assert backend.update_calls == []


def test_relations_point_at_created_records(blog_schema, staging_backend, dev_config):
    result = start(dev_config, blog_schema, staging_backend, 6)

    author_ids = {row["id"] for row in staging_backend.get_data("Author")}
    tag_ids = {row["id"] for row in staging_backend.get_data("Tag")}
    assert result.failed_associations == []

    for post in staging_backend.get_data("Post"):
        assert post["author"] in author_ids
        assert len(post["tags"]) == 3
        assert set(post["tags"]) <= tag_ids


def test_seeded_runs_are_reproducible(blog_schema, dev_config):
    first = start(dev_config, blog_schema, StagingBackend(), 3)
    second = start(dev_config, blog_schema, StagingBackend(), 3)

    assert first.payloads == second.payloads
    assert [o.update.value for o in first.associations] == [
        o.update.value for o in second.associations
    ]
