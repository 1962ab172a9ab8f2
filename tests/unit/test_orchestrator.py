"""Tests for SeedOrchestrator."""

import logging

import pytest

from modelseed.exceptions import DescriptorError, PersistenceError
from modelseed.orchestrator import SeedOrchestrator
from modelseed.schema import Schema


class TestBuildPayloads:
    """Tests for SeedOrchestrator.build_payloads()."""

    @pytest.mark.parametrize("iterations", [1, 3, 20])
    def test_exactly_n_payloads_per_model(self, blog_schema, staging_backend, rng, iterations):
        payloads = SeedOrchestrator(staging_backend, rng).build_payloads(blog_schema, iterations)

        assert set(payloads) == {"Author", "Post", "Tag"}
        assert all(len(batch) == iterations for batch in payloads.values())

    def test_junction_models_get_nothing(self, blog_schema, staging_backend, rng) -> None:
        payloads = SeedOrchestrator(staging_backend, rng).build_payloads(blog_schema, 2)

        assert "PostTag" not in payloads

    def test_payload_contents(self, blog_schema, staging_backend, rng) -> None:
        payloads = SeedOrchestrator(staging_backend, rng).build_payloads(blog_schema, 2)

        for post in payloads["Post"]:
            assert set(post) == {"title", "published_at"}
            assert len(post["title"]) == 40
        for tag in payloads["Tag"]:
            assert tag["label"] in {"news", "howto", "opinion"}

    @pytest.mark.parametrize("iterations", [0, -1, 2.5, "3", True])
    def test_invalid_iterations(self, blog_schema, staging_backend, rng, iterations) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            SeedOrchestrator(staging_backend, rng).build_payloads(blog_schema, iterations)


class TestPersist:
    """Tests for SeedOrchestrator.persist()."""

    def test_one_create_call_per_model(self, blog_schema, staging_backend, rng) -> None:
        orchestrator = SeedOrchestrator(staging_backend, rng, max_workers=3)
        payloads = orchestrator.build_payloads(blog_schema, 4)

        created = orchestrator.persist(blog_schema, payloads)

        assert sorted(name for name, _ in staging_backend.create_calls) == [
            "Author",
            "Post",
            "Tag",
        ]
        assert {name: len(records) for name, records in created.items()} == {
            "Author": 4,
            "Post": 4,
            "Tag": 4,
        }

    def test_failure_raises_after_all_creates(self, blog_schema, failing_backend, rng) -> None:
        backend = failing_backend("Post")
        orchestrator = SeedOrchestrator(backend, rng)
        payloads = orchestrator.build_payloads(blog_schema, 2)

        with pytest.raises(PersistenceError) as exc_info:
            orchestrator.persist(blog_schema, payloads)

        assert exc_info.value.model == "Post"
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert sorted(backend.create_calls) == ["Author", "Post", "Tag"]
        # Successful creates are kept
        assert len(backend.get_data("Author")) == 2
        assert len(backend.get_data("Tag")) == 2

    def test_first_failure_in_schema_order(self, blog_schema, failing_backend, rng) -> None:
        backend = failing_backend("Tag", "Author")
        orchestrator = SeedOrchestrator(backend, rng)

        with pytest.raises(PersistenceError) as exc_info:
            orchestrator.persist(blog_schema, orchestrator.build_payloads(blog_schema, 1))

        assert exc_info.value.model == "Author"

    def test_empty(self, staging_backend, rng) -> None:
        assert SeedOrchestrator(staging_backend, rng).persist(Schema(), {}) == {}


class TestRun:
    """Tests for SeedOrchestrator.run()."""

    def test_full_run(self, blog_schema, staging_backend, rng) -> None:
        result = SeedOrchestrator(staging_backend, rng).run(blog_schema, 3)

        assert result.counts() == {"Author": 3, "Post": 3, "Tag": 3}
        assert len(result.associations) == 3 * 2
        assert result.failed_associations == []
        assert all(len(batch) == 3 for batch in result.payloads.values())

    def test_persistence_failure_skips_associations(
        self, blog_schema, failing_backend, rng
    ) -> None:
        """A failed create means no update call is ever issued."""
        backend = failing_backend("Tag")

        with pytest.raises(PersistenceError):
            SeedOrchestrator(backend, rng).run(blog_schema, 2)

        assert backend.update_calls == []

    def test_descriptor_error_before_any_create(self, staging_backend, rng) -> None:
        schema = Schema.from_dict(
            {"models": {"Bad": {"attributes": {"n": {"type": "integer", "min": 5, "max": 1}}}}}
        )

        with pytest.raises(DescriptorError):
            SeedOrchestrator(staging_backend, rng).run(schema, 1)

        assert staging_backend.create_calls == []

    def test_logs_generation_summary(self, user_schema, staging_backend, rng, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="modelseed.orchestrator"):
            SeedOrchestrator(staging_backend, rng).run(user_schema, 2)

        assert "Generated 2 payloads for each of 1 models" in caplog.text
