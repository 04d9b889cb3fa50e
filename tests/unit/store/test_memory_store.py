"""Unit tests for MemoryStore."""

from datetime import date, datetime, timezone

import pytest

from spacebio.exceptions import ValidationError
from spacebio.models.experiment import ExperimentCreate
from spacebio.models.insight import AiInsightCreate
from spacebio.models.publication import PublicationCreate, PublicationUpdate
from spacebio.models.search import SearchFilters
from spacebio.store import memory_store


class TestCreatePublication:
    def test_assigns_id_and_timestamps(self, store):
        pub = store.create_publication(PublicationCreate(title="Plant roots in orbit"))

        assert pub.id
        assert pub.created_at == pub.updated_at
        assert pub.created_at.tzinfo is not None

    def test_ids_are_unique(self, store):
        first = store.create_publication(PublicationCreate(title="A"))
        second = store.create_publication(PublicationCreate(title="A"))

        assert first.id != second.id

    def test_defaults_applied(self, store):
        pub = store.create_publication(PublicationCreate(title="Minimal"))

        assert pub.citation_count == 0
        assert pub.view_count == 0
        assert pub.is_processed is False
        assert pub.ai_summary is None
        assert pub.mission is None

    def test_list_fields_never_null_after_get(self, store):
        """Omitted or null list inputs come back as empty lists."""
        data = PublicationCreate.model_validate(
            {"title": "Sparse record", "authors": None, "experimentTypes": None}
        )
        created = store.create_publication(data)

        fetched = store.get_publication(created.id)

        assert fetched is not None
        for field in (
            "authors",
            "keywords",
            "experiment_types",
            "organisms",
            "space_conditions",
        ):
            assert getattr(fetched, field) == []


class TestGetPublication:
    def test_unknown_id_returns_none(self, store):
        assert store.get_publication("does-not-exist") is None

    def test_returns_stored_record(self, store):
        created = store.create_publication(PublicationCreate(title="Stored"))

        assert store.get_publication(created.id) == created


class TestRecordsAreOwnedByStore:
    """Records handed out by the store never alias the stored ones."""

    def test_mutating_fetched_publication_leaves_store_unchanged(self, store):
        created = store.create_publication(
            PublicationCreate(title="Owned", keywords=["a"])
        )

        fetched = store.get_publication(created.id)
        fetched.keywords.append("leak")
        fetched.title = "mutated"

        stored = store.get_publication(created.id)
        assert stored.keywords == ["a"]
        assert stored.title == "Owned"
        assert stored.updated_at == created.updated_at

    def test_mutating_created_or_listed_publication(self, store):
        created = store.create_publication(
            PublicationCreate(title="Owned", organisms=["Arabidopsis"])
        )
        created.organisms.append("E. coli")
        store.list_publications()[0].organisms.clear()

        assert store.get_publication(created.id).organisms == ["Arabidopsis"]

    def test_mutating_updated_publication(self, store):
        created = store.create_publication(PublicationCreate(title="Owned"))
        updated = store.update_publication(created.id, {"keywords": ["x"]})

        updated.keywords.append("y")

        assert store.get_publication(created.id).keywords == ["x"]

    def test_mutating_experiments_and_insights(self, store):
        exp = store.create_experiment(
            ExperimentCreate(name="Veggie", type="Plant Growth", status="active")
        )
        store.get_experiment(exp.id).status = "completed"
        store.list_experiments()[0].organisms.append("Arabidopsis")

        insight = store.create_insight(
            AiInsightCreate(type="trend", title="T", description="D")
        )
        store.list_insights()[0].related_publications.append("p1")

        assert store.get_experiment(exp.id).status == "active"
        assert store.get_experiment(exp.id).organisms == []
        assert store.get_stats().active_experiments == 1
        assert store.list_insights()[0].related_publications == []
        assert insight.related_publications == []


class TestUpdatePublication:
    def test_merges_only_provided_fields(self, store):
        created = store.create_publication(
            PublicationCreate(
                title="Original",
                abstract="Keep me",
                keywords=["a", "b"],
                mission="ISS",
            )
        )

        updated = store.update_publication(
            created.id, PublicationUpdate(ai_summary="Short summary")
        )

        assert updated is not None
        assert updated.ai_summary == "Short summary"
        assert updated.title == "Original"
        assert updated.abstract == "Keep me"
        assert updated.keywords == ["a", "b"]
        assert updated.mission == "ISS"
        assert updated.id == created.id
        assert updated.created_at == created.created_at

    def test_list_value_replaces_instead_of_appending(self, store):
        created = store.create_publication(
            PublicationCreate(title="Tags", organisms=["Arabidopsis", "E. coli"])
        )

        updated = store.update_publication(created.id, {"organisms": ["Mouse tissue"]})

        assert updated.organisms == ["Mouse tissue"]

    def test_refreshes_updated_at(self, store):
        created = store.create_publication(PublicationCreate(title="Timestamps"))

        updated = store.update_publication(created.id, {"viewCount": 3})

        assert updated.view_count == 3
        assert updated.updated_at >= created.updated_at

    def test_update_is_visible_to_next_read(self, store):
        created = store.create_publication(PublicationCreate(title="Visible"))
        store.update_publication(created.id, {"is_processed": True})

        assert store.get_publication(created.id).is_processed is True

    def test_explicit_null_list_becomes_empty(self, store):
        created = store.create_publication(
            PublicationCreate(title="Nulls", keywords=["x"])
        )

        updated = store.update_publication(created.id, {"keywords": None})

        assert updated.keywords == []

    @pytest.mark.parametrize(
        "updates",
        [{"title": None}, {"title": ""}, {"viewCount": -1}, {"isProcessed": None}],
    )
    def test_malformed_update_rejected_and_record_kept(self, store, updates):
        created = store.create_publication(PublicationCreate(title="Keep me"))

        with pytest.raises(ValidationError):
            store.update_publication(created.id, updates)

        assert store.get_publication(created.id) == created

    def test_unknown_id_returns_none_and_creates_nothing(self, store):
        result = store.update_publication("missing", {"title": "Ghost"})

        assert result is None
        assert store.get_publication("missing") is None
        assert store.list_publications() == []
        assert store.get_stats().total_publications == 0


class TestListPublications:
    def test_default_order_newest_first_undated_last(self, store):
        """Dates 2020, 2022 and none come back as [2022, 2020, none]."""
        p2020 = store.create_publication(
            PublicationCreate(title="2020", published_date=date(2020, 5, 1))
        )
        undated = store.create_publication(PublicationCreate(title="No date"))
        p2022 = store.create_publication(
            PublicationCreate(title="2022", published_date=date(2022, 5, 1))
        )

        result = store.list_publications()

        assert [p.id for p in result] == [p2022.id, p2020.id, undated.id]

    def test_filters_are_applied(self, populated_store):
        result = populated_store.list_publications(SearchFilters(mission="ISS"))

        assert len(result) == 2
        assert all(p.mission == "ISS" for p in result)

    def test_search_publications_matches_query(self, populated_store):
        result = populated_store.search_publications("COSMIC")

        assert [p.title for p in result] == [
            "Cosmic radiation damage in human tissue models"
        ]


class TestExperiments:
    def test_create_and_get(self, store):
        exp = store.create_experiment(
            ExperimentCreate(name="Veggie", type="Plant Growth", status="active")
        )

        assert store.get_experiment(exp.id) == exp
        assert exp.organisms == []
        assert exp.publication_ids == []

    def test_get_unknown_returns_none(self, store):
        assert store.get_experiment("nope") is None

    def test_list_by_start_date_desc(self, store):
        old = store.create_experiment(
            ExperimentCreate(
                name="Old", type="Cell Biology", status="completed",
                start_date=date(2019, 1, 1),
            )
        )
        undated = store.create_experiment(
            ExperimentCreate(name="Planned", type="Microbiology", status="planned")
        )
        new = store.create_experiment(
            ExperimentCreate(
                name="New", type="Cell Biology", status="active",
                start_date=date(2024, 1, 1),
            )
        )

        assert [e.id for e in store.list_experiments()] == [new.id, old.id, undated.id]


class TestInsights:
    def test_create_insight_clamps_confidence(self, store):
        insight = store.create_insight(
            AiInsightCreate(
                type="trend", title="T", description="D", confidence=250
            )
        )

        assert insight.confidence == 100
        assert insight.related_publications == []
        assert insight.metadata == {}

    def test_list_insights_newest_first(self, store, monkeypatch):
        stamps = iter(
            [
                datetime(2025, 1, 1, tzinfo=timezone.utc),
                datetime(2025, 1, 2, tzinfo=timezone.utc),
            ]
        )
        monkeypatch.setattr(memory_store, "_now", lambda: next(stamps))

        first = store.create_insight(
            AiInsightCreate(type="trend", title="First", description="")
        )
        second = store.create_insight(
            AiInsightCreate(type="trend", title="Second", description="")
        )

        assert [i.id for i in store.list_insights()] == [second.id, first.id]

    def test_insight_type_is_restricted(self, store):
        with pytest.raises(ValueError):
            AiInsightCreate(type="rumor", title="T", description="D")


class TestAggregatesAreLive:
    def test_stats_reflect_every_mutation(self, store):
        assert store.get_stats().total_publications == 0

        store.create_publication(
            PublicationCreate(title="One", experiment_types=["Cell Biology"])
        )
        store.create_experiment(
            ExperimentCreate(name="E", type="Cell Biology", status="active")
        )
        store.create_insight(AiInsightCreate(type="trend", title="I", description=""))

        stats = store.get_stats()

        assert stats.total_publications == 1
        assert stats.research_areas == 1
        assert stats.active_experiments == 1
        assert stats.ai_insights == 1

    def test_filter_options_use_unfiltered_store(self, populated_store):
        populated_store.list_publications(SearchFilters(mission="ISS"))

        options = populated_store.get_filter_options()

        counts = {o.value: o.count for o in options.experiment_types}
        assert counts["Plant Growth"] == 2
        assert counts["Tissue Engineering"] == 2
