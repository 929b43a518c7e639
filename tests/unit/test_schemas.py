"""
Unit tests for input/output schemas and settings.
"""
import pytest
from pydantic import ValidationError

from brandgraph.core.config import AlgorithmSettings, InsightSettings, Settings
from brandgraph.core.schemas import AnalysisRecordInput, QuadrantPoint, RecordAnalysis
from brandgraph.graph.builder import GraphBuilder
from brandgraph.graph.store import KnowledgeGraph


class TestRecordAnalysis:

    def test_keywords_accept_strings(self):
        analysis = RecordAnalysis(keywords=["pricing", {"keyword": "support"}])
        assert analysis.topics() == ["pricing", "support"]

    def test_nulls_become_empty(self):
        analysis = RecordAnalysis.model_validate({
            "brand_products": None,
            "keywords": None,
            "competitor_sentiments": None,
            "quotes": None,
        })
        assert analysis.brand_products == []
        assert analysis.topics() == []
        assert analysis.competitor_sentiments == {}
        assert analysis.quotes == []

    def test_quote_filters(self):
        analysis = RecordAnalysis(quotes=[
            {"text": "generic"},
            {"text": "tagged brand", "entity": "Acme"},
            {"text": "placeholder brand", "entity": "Brand"},
            {"text": "about foo", "entity": "Foo"},
            {"text": "empty entity", "entity": ""},
        ])
        assert analysis.brand_quotes("Acme") == [
            "generic", "tagged brand", "placeholder brand", "empty entity",
        ]
        assert analysis.competitor_quotes("Foo") == ["about foo"]
        assert analysis.competitor_quotes("Bar") == []

    def test_competitor_sentiment_default(self):
        analysis = RecordAnalysis(competitor_sentiments={
            "Foo": {"label": "NEGATIVE", "score": 30},
            "Bar": {},
        })
        assert analysis.competitor_sentiment("Foo") == "NEGATIVE"
        assert analysis.competitor_sentiment("Bar") == "MIXED"
        assert analysis.competitor_sentiment("Baz") == "MIXED"


class TestCacheRows:

    def test_from_cache_row(self):
        row = {
            "collector_result_id": 17,
            "keywords": [{"keyword": "pricing"}],
            "sentiment": {
                "brand": {"label": "NEGATIVE", "score": 40},
                "competitors": {"Foo": {"label": "POSITIVE", "score": 80}},
            },
            "products": {"brand": ["Widget"], "competitors": {"Foo": ["FooPhone"]}},
            "quotes": [{"text": "cheap", "entity": "Foo"}],
        }
        record = AnalysisRecordInput.from_cache_row(row, ["Foo", "Bar"])
        assert record.record_id == 17
        assert record.competitor_names == ["Foo", "Bar"]
        assert record.analysis.brand_products == ["Widget"]
        assert record.analysis.brand_sentiment_label == "NEGATIVE"
        assert record.analysis.competitor_sentiment("Foo") == "POSITIVE"
        assert record.analysis.competitor_quotes("Foo") == ["cheap"]

    def test_sparse_cache_row(self):
        record = AnalysisRecordInput.from_cache_row(
            {"collector_result_id": 3, "sentiment": None, "products": None}, []
        )
        assert record.analysis.brand_sentiment_label is None
        assert record.analysis.brand_products == []

    def test_record_id_required(self):
        with pytest.raises(ValidationError):
            AnalysisRecordInput.model_validate({"analysis": None})

    @pytest.mark.parametrize("row", [
        {"keywords": [{"keyword": "pricing"}]},
        {"collector_result_id": 5, "quotes": [{"text": None, "entity": "Foo"}]},
        {"collector_result_id": 6, "sentiment": {"brand": "NEGATIVE"}, "products": ["Widget"]},
        "not a row",
    ])
    def test_malformed_row_payload_does_not_raise(self, row):
        payload = AnalysisRecordInput.cache_row_payload(row, ["Foo"])
        assert payload["competitor_names"] == ["Foo"]
        assert payload["analysis"]["brand_sentiment_label"] is None
        assert payload["analysis"]["brand_products"] == []

    def test_malformed_row_raises_validation_error(self):
        with pytest.raises(ValidationError):
            AnalysisRecordInput.from_cache_row({"keywords": ["pricing"]}, [])
        with pytest.raises(ValidationError):
            AnalysisRecordInput.from_cache_row(
                {"collector_result_id": 5, "quotes": [{"text": None}]}, []
            )

    def test_non_dict_brand_sentiment_is_unknown(self):
        record = AnalysisRecordInput.from_cache_row(
            {"collector_result_id": 6, "sentiment": {"brand": "NEGATIVE"}}, []
        )
        assert record.analysis.brand_sentiment_label is None

    def test_builder_skips_bad_cache_row(self):
        good = {"collector_result_id": 1, "keywords": ["pricing"],
                "sentiment": {"brand": {"label": "NEGATIVE"}}}
        bad = {"keywords": ["support"]}
        records = [AnalysisRecordInput.cache_row_payload(r, []) for r in (good, bad)]

        graph = KnowledgeGraph()
        stats = GraphBuilder(graph).build("Acme", records)

        assert stats.records_processed == 1
        assert stats.records_skipped == 1
        assert graph.has_node("pricing")
        assert not graph.has_node("support")


class TestQuadrantPoint:

    def test_bounds_enforced(self):
        with pytest.raises(ValidationError):
            QuadrantPoint(topic="pricing", sentiment=101, strength=0, narrative="General")
        with pytest.raises(ValidationError):
            QuadrantPoint(topic="pricing", sentiment=0, strength=-1, narrative="General")


class TestSettings:

    def test_defaults(self):
        s = Settings()
        assert s.algorithms.pagerank_alpha == 0.85
        assert s.algorithms.louvain_seed is None
        assert s.insights.evidence_cap == 5
        assert s.insights.insight_limit == 3
        assert s.insights.snapshot_limit == 5

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BRANDGRAPH_INSIGHT_LIMIT", "2")
        monkeypatch.setenv("BRANDGRAPH_LOUVAIN_SEED", "11")
        assert InsightSettings().insight_limit == 2
        assert AlgorithmSettings().louvain_seed == 11

    def test_field_names_accepted(self):
        assert InsightSettings(insight_limit=1).insight_limit == 1

    def test_only_algorithm_and_insight_groups(self):
        assert set(Settings.model_fields) == {"algorithms", "insights"}
