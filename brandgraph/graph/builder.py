"""
Graph builder for BrandGraph.

Turns a batch of analysis records into graph state.

Node Types:
- Brand: the analysed brand (one per build)
- Product: brand products mentioned in a record
- Competitor: competitors tracked for a record
- Topic: keywords extracted from a record
- Sentiment: POSITIVE / NEGATIVE / MIXED attractor nodes

Relationship Types:
- MENTIONED_WITH: Brand -> Product
- HAS_ATTRIBUTE: Product -> Topic (Brand -> Topic when a record has no products),
  Competitor -> Topic
- LEADS_TO: Topic -> Sentiment, carrying evidence quotes

Every co-occurrence within a record counts once towards the edge weight.
"""
import logging
from typing import Iterable

from pydantic import ValidationError

from ..core.schemas import (
    AnalysisRecordInput,
    EdgeType,
    NodeType,
    SENTIMENT_LABELS,
    DEFAULT_SENTIMENT,
)
from .store import GraphStats, KnowledgeGraph

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Populates a KnowledgeGraph from analysis records."""

    def __init__(self, graph: KnowledgeGraph):
        self.graph = graph

    def build(
        self,
        brand_name: str,
        records: Iterable[AnalysisRecordInput | dict]
    ) -> GraphStats:
        """
        Rebuild the graph from scratch.

        Args:
            brand_name: Brand the records were analysed for
            records: Analysis records, as models or plain dicts

        Returns:
            Statistics for the built graph
        """
        records = list(records)
        self.graph.clear()
        logger.info(f"Building graph for {brand_name} from {len(records)} records...")

        self.graph.add_node(brand_name, NodeType.BRAND)
        for label in SENTIMENT_LABELS:
            self.graph.add_node(label, NodeType.SENTIMENT)

        processed = skipped = 0
        for raw in records:
            record = self._coerce(raw)
            if record is None or record.analysis is None:
                record_id = record.record_id if record else "?"
                logger.warning(f"Skipping record {record_id}: no analysis payload")
                skipped += 1
                continue
            self.add_record(brand_name, record)
            processed += 1

        stats = self.graph.stats()
        stats.records_processed = processed
        stats.records_skipped = skipped
        logger.info(f"Graph built: {stats.node_count} nodes, {stats.edge_count} edges")
        return stats

    def add_record(self, brand_name: str, record: AnalysisRecordInput):
        """Fold a single record into the graph."""
        analysis = record.analysis
        record_id = record.record_id
        graph = self.graph

        # Products
        products = [p for p in analysis.brand_products if p]
        for product in products:
            graph.add_node(product, NodeType.PRODUCT)
            graph.upsert_edge(brand_name, product, EdgeType.MENTIONED_WITH, record_id)

        # Topics, routed to the brand's sentiment for this record
        sentiment_node = analysis.brand_sentiment_label or DEFAULT_SENTIMENT
        brand_quotes = analysis.brand_quotes(brand_name)
        topics = analysis.topics()

        for topic in topics:
            graph.add_node(topic, NodeType.TOPIC)
            if products:
                for product in products:
                    graph.upsert_edge(product, topic, EdgeType.HAS_ATTRIBUTE, record_id)
            else:
                graph.upsert_edge(brand_name, topic, EdgeType.HAS_ATTRIBUTE, record_id)
            graph.upsert_edge(topic, sentiment_node, EdgeType.LEADS_TO, record_id, brand_quotes)

        # Competitors co-occurring with the same topics
        for competitor in record.competitor_names:
            if not competitor:
                continue
            graph.add_node(competitor, NodeType.COMPETITOR)
            competitor_sentiment = analysis.competitor_sentiment(competitor)
            competitor_quotes = analysis.competitor_quotes(competitor)

            for topic in topics:
                graph.upsert_edge(competitor, topic, EdgeType.HAS_ATTRIBUTE, record_id)
                graph.upsert_edge(topic, competitor_sentiment, EdgeType.LEADS_TO, record_id, competitor_quotes)

    def _coerce(self, raw: AnalysisRecordInput | dict) -> AnalysisRecordInput | None:
        if isinstance(raw, AnalysisRecordInput):
            return raw
        try:
            return AnalysisRecordInput.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping malformed record: {e.error_count()} validation error(s)")
            return None
