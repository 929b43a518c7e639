"""
Insight queries over an analysed brand graph.

All queries are read-only, look at TOPIC nodes only, and assume centrality
and communities have been computed. Missing nodes or edges mean "no insight"
and produce an empty list rather than an error.
"""
import logging
import math

from ..core.schemas import Insight, InsightKind, NodeType, QuadrantPoint
from ..graph.store import KnowledgeGraph

logger = logging.getLogger(__name__)

POSITIVE = "POSITIVE"
NEGATIVE = "NEGATIVE"
GENERAL_NARRATIVE = "General"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class InsightEngine:
    """
    Ranks topics by how they connect brand, competitors and sentiment.

    Insights:
    - Opportunity gaps: topics where a competitor attracts negative sentiment
    - Battlegrounds: topics both the brand and a competitor are tied to
    - Competitor strongholds: topics where a competitor attracts positive sentiment
    - Keyword quadrant: sentiment vs. strength for every topic
    """

    def __init__(self, graph: KnowledgeGraph, limit: int = 3):
        self.graph = graph
        self.limit = limit

    def _topics(self) -> list[tuple[str, dict]]:
        return list(self.graph.for_each_node(lambda _, attrs: attrs["type"] == NodeType.TOPIC))

    def _rank(self, insights: list[Insight]) -> list[Insight]:
        return sorted(insights, key=lambda i: i.score, reverse=True)[:self.limit]

    def _sentiment_insights(
        self,
        competitor_name: str,
        sentiment: str,
        kind: InsightKind,
        context: str
    ) -> list[Insight]:
        if not self.graph.has_node(competitor_name):
            return []

        found = []
        for topic, attrs in self._topics():
            if not self.graph.has_edge(competitor_name, topic):
                continue
            score = self.graph.edge_weight(topic, sentiment) * attrs.get("centrality_score", 0.0)
            if score <= 0:
                continue
            found.append(Insight(
                kind=kind,
                topic=topic,
                score=score,
                evidence=self.graph.evidence(topic, sentiment),
                context=context.format(competitor=competitor_name, topic=topic),
            ))
        return self._rank(found)

    # --------------------------------------------------------
    # Queries
    # --------------------------------------------------------

    def get_opportunity_gaps(self, competitor_name: str) -> list[Insight]:
        """Topics where the competitor is tied to negative sentiment."""
        return self._sentiment_insights(
            competitor_name, NEGATIVE, InsightKind.OPPORTUNITY_GAP,
            "{competitor} is failing at {topic}",
        )

    def get_competitor_strongholds(self, competitor_name: str) -> list[Insight]:
        """Topics where the competitor is tied to positive sentiment."""
        return self._sentiment_insights(
            competitor_name, POSITIVE, InsightKind.STRENGTH,
            "{competitor} is winning at {topic}",
        )

    def get_battlegrounds(self, brand_name: str, competitor_name: str) -> list[Insight]:
        """Topics linked directly to both the brand and the competitor."""
        if not self.graph.has_node(brand_name) or not self.graph.has_node(competitor_name):
            return []

        found = []
        for topic, attrs in self._topics():
            if not (self.graph.has_edge(brand_name, topic) and self.graph.has_edge(competitor_name, topic)):
                continue
            contention = self.graph.edge_weight(brand_name, topic) + self.graph.edge_weight(competitor_name, topic)
            evidence = []
            for _, target in self.graph.nx_graph.out_edges(topic):
                evidence.extend(self.graph.evidence(topic, target))
            found.append(Insight(
                kind=InsightKind.BATTLEGROUND,
                topic=topic,
                score=contention * attrs.get("centrality_score", 0.0),
                evidence=evidence[:self.graph.evidence_cap],
                context=f"{brand_name} and {competitor_name} are both discussed for {topic}",
            ))
        return self._rank(found)

    def get_keyword_quadrant_data(self) -> list[QuadrantPoint]:
        """
        Sentiment (-100..100) and relative strength (0..100) for every topic.

        Strength is centrality relative to the most central topic. Not capped:
        the result feeds a scatter plot.
        """
        topics = self._topics()
        if not topics:
            return []

        max_centrality = max(attrs.get("centrality_score", 0.0) for _, attrs in topics)

        points = []
        for topic, attrs in topics:
            pos = self.graph.edge_weight(topic, POSITIVE)
            neg = self.graph.edge_weight(topic, NEGATIVE)
            sentiment = _round_half_up(100 * (pos - neg) / (pos + neg)) if pos + neg else 0

            centrality = attrs.get("centrality_score", 0.0)
            strength = _round_half_up(100 * centrality / max_centrality) if max_centrality > 0 else 0

            community_id = attrs.get("community_id")
            narrative = f"Narrative {community_id}" if community_id is not None else GENERAL_NARRATIVE

            points.append(QuadrantPoint(
                topic=topic,
                sentiment=sentiment,
                strength=strength,
                narrative=narrative,
            ))

        return sorted(points, key=lambda p: p.strength, reverse=True)
