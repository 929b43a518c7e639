"""
Brand graph service: build -> analyze -> query.

Each service instance owns its own graph, so concurrent analyses for
different brands need separate instances.

Example:
    service = BrandGraphService()
    snapshot = service.analyze("Acme", ["Foo", "Bar"], records)
    print(snapshot.to_dict())
"""
import logging
import time
from dataclasses import dataclass, field
from functools import partial
from typing import Iterable

from .core.config import Settings, get_settings
from .core.schemas import AnalysisRecordInput, Insight, QuadrantPoint
from .graph.builder import GraphBuilder
from .graph.network_analysis import (
    CentralityStrategy,
    CommunityStrategy,
    annotate_centrality,
    annotate_communities,
    compute_centrality,
    detect_communities,
)
from .graph.store import GraphStats, KnowledgeGraph
from .insights.engine import InsightEngine

logger = logging.getLogger(__name__)


@dataclass
class GraphSnapshot:
    """All insights from one analytical run."""
    brand_name: str
    opportunity_gaps: list[Insight] = field(default_factory=list)
    battlegrounds: list[Insight] = field(default_factory=list)
    strongholds: list[Insight] = field(default_factory=list)
    keyword_quadrant_data: list[QuadrantPoint] = field(default_factory=list)
    stats: GraphStats = field(default_factory=GraphStats)

    def summary(self, limit: int = 5) -> dict[str, list[Insight]]:
        """First ``limit`` insights of each kind, as handed to report consumers."""
        return {
            "opportunity_gaps": self.opportunity_gaps[:limit],
            "battlegrounds": self.battlegrounds[:limit],
            "competitor_strongholds": self.strongholds[:limit],
        }

    def to_dict(self) -> dict:
        return {
            "brand_name": self.brand_name,
            "opportunity_gaps": [i.model_dump(mode="json") for i in self.opportunity_gaps],
            "battlegrounds": [i.model_dump(mode="json") for i in self.battlegrounds],
            "strongholds": [i.model_dump(mode="json") for i in self.strongholds],
            "keyword_quadrant_data": [p.model_dump(mode="json") for p in self.keyword_quadrant_data],
            "stats": self.stats.to_dict(),
        }


class BrandGraphService:
    """
    Builds the brand graph, runs the analyzers and answers insight queries.

    Args:
        settings: Configuration (defaults to cached environment settings)
        centrality: Centrality strategy, weighted PageRank by default
        communities: Community strategy, Louvain by default
    """

    def __init__(
        self,
        settings: Settings | None = None,
        centrality: CentralityStrategy | None = None,
        communities: CommunityStrategy | None = None
    ):
        self.settings = settings or get_settings()
        algo = self.settings.algorithms

        self.graph = KnowledgeGraph(evidence_cap=self.settings.insights.evidence_cap)
        self.builder = GraphBuilder(self.graph)
        self.insights = InsightEngine(self.graph, limit=self.settings.insights.insight_limit)

        self.centrality = centrality or partial(
            compute_centrality,
            alpha=algo.pagerank_alpha,
            max_iter=algo.pagerank_max_iter,
            tol=algo.pagerank_tol,
        )
        self.communities = communities or partial(
            detect_communities,
            resolution=algo.louvain_resolution,
            seed=algo.louvain_seed,
        )
        self._analyzed = False
        self._stats = GraphStats()

    def build(self, brand_name: str, records: Iterable[AnalysisRecordInput | dict]) -> GraphStats:
        """Rebuild the graph in place from a batch of records."""
        self._analyzed = False
        self._stats = self.builder.build(brand_name, records)
        return self._stats

    def run_algorithms(self):
        """Compute and store centrality and community annotations."""
        logger.info("Running PageRank...")
        annotate_centrality(self.graph, self.centrality)
        logger.info("Running Louvain community detection...")
        mapping = annotate_communities(self.graph, self.communities)
        logger.debug(f"Found {len(set(mapping.values()))} communities")
        self._analyzed = True

    def stats(self) -> GraphStats:
        return self._stats

    def _check_analyzed(self, query: str):
        if not self._analyzed:
            logger.warning(f"{query} called before run_algorithms(); centrality scores are all zero")

    # --------------------------------------------------------
    # Queries
    # --------------------------------------------------------

    def get_opportunity_gaps(self, competitor_name: str) -> list[Insight]:
        self._check_analyzed("get_opportunity_gaps")
        return self.insights.get_opportunity_gaps(competitor_name)

    def get_battlegrounds(self, brand_name: str, competitor_name: str) -> list[Insight]:
        self._check_analyzed("get_battlegrounds")
        return self.insights.get_battlegrounds(brand_name, competitor_name)

    def get_competitor_strongholds(self, competitor_name: str) -> list[Insight]:
        self._check_analyzed("get_competitor_strongholds")
        return self.insights.get_competitor_strongholds(competitor_name)

    def get_keyword_quadrant_data(self) -> list[QuadrantPoint]:
        self._check_analyzed("get_keyword_quadrant_data")
        return self.insights.get_keyword_quadrant_data()

    # --------------------------------------------------------
    # Full run
    # --------------------------------------------------------

    def analyze(
        self,
        brand_name: str,
        competitor_names: list[str],
        records: Iterable[AnalysisRecordInput | dict]
    ) -> GraphSnapshot:
        """
        Build, analyse and collect insights for every competitor.

        Returns:
            GraphSnapshot with per-competitor insights concatenated in
            competitor order
        """
        start = time.time()
        stats = self.build(brand_name, records)
        self.run_algorithms()

        snapshot = GraphSnapshot(brand_name=brand_name, stats=stats)
        for competitor in competitor_names:
            snapshot.opportunity_gaps.extend(self.get_opportunity_gaps(competitor))
            snapshot.battlegrounds.extend(self.get_battlegrounds(brand_name, competitor))
            snapshot.strongholds.extend(self.get_competitor_strongholds(competitor))
        snapshot.keyword_quadrant_data = self.get_keyword_quadrant_data()

        logger.info(
            f"Graph analysis for {brand_name} completed in {time.time() - start:.2f}s: "
            f"{len(snapshot.opportunity_gaps)} gaps, {len(snapshot.battlegrounds)} battlegrounds, "
            f"{len(snapshot.strongholds)} strongholds"
        )
        return snapshot
