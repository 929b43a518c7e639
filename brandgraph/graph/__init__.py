"""
Graph module - In-memory brand graph + NetworkX analytics.

Provides:
- KnowledgeGraph: label-keyed store of typed nodes and weighted edges
- GraphBuilder: populate the store from analysis records
- NetworkX analytics (PageRank centrality, Louvain communities)
"""
from .store import KnowledgeGraph, GraphStats
from .builder import GraphBuilder
from .network_analysis import (
    CentralityStrategy,
    CommunityStrategy,
    compute_centrality,
    detect_communities,
    annotate_centrality,
    annotate_communities,
)

__all__ = [
    "KnowledgeGraph",
    "GraphStats",
    "GraphBuilder",
    "CentralityStrategy",
    "CommunityStrategy",
    "compute_centrality",
    "detect_communities",
    "annotate_centrality",
    "annotate_communities",
]
