"""
NetworkX analytics for BrandGraph.

Annotates the brand graph with:
- Centrality (weighted PageRank)
- Community detection (Louvain modularity optimisation)

Both analyzers are plain callables so the service can swap in another
implementation without touching the builder or the insight queries.
"""
import logging
from typing import Protocol

import networkx as nx

from .store import KnowledgeGraph

logger = logging.getLogger(__name__)


class CentralityStrategy(Protocol):
    def __call__(self, G: nx.DiGraph) -> dict[str, float]: ...


class CommunityStrategy(Protocol):
    def __call__(self, G: nx.DiGraph) -> dict[str, int]: ...


# ── Analytics ───────────────────────────────────────────────────

PAGERANK_RETRY_FACTOR = 100


def compute_centrality(
    G: nx.DiGraph,
    alpha: float = 0.85,
    max_iter: int = 100,
    tol: float = 1e-6,
) -> dict[str, float]:
    """
    Weighted PageRank. Scores sum to ~1 across all nodes.

    If power iteration does not converge within ``max_iter``, it is retried
    once with ``max_iter * PAGERANK_RETRY_FACTOR``. If that also fails the
    scores are weighted in-degree shares instead: still summing to 1 and
    still ranking hubs first, but no longer PageRank.
    """
    if G.number_of_nodes() == 0:
        return {}

    for attempt_iter in (max_iter, max_iter * PAGERANK_RETRY_FACTOR):
        try:
            return nx.pagerank(G, alpha=alpha, max_iter=attempt_iter, tol=tol, weight="weight")
        except nx.PowerIterationFailedConvergence:
            logger.info(f"PageRank did not converge in {attempt_iter} iterations")

    logger.warning("PageRank failed to converge; centrality_score holds weighted in-degree shares, not PageRank")
    return _in_degree_shares(G)


def _in_degree_shares(G: nx.DiGraph) -> dict[str, float]:
    in_weights = dict(G.in_degree(weight="weight"))
    total = sum(in_weights.values())
    if total == 0:
        n = G.number_of_nodes()
        return {node: 1.0 / n for node in G}
    return {node: w / total for node, w in in_weights.items()}


def detect_communities(
    G: nx.DiGraph,
    resolution: float = 1.0,
    seed: int | None = None,
) -> dict[str, int]:
    """
    Detect communities using Louvain (directed modularity, edge weights).
    Falls back to weakly connected components if the algorithm fails.

    Community indices are assigned largest community first.

    Returns: dict mapping node_id → community_index
    """
    if G.number_of_nodes() == 0:
        return {}

    try:
        communities = nx.community.louvain_communities(
            G, weight="weight", resolution=resolution, seed=seed
        )
    except Exception as e:
        logger.warning(f"Louvain failed ({e}), falling back to connected components")
        communities = list(nx.weakly_connected_components(G))

    mapping = {}
    for i, community in enumerate(sorted(communities, key=len, reverse=True)):
        for node in community:
            mapping[node] = i
    return mapping


# ── Annotation ──────────────────────────────────────────────────

def annotate_centrality(graph: KnowledgeGraph, strategy: CentralityStrategy) -> dict[str, float]:
    """Run a centrality strategy and store scores on the nodes."""
    scores = strategy(graph.nx_graph)
    for node, score in scores.items():
        graph.set_node_attr(node, "centrality_score", float(score))
    return scores


def annotate_communities(graph: KnowledgeGraph, strategy: CommunityStrategy) -> dict[str, int]:
    """Run a community strategy and store ids on the nodes."""
    mapping = strategy(graph.nx_graph)
    for node, community_id in mapping.items():
        graph.set_node_attr(node, "community_id", int(community_id))
    return mapping
