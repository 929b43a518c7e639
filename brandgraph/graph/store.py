"""
In-memory graph store for BrandGraph.

A directed, simple, self-loop-free NetworkX graph keyed by node label.

Node attributes:
- type: NodeType
- label: display string (same as the key)
- centrality_score: PageRank score, 0.0 until analysed
- community_id: Louvain community, None until analysed

Edge attributes:
- type: EdgeType
- weight: co-occurrence count
- evidence_quotes: most recent quotes supporting the edge
- source_record_id: record that first created the edge

Mutations that reference unknown nodes or edges are silent no-ops.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

import networkx as nx

from ..core.schemas import NodeType, EdgeType

logger = logging.getLogger(__name__)

DEFAULT_EVIDENCE_CAP = 5


@dataclass
class GraphStats:
    """Statistics about the graph."""
    node_counts: dict[str, int] = field(default_factory=dict)
    edge_count: int = 0
    records_processed: int = 0
    records_skipped: int = 0

    @property
    def node_count(self) -> int:
        return sum(self.node_counts.values())

    def to_dict(self) -> dict:
        return {
            "nodes": self.node_count,
            "edges": self.edge_count,
            "by_type": dict(self.node_counts),
            "records_processed": self.records_processed,
            "records_skipped": self.records_skipped,
        }


class KnowledgeGraph:
    """
    Label-keyed directed graph with typed nodes and weighted, evidenced edges.

    Each instance is independent; analyses for different brands must use
    separate instances.
    """

    def __init__(self, evidence_cap: int = DEFAULT_EVIDENCE_CAP):
        self._graph = nx.DiGraph()
        self.evidence_cap = evidence_cap

    @property
    def nx_graph(self) -> nx.DiGraph:
        """Underlying NetworkX graph, for the analyzers."""
        return self._graph

    def clear(self):
        self._graph.clear()

    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    # --------------------------------------------------------
    # Nodes
    # --------------------------------------------------------

    def has_node(self, label: str) -> bool:
        return bool(label) and self._graph.has_node(label)

    def add_node(self, label: str, node_type: NodeType) -> bool:
        """
        Insert a node unless one with the same label exists.

        Labels are global across node types: a product and a topic with
        the same name share one node, and the first type seen wins.

        Returns:
            True if a node was created
        """
        if not label:
            return False
        if self._graph.has_node(label):
            existing = self._graph.nodes[label]["type"]
            if existing != node_type:
                logger.debug(f"Label collision: '{label}' is {existing.value}, not re-typed as {node_type.value}")
            return False
        self._graph.add_node(
            label,
            type=node_type,
            label=label,
            centrality_score=0.0,
            community_id=None,
        )
        return True

    def get_node_attr(self, label: str, name: str, default: Any = None) -> Any:
        if not self.has_node(label):
            return default
        return self._graph.nodes[label].get(name, default)

    def set_node_attr(self, label: str, name: str, value: Any):
        if self.has_node(label):
            self._graph.nodes[label][name] = value

    def for_each_node(
        self,
        predicate: Callable[[str, dict], bool] | None = None
    ) -> Iterator[tuple[str, dict]]:
        """Yield (label, attributes) for nodes matching the predicate."""
        for label, attrs in self._graph.nodes(data=True):
            if predicate is None or predicate(label, attrs):
                yield label, attrs

    def nodes_of_type(self, node_type: NodeType) -> list[str]:
        return [label for label, _ in self.for_each_node(lambda _, a: a["type"] == node_type)]

    # --------------------------------------------------------
    # Edges
    # --------------------------------------------------------

    def has_edge(self, source: str, target: str) -> bool:
        return bool(source) and bool(target) and self._graph.has_edge(source, target)

    def add_edge(
        self,
        source: str,
        target: str,
        edge_type: EdgeType,
        weight: int = 1,
        evidence: Iterable[str] = (),
        source_record_id: int | None = None
    ) -> bool:
        """
        Create an edge between two existing nodes.

        Self-loops, unknown endpoints and already-present edges are ignored.

        Returns:
            True if an edge was created
        """
        if not source or not target or source == target:
            return False
        if not self._graph.has_node(source) or not self._graph.has_node(target):
            return False
        if self._graph.has_edge(source, target):
            return False

        quotes = list(evidence)
        self._graph.add_edge(
            source,
            target,
            type=edge_type,
            weight=weight,
            evidence_quotes=quotes[-self.evidence_cap:] if quotes else [],
            source_record_id=source_record_id,
        )
        return True

    def increment_edge_weight(self, source: str, target: str, delta: int = 1):
        if self.has_edge(source, target):
            data = self._graph.edges[source, target]
            data["weight"] = data.get("weight", 0) + delta

    def append_evidence(
        self,
        source: str,
        target: str,
        quotes: Iterable[str],
        cap: int | None = None
    ):
        """Append quotes to an edge, keeping only the most recent ``cap``."""
        if not self.has_edge(source, target):
            return
        quotes = list(quotes)
        if not quotes:
            return
        cap = self.evidence_cap if cap is None else cap
        data = self._graph.edges[source, target]
        merged = list(data.get("evidence_quotes") or []) + quotes
        data["evidence_quotes"] = merged[-cap:]

    def upsert_edge(
        self,
        source: str,
        target: str,
        edge_type: EdgeType,
        source_record_id: int | None = None,
        quotes: Iterable[str] = ()
    ) -> bool:
        """
        Ensure an edge exists, counting one co-occurrence.

        A new edge starts at weight 1 and remembers the creating record.
        An existing edge gets weight + 1 and the quotes merged in; its type
        and source record are left untouched.

        Returns:
            True if the edge exists after the call
        """
        quotes = list(quotes)
        if self.has_edge(source, target):
            self.increment_edge_weight(source, target, 1)
            self.append_evidence(source, target, quotes)
            return True
        return self.add_edge(
            source, target, edge_type,
            weight=1, evidence=quotes, source_record_id=source_record_id,
        )

    def get_edge_attr(self, source: str, target: str, name: str, default: Any = None) -> Any:
        if not self.has_edge(source, target):
            return default
        return self._graph.edges[source, target].get(name, default)

    def edge_weight(self, source: str, target: str) -> int:
        """Weight of source -> target, 0 when the edge is absent."""
        return self.get_edge_attr(source, target, "weight", 0) or 0

    def evidence(self, source: str, target: str) -> list[str]:
        return list(self.get_edge_attr(source, target, "evidence_quotes", None) or [])

    # --------------------------------------------------------
    # Statistics
    # --------------------------------------------------------

    def stats(self) -> GraphStats:
        counts = Counter(attrs["type"].value for _, attrs in self._graph.nodes(data=True))
        return GraphStats(
            node_counts={t.value: counts.get(t.value, 0) for t in NodeType},
            edge_count=self._graph.number_of_edges(),
        )
