"""
BrandGraph - Brand intelligence knowledge graph

Turns per-query analysis records into a weighted, typed graph and mines it for
competitive insights:
- Entity graph of brand, products, competitors, topics and sentiment
- PageRank centrality and Louvain community detection (NetworkX)
- Opportunity gaps, battlegrounds, competitor strongholds
- Keyword sentiment/strength quadrant

Modules:
    core        - Configuration, schemas
    graph       - Graph store, builder, network analytics
    insights    - Insight queries over the annotated graph
    service     - Build -> analyze -> query facade
"""

__version__ = "0.3.0"
