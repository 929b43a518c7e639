"""
Insights module - ranked findings over the analysed brand graph.
"""
from .engine import InsightEngine

__all__ = ["InsightEngine"]
