"""
Core module - Configuration and schemas.
"""
from .config import Settings, get_settings
from .schemas import (
    NodeType,
    EdgeType,
    Quote,
    Keyword,
    SentimentLabel,
    RecordAnalysis,
    AnalysisRecordInput,
    InsightKind,
    Insight,
    QuadrantPoint,
)

__all__ = [
    "Settings",
    "get_settings",
    "NodeType",
    "EdgeType",
    "Quote",
    "Keyword",
    "SentimentLabel",
    "RecordAnalysis",
    "AnalysisRecordInput",
    "InsightKind",
    "Insight",
    "QuadrantPoint",
]
