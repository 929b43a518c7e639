"""
Pydantic schemas for brand graph ingestion and insights.

Input models mirror the per-query analysis records produced upstream;
output models are what the insight queries hand to reporting consumers.
"""
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field, field_validator


# ============================================================
# Graph Vocabulary
# ============================================================

class NodeType(str, Enum):
    """Kinds of nodes in the brand graph."""
    BRAND = "BRAND"
    PRODUCT = "PRODUCT"
    COMPETITOR = "COMPETITOR"
    TOPIC = "TOPIC"
    SENTIMENT = "SENTIMENT"


class EdgeType(str, Enum):
    """Kinds of directed edges in the brand graph."""
    HAS_ATTRIBUTE = "HAS_ATTRIBUTE"     # Product/Brand/Competitor -> Topic
    COMPETES_WITH = "COMPETES_WITH"     # Product -> Competitor
    LEADS_TO = "LEADS_TO"               # Topic -> Sentiment
    MENTIONED_WITH = "MENTIONED_WITH"   # Brand -> Product


SENTIMENT_LABELS = ("POSITIVE", "NEGATIVE", "MIXED")
DEFAULT_SENTIMENT = "MIXED"

# Quote entity tag used upstream for brand quotes that don't name the brand
GENERIC_BRAND_ENTITY = "Brand"


# ============================================================
# Analysis Record Input
# ============================================================

class Quote(BaseModel):
    """A quoted excerpt, optionally attributed to an entity."""
    text: str
    entity: str | None = Field(None, description="Brand or competitor the quote is about")


class Keyword(BaseModel):
    """A keyword/topic extracted from an answer."""
    keyword: str


class SentimentLabel(BaseModel):
    """Sentiment label for one entity in one record."""
    label: str | None = None
    score: float | None = None


class RecordAnalysis(BaseModel):
    """Pre-computed analysis payload for a single query result."""
    brand_products: list[str] = Field(default_factory=list)
    brand_sentiment_label: str | None = None
    keywords: list[Keyword] = Field(default_factory=list)
    competitor_sentiments: dict[str, SentimentLabel] = Field(default_factory=dict)
    quotes: list[Quote] = Field(default_factory=list)

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> Any:
        """Accept bare strings as well as {keyword: ...} objects."""
        if value is None:
            return []
        return [{"keyword": kw} if isinstance(kw, str) else kw for kw in value]

    @field_validator("brand_products", "quotes", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("competitor_sentiments", mode="before")
    @classmethod
    def _none_as_empty_dict(cls, value: Any) -> Any:
        return {} if value is None else value

    def topics(self) -> list[str]:
        return [kw.keyword for kw in self.keywords]

    def competitor_sentiment(self, competitor: str) -> str:
        """Sentiment label for a competitor, MIXED when unknown."""
        sentiment = self.competitor_sentiments.get(competitor)
        if sentiment and sentiment.label:
            return sentiment.label
        return DEFAULT_SENTIMENT

    def brand_quotes(self, brand_name: str) -> list[str]:
        """Quotes that are generic or attributed to the brand."""
        return [
            q.text for q in self.quotes
            if not q.entity or q.entity == brand_name or q.entity == GENERIC_BRAND_ENTITY
        ]

    def competitor_quotes(self, competitor: str) -> list[str]:
        return [q.text for q in self.quotes if q.entity == competitor]


class AnalysisRecordInput(BaseModel):
    """One analysed query result plus the competitors tracked for it."""
    record_id: int
    analysis: RecordAnalysis | None = None
    competitor_names: list[str] = Field(default_factory=list)

    @staticmethod
    def cache_row_payload(row: Any, competitor_names: list[str]) -> dict:
        """
        Reshape a consolidated-analysis cache row into record input.

        Cache rows nest labels as ``sentiment.brand.label`` and
        ``sentiment.competitors.<name>.label`` and products as
        ``products.brand``. Nothing is validated here: a malformed row
        yields a payload that fails validation, so the builder can log
        and skip it like any other bad record.
        """
        row = _as_dict(row)
        sentiment = _as_dict(row.get("sentiment"))
        products = _as_dict(row.get("products"))
        return {
            "record_id": row.get("collector_result_id"),
            "analysis": {
                "brand_products": products.get("brand") or [],
                "brand_sentiment_label": _as_dict(sentiment.get("brand")).get("label"),
                "keywords": row.get("keywords") or [],
                "competitor_sentiments": sentiment.get("competitors") or {},
                "quotes": row.get("quotes") or [],
            },
            "competitor_names": list(competitor_names),
        }

    @classmethod
    def from_cache_row(cls, row: dict, competitor_names: list[str]) -> "AnalysisRecordInput":
        """Build a record from a cache row; raises ValidationError if malformed."""
        return cls.model_validate(cls.cache_row_payload(row, competitor_names))


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


# ============================================================
# Insight Output
# ============================================================

class InsightKind(str, Enum):
    """Kinds of ranked insights."""
    OPPORTUNITY_GAP = "opportunity_gap"
    BATTLEGROUND = "battleground"
    STRENGTH = "strength"


class Insight(BaseModel):
    """A ranked, evidenced finding derived from graph structure."""
    kind: InsightKind
    topic: str
    score: float
    evidence: list[str] = Field(default_factory=list)
    context: str


class QuadrantPoint(BaseModel):
    """A topic plotted on the sentiment/strength quadrant."""
    topic: str
    sentiment: int = Field(..., ge=-100, le=100)
    strength: int = Field(..., ge=0, le=100)
    narrative: str
