"""
Central configuration management for BrandGraph.

Loads settings from environment variables and provides typed access.
"""
from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class AlgorithmSettings(BaseSettings):
    """Graph algorithm configuration.

    PageRank uses the standard damping formulation. Hitting the iteration
    cap triggers one retry with a larger cap before falling back to
    weighted in-degree shares.
    """
    pagerank_alpha: float = Field(default=0.85, alias="BRANDGRAPH_PAGERANK_ALPHA")
    pagerank_max_iter: int = Field(default=100, alias="BRANDGRAPH_PAGERANK_MAX_ITER")
    pagerank_tol: float = Field(default=1e-6, alias="BRANDGRAPH_PAGERANK_TOL")
    louvain_resolution: float = Field(default=1.0, alias="BRANDGRAPH_LOUVAIN_RESOLUTION")
    louvain_seed: int | None = Field(
        default=None,
        alias="BRANDGRAPH_LOUVAIN_SEED",
        description="Fix to make community ids reproducible between runs"
    )

    class Config:
        populate_by_name = True


class InsightSettings(BaseSettings):
    """Insight query limits."""
    evidence_cap: int = Field(default=5, alias="BRANDGRAPH_EVIDENCE_CAP")
    insight_limit: int = Field(default=3, alias="BRANDGRAPH_INSIGHT_LIMIT")
    snapshot_limit: int = Field(default=5, alias="BRANDGRAPH_SNAPSHOT_LIMIT")

    class Config:
        populate_by_name = True


class Settings(BaseSettings):
    """Main settings aggregator."""
    algorithms: AlgorithmSettings = Field(default_factory=AlgorithmSettings)
    insights: InsightSettings = Field(default_factory=InsightSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function
def load_dotenv_if_exists():
    """Load .env file from the project root if it exists."""
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
