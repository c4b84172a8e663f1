"""Configuration models."""

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..models.puzzle import KNOWN_CATEGORIES


class RankingConfig(BaseModel):
    """Ranking configuration."""

    category_weight: float = Field(0.5, ge=0.0, le=1.0)
    difficulty_weight: float = Field(0.3, ge=0.0, le=1.0)
    diversity_weight: float = Field(0.1, ge=0.0, le=1.0)
    exploration_weight: float = Field(0.1, ge=0.0, le=1.0)
    completion_penalty: float = Field(
        0.3, ge=0.0, le=1.0, description="Score multiplier for already completed puzzles"
    )
    band_threshold: float = Field(
        0.1, gt=0.0, description="Max score gap between neighbours in one shuffle band"
    )
    pool_multiplier: int = Field(
        2, ge=1, le=10, description="Candidates kept for banding, as a multiple of batch size"
    )
    decay_grace_days: int = Field(7, ge=0, description="Days without play before decay starts")
    decay_floor: float = Field(0.2, ge=0.0, le=1.0, description="Minimum decay multiplier")

    @field_validator("category_weight", "difficulty_weight", "diversity_weight", "exploration_weight")
    @classmethod
    def validate_weights(cls, v: float, info) -> float:
        """Validate that weights sum to 1.0."""
        if info.field_name == "exploration_weight":
            # Last weight, check sum
            total = (
                info.data.get("category_weight", 0.5)
                + info.data.get("difficulty_weight", 0.3)
                + info.data.get("diversity_weight", 0.1)
                + v
            )
            if abs(total - 1.0) > 0.001:
                raise ValueError(f"Weights must sum to 1.0, got {total}")
        return v


class FeedConfig(BaseModel):
    """Feed assembly defaults."""

    batch_size: int = Field(15, ge=1, le=200, description="Puzzles per feed batch")
    exploration_ratio: float = Field(0.25, ge=0.0, le=1.0)
    simple_exploration_ratio: float = Field(0.33, ge=0.0, le=1.0)
    cache_ttl_seconds: float = Field(300.0, ge=0.0, description="TTL for cached documents")
    category_order: List[str] = Field(
        default_factory=lambda: list(KNOWN_CATEGORIES),
        description="Round-robin order used when interleaving a feed by type",
    )


class ConfigModel(BaseModel):
    """Main configuration model."""

    data_root: str = Field("~/.puzzlefeed", description="Directory for catalogs and profiles")
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
