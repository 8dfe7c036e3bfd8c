"""KeywordProfit - Pydantic data contracts.

All models use strict validation (extra="forbid"). Attribute names are
snake_case; aliases carry the camelCase names used on the wire.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CampaignGoal = Literal["conversions", "traffic", "awareness", "engagement"]
CampaignType = Literal["search", "shopping", "display", "performance_max", "demand_gen"]
Competition = Literal["low", "medium", "high"]
RecommendationLevel = Literal["eccellente", "buona", "moderata", "scarsa"]
DataSource = Literal["ads_api", "llm_estimate", "manual"]


# ---------------------------------------------------------------------------
# Campaign models
# ---------------------------------------------------------------------------

class CampaignConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    goal: CampaignGoal
    type: CampaignType = "search"
    product_price: float = Field(..., alias="productPrice")
    profit_margin: Optional[float] = Field(None, alias="profitMargin")  # absolute, not %
    currency: str = "EUR"
    country: str = "IT"


# ---------------------------------------------------------------------------
# Keyword models
# ---------------------------------------------------------------------------

class KeywordMetrics(BaseModel):
    """One keyword as estimated by the ads network or an LLM."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    keyword: str = Field(..., min_length=1)
    volume: int = Field(0, ge=0)
    competition: Competition = "medium"
    competition_index: float = Field(50, alias="competitionIndex")
    cpc_low: float = Field(0.0, alias="cpcLow")
    cpc_high: float = Field(0.0, alias="cpcHigh")
    cpc_avg: Optional[float] = Field(None, alias="cpcAvg")
    trend: list[float] = Field(default_factory=list)

    @field_validator("keyword")
    @classmethod
    def _strip_keyword(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("keyword must not be blank")
        return value

    @field_validator("competition", mode="before")
    @classmethod
    def _lower_competition(cls, value):  # noqa: ANN001
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _derive_cpc_avg(self) -> "KeywordMetrics":
        if self.cpc_avg is None:
            self.cpc_avg = (self.cpc_low + self.cpc_high) / 2
        return self


class ScoredKeyword(KeywordMetrics):
    profitability_score: int = Field(..., alias="profitabilityScore")
    roi_estimate: int = Field(..., alias="roiEstimate")
    stability_score: int = Field(..., alias="stabilityScore")
    # placeholder until the tier cascade runs
    recommendation_level: RecommendationLevel = Field(
        "moderata", alias="recommendationLevel",
    )
    reasoning: str = ""


# ---------------------------------------------------------------------------
# Summary / API models
# ---------------------------------------------------------------------------

class KeywordSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    total_keywords: int = Field(0, alias="totalKeywords")
    avg_volume: int = Field(0, alias="avgVolume")
    avg_cpc: float = Field(0.0, alias="avgCpc")
    avg_score: int = Field(0, alias="avgScore")
    excellent_count: int = Field(0, alias="eccellentiCount")
    good_count: int = Field(0, alias="buoneCount")
    top_recommendations: list[ScoredKeyword] = Field(
        default_factory=list, alias="topRecommendations",
    )


class AnalysisSummary(KeywordSummary):
    campaign_goal: CampaignGoal = Field(..., alias="campaignGoal")
    campaign_type: CampaignType = Field(..., alias="campaignType")
    data_source: DataSource = Field("manual", alias="dataSource")


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    campaign_config: CampaignConfig = Field(..., alias="campaignConfig")
    keywords: list[KeywordMetrics] = Field(default_factory=list)
    seed_keywords: list[str] = Field(default_factory=list, alias="seedKeywords")
    data_source: DataSource = Field("manual", alias="dataSource")


class AnalysisResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    seed_keywords: list[str] = Field(default_factory=list, alias="seedKeywords")
    keywords: list[ScoredKeyword] = Field(default_factory=list)
    summary: AnalysisSummary
    created_at: datetime = Field(..., alias="createdAt")


class CsvExportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    keywords: list[ScoredKeyword] = Field(default_factory=list)
    currency: str = "EUR"
