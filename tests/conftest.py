"""Shared pytest fixtures for KeywordProfit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from keyword_profit.schemas import (
    AnalysisRequest,
    CampaignConfig,
    KeywordMetrics,
    ScoredKeyword,
)

_STEADY = [60, 62, 61, 60, 63, 62, 61, 60, 62, 61, 60, 62]
_SPIKY = [10, 90, 15, 85, 20, 95, 5, 80, 10, 90, 15, 100]


@pytest.fixture
def sample_campaign() -> CampaignConfig:
    return CampaignConfig(
        goal="conversions",
        type="search",
        product_price=100.0,
        profit_margin=30.0,
        currency="EUR",
        country="IT",
    )


@pytest.fixture
def sample_keyword() -> KeywordMetrics:
    return KeywordMetrics(
        keyword="scarpe running uomo",
        volume=8100,
        competition="low",
        competition_index=22,
        cpc_low=0.20,
        cpc_high=0.60,
        trend=_STEADY,
    )


@pytest.fixture
def sample_batch(sample_keyword: KeywordMetrics) -> list[KeywordMetrics]:
    return [
        KeywordMetrics(
            keyword="scarpe trail running",
            volume=720,
            competition="high",
            competition_index=88,
            cpc_low=1.80,
            cpc_high=3.40,
            trend=_SPIKY,
        ),
        sample_keyword,
        KeywordMetrics(
            keyword="scarpe running offerta",
            volume=2400,
            competition="medium",
            competition_index=55,
            cpc_low=0.50,
            cpc_high=1.10,
            trend=_STEADY,
        ),
        KeywordMetrics(
            keyword="migliori scarpe running 2024",
            volume=90,
            competition="low",
            competition_index=12,
            cpc_low=0.10,
            cpc_high=0.30,
            trend=[],
        ),
    ]


@pytest.fixture
def sample_request(
    sample_campaign: CampaignConfig,
    sample_batch: list[KeywordMetrics],
) -> AnalysisRequest:
    return AnalysisRequest(
        campaign_config=sample_campaign,
        keywords=sample_batch,
        seed_keywords=["scarpe running", "scarpe running", "running uomo"],
        data_source="llm_estimate",
    )


@pytest.fixture
def sample_scored_keyword() -> ScoredKeyword:
    return ScoredKeyword(
        keyword="scarpe running uomo",
        volume=8100,
        competition="low",
        competition_index=22,
        cpc_low=0.20,
        cpc_high=0.60,
        trend=_STEADY,
        profitability_score=78,
        roi_estimate=200,
        stability_score=98,
        recommendation_level="eccellente",
        reasoning="High search volume, very affordable CPC, low competition.",
    )


@pytest.fixture
def mock_config(tmp_path) -> MagicMock:  # noqa: ANN001
    cfg = MagicMock()
    cfg.top_recommendations = 10
    cfg.write_reports = False
    cfg.output_dir = tmp_path
    cfg.log_level = "INFO"
    cfg.log_dir = None
    return cfg
