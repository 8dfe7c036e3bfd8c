"""Integration tests for the analysis pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from keyword_profit.orchestrator import analyze_and_store, run_analysis
from keyword_profit.schemas import AnalysisRequest, CampaignConfig, KeywordMetrics
from keyword_profit.utils.exceptions import NoKeywordsError


class TestRunAnalysis:
    def test_builds_response(self, sample_request: AnalysisRequest, mock_config: MagicMock):
        response = run_analysis(sample_request, mock_config)

        assert len(response.keywords) == 4
        assert response.seed_keywords == ["scarpe running", "running uomo"]
        assert response.summary.total_keywords == 4
        assert response.summary.campaign_goal == "conversions"
        assert response.summary.campaign_type == "search"
        assert response.summary.data_source == "llm_estimate"
        assert response.summary.top_recommendations == response.keywords

    def test_removes_duplicates(
        self,
        sample_campaign: CampaignConfig,
        mock_config: MagicMock,
    ):
        request = AnalysisRequest(
            campaign_config=sample_campaign,
            keywords=[
                KeywordMetrics(keyword="Scarpe Running", volume=100, cpc_low=0.5, cpc_high=0.5),
                KeywordMetrics(keyword="scarpe running", volume=800, cpc_low=0.5, cpc_high=0.5),
            ],
        )
        response = run_analysis(request, mock_config)
        assert [(k.keyword, k.volume) for k in response.keywords] == [("scarpe running", 800)]

    def test_top_slice_follows_config(
        self, sample_request: AnalysisRequest, mock_config: MagicMock,
    ):
        mock_config.top_recommendations = 2
        response = run_analysis(sample_request, mock_config)
        assert response.summary.top_recommendations == response.keywords[:2]

    def test_no_keywords(self, sample_campaign: CampaignConfig, mock_config: MagicMock):
        with pytest.raises(NoKeywordsError, match="No keywords found"):
            run_analysis(AnalysisRequest(campaign_config=sample_campaign), mock_config)


class TestAnalyzeAndStore:
    @pytest.mark.asyncio
    async def test_skips_writing_by_default(
        self, sample_request: AnalysisRequest, mock_config: MagicMock, tmp_path: Path,
    ):
        await analyze_and_store(sample_request, mock_config)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_writes_report_when_enabled(
        self, sample_request: AnalysisRequest, mock_config: MagicMock, tmp_path: Path,
    ):
        mock_config.write_reports = True
        response = await analyze_and_store(sample_request, mock_config)

        day_dir = tmp_path / response.created_at.date().isoformat()
        [report_dir] = list(day_dir.iterdir())
        assert (report_dir / "keywords.csv").exists()

    @pytest.mark.asyncio
    async def test_write_failure_does_not_fail_analysis(
        self, sample_request: AnalysisRequest, mock_config: MagicMock,
    ):
        mock_config.write_reports = True
        with patch("keyword_profit.orchestrator.OutputWriter") as writer_cls:
            writer_cls.return_value.write_report = AsyncMock(side_effect=OSError("disk full"))
            response = await analyze_and_store(sample_request, mock_config)

        assert response.summary.total_keywords == 4
