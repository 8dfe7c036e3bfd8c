"""KeywordProfit - Analysis pipeline orchestration."""

from __future__ import annotations

import logging
from datetime import datetime

from keyword_profit.config import AppConfig
from keyword_profit.io.outputs import OutputWriter
from keyword_profit.schemas import AnalysisRequest, AnalysisResponse, AnalysisSummary
from keyword_profit.scoring.keyword_scoring import score_keywords, summarize
from keyword_profit.utils.exceptions import NoKeywordsError
from keyword_profit.utils.normalize import remove_duplicate_keywords

logger = logging.getLogger(__name__)


def _unique_seeds(seeds: list[str]) -> list[str]:
    return list(dict.fromkeys(s.strip() for s in seeds if s.strip()))


def run_analysis(request: AnalysisRequest, config: AppConfig) -> AnalysisResponse:
    """Deduplicate -> score -> summarize.

    Raises NoKeywordsError when nothing is left to score.
    """
    campaign = request.campaign_config
    logger.info(
        "Starting analysis: keywords=%d, goal=%s, type=%s, source=%s",
        len(request.keywords),
        campaign.goal,
        campaign.type,
        request.data_source,
    )

    keywords = remove_duplicate_keywords(request.keywords)
    if not keywords:
        raise NoKeywordsError("No keywords found. Try different URLs.")
    if len(keywords) < len(request.keywords):
        logger.debug(
            "Removed %d duplicate keywords", len(request.keywords) - len(keywords),
        )

    scored = score_keywords(keywords, campaign)
    summary = summarize(scored, top_n=config.top_recommendations)

    response = AnalysisResponse(
        seed_keywords=_unique_seeds(request.seed_keywords),
        keywords=scored,
        summary=AnalysisSummary(
            **summary.model_dump(exclude={"top_recommendations"}),
            top_recommendations=summary.top_recommendations,
            campaign_goal=campaign.goal,
            campaign_type=campaign.type,
            data_source=request.data_source,
        ),
        created_at=datetime.now(),
    )

    logger.info(
        "Analysis done: %d keywords, avg score %d, %d excellent, %d good",
        summary.total_keywords,
        summary.avg_score,
        summary.excellent_count,
        summary.good_count,
    )
    return response


async def analyze_and_store(request: AnalysisRequest, config: AppConfig) -> AnalysisResponse:
    """Run the analysis and, when enabled, write the report locally."""
    response = run_analysis(request, config)

    if config.write_reports:
        writer = OutputWriter(config)
        try:
            await writer.write_report(response, currency=request.campaign_config.currency)
        except OSError:
            logger.exception("Failed to write analysis report to %s", config.output_dir)

    return response
