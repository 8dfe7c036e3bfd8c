"""KeywordProfit - CSV export and OutputWriter for local analysis reports."""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from typing import Sequence

from keyword_profit.config import AppConfig
from keyword_profit.schemas import AnalysisResponse, ScoredKeyword

logger = logging.getLogger(__name__)


def export_to_csv(keywords: Sequence[ScoredKeyword], currency: str = "EUR") -> str:
    """Render scored keywords as CSV, one row per keyword.

    Fields containing commas are quoted; rows are separated by ``\\n``.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([
        "Keyword",
        "Score",
        "Recommendation",
        "Volume",
        f"Avg CPC ({currency})",
        "Competition",
        "Estimated ROI %",
        "Stability",
        "Notes",
    ])
    for kw in keywords:
        writer.writerow([
            kw.keyword,
            kw.profitability_score,
            kw.recommendation_level,
            kw.volume,
            f"{kw.cpc_avg or 0.0:.2f}",
            kw.competition,
            kw.roi_estimate,
            kw.stability_score,
            kw.reasoning,
        ])
    return buffer.getvalue().rstrip("\n")


class OutputWriter:
    """Write analysis reports to disk."""

    def __init__(self, config: AppConfig) -> None:
        self._output_dir = Path(config.output_dir)

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    async def write_report(self, response: AnalysisResponse, currency: str = "EUR") -> Path:
        """Write JSON, CSV and a text summary for one analysis.

        Returns the path to the report directory.
        """
        out_dir = self._create_output_structure(response)

        logger.info(
            "Writing analysis report: keywords=%d, path=%s",
            len(response.keywords),
            out_dir,
        )

        (out_dir / "analysis.json").write_text(
            response.model_dump_json(indent=2, by_alias=True),
            encoding="utf-8",
        )
        (out_dir / "keywords.csv").write_text(
            export_to_csv(response.keywords, currency), encoding="utf-8",
        )
        self._write_summary(response, out_dir)

        logger.info(
            "Analysis report written: path=%s, files=[analysis.json, keywords.csv, summary.txt]",
            out_dir,
        )
        return out_dir

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_output_structure(self, response: AnalysisResponse) -> Path:
        created = response.created_at
        slug = self._slugify(response.summary.campaign_goal)
        out_dir = (
            self._output_dir
            / created.date().isoformat()
            / f"{slug}-{created.strftime('%H%M%S')}"
        )
        out_dir.mkdir(parents=True, exist_ok=True)
        return out_dir

    @staticmethod
    def _slugify(name: str) -> str:
        slug = name.lower().strip()
        slug = re.sub(r"[^a-z0-9]+", "-", slug)
        return slug.strip("-")

    @staticmethod
    def _write_summary(response: AnalysisResponse, out_dir: Path) -> None:
        summary = response.summary
        lines = [
            f"KEYWORD ANALYSIS - {response.created_at.isoformat(timespec='seconds')}",
            "",
            f"Goal: {summary.campaign_goal}",
            f"Campaign Type: {summary.campaign_type}",
            f"Data Source: {summary.data_source}",
            f"Keywords: {summary.total_keywords}",
            f"Avg Volume: {summary.avg_volume}",
            f"Avg CPC: {summary.avg_cpc:.2f}",
            f"Avg Score: {summary.avg_score}",
            f"Excellent: {summary.excellent_count}",
            f"Good: {summary.good_count}",
            "",
            "=== TOP RECOMMENDATIONS ===",
        ]
        for kw in summary.top_recommendations:
            lines.append(
                f"  - {kw.keyword} (score: {kw.profitability_score}, {kw.recommendation_level})",
            )
        (out_dir / "summary.txt").write_text("\n".join(lines), encoding="utf-8")
