"""KeywordProfit - CLI entrypoint for scoring a keyword metrics file."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from keyword_profit.config import AppConfig
from keyword_profit.io.outputs import export_to_csv
from keyword_profit.orchestrator import run_analysis
from keyword_profit.schemas import AnalysisRequest, CampaignConfig, KeywordMetrics
from keyword_profit.utils.exceptions import InvalidInputError, KeywordAnalysisError
from keyword_profit.utils.logger import get_logger
from keyword_profit.utils.normalize import parse_keyword_ideas


def load_keywords(path: Path) -> tuple[list[KeywordMetrics], str]:
    """Read keyword metrics from a JSON file.

    Accepts either a list of KeywordMetrics objects or an ads-network
    response with a ``results`` list. Returns (keywords, data_source).
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InvalidInputError(f"Cannot read {path}: {exc}") from exc

    try:
        if isinstance(data, dict) and "results" in data:
            return parse_keyword_ideas(data["results"]), "ads_api"
        if isinstance(data, list):
            return [KeywordMetrics.model_validate(item) for item in data], "manual"
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid keyword metrics in {path}: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidInputError(f"Malformed keyword ideas in {path}: {exc}") from exc

    raise InvalidInputError(
        f"{path} must hold a list of keywords or an object with 'results'",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score keywords for ad profitability",
    )
    parser.add_argument("--input", type=Path, required=True, help="Keyword metrics JSON file")
    parser.add_argument(
        "--goal",
        choices=["conversions", "traffic", "awareness", "engagement"],
        default="conversions",
        help="Campaign goal (selects the weighting profile)",
    )
    parser.add_argument(
        "--type",
        choices=["search", "shopping", "display", "performance_max", "demand_gen"],
        default="search",
        help="Campaign type",
    )
    parser.add_argument("--price", type=float, required=True, help="Product price")
    parser.add_argument(
        "--margin", type=float, default=None, help="Absolute profit per sale",
    )
    parser.add_argument("--currency", default="EUR")
    parser.add_argument("--country", default="IT")
    parser.add_argument("--csv", type=Path, default=None, help="Write scored keywords as CSV")
    parser.add_argument("--top", type=_positive_int, default=None, help="Size of the top recommendations list")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.top is not None:
        config = AppConfig(top_recommendations=args.top)
    else:
        config = AppConfig()
    logger = get_logger("keyword_profit", config.log_level, config.log_dir)

    campaign = CampaignConfig(
        goal=args.goal,
        type=args.type,
        product_price=args.price,
        profit_margin=args.margin,
        currency=args.currency,
        country=args.country,
    )

    try:
        keywords, source = load_keywords(args.input)
        response = run_analysis(
            AnalysisRequest(campaign_config=campaign, keywords=keywords, data_source=source),
            config,
        )
    except KeywordAnalysisError as exc:
        logger.error("%s", exc)
        return 1

    summary = response.summary
    logger.info(
        "Scored %d keywords: avg volume %d, avg CPC %.2f %s, avg score %d",
        summary.total_keywords,
        summary.avg_volume,
        summary.avg_cpc,
        campaign.currency,
        summary.avg_score,
    )
    for kw in summary.top_recommendations:
        logger.info(
            "  %3d  %-10s  %s", kw.profitability_score, kw.recommendation_level, kw.keyword,
        )

    if args.csv:
        args.csv.write_text(
            export_to_csv(response.keywords, campaign.currency), encoding="utf-8",
        )
        logger.info("CSV written to %s", args.csv)

    return 0


if __name__ == "__main__":
    sys.exit(main())
