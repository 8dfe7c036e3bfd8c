"""KeywordProfit - Deterministic keyword profitability scoring.

All functions are pure: no LLM calls, no side effects, no external APIs.
Sub-scores are ints in the range 0-100.
"""

from __future__ import annotations

import math
import statistics
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Sequence

from keyword_profit.schemas import (
    CampaignConfig,
    CampaignGoal,
    KeywordMetrics,
    KeywordSummary,
    ScoredKeyword,
)
from keyword_profit.scoring.tiers import assign_profitability_levels

# ---------------------------------------------------------------------------
# Weighting profiles (each row sums to 1.0)
# ---------------------------------------------------------------------------

GOAL_WEIGHTS: dict[CampaignGoal, dict[str, float]] = {
    "conversions": {
        "volume": 0.35, "roi": 0.30, "cpc": 0.15, "stability": 0.10, "competition": 0.10,
    },
    "traffic": {
        "volume": 0.40, "roi": 0.10, "cpc": 0.30, "stability": 0.10, "competition": 0.10,
    },
    "awareness": {
        "volume": 0.50, "roi": 0.05, "cpc": 0.15, "stability": 0.15, "competition": 0.15,
    },
    "engagement": {
        "volume": 0.35, "roi": 0.20, "cpc": 0.20, "stability": 0.15, "competition": 0.10,
    },
}

# Heuristic conversion rates by competition tier
CONVERSION_RATES: dict[str, float] = {"low": 0.04, "medium": 0.03, "high": 0.02}

DEFAULT_MARGIN_RATIO = 0.30
NEUTRAL_STABILITY = 50
TOP_RECOMMENDATIONS = 10


def _finite(value: Optional[float]) -> float:
    """Return *value* as a float, or 0.0 when missing, NaN or infinite."""
    if value is None:
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _round(value: float) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2); non-finite values round to 0."""
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def _round_cents(value: float) -> float:
    """Round half up to two decimals (0.125 -> 0.13)."""
    if not math.isfinite(value):
        return 0.0
    cents = Decimal(repr(value)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP, context=Context(prec=400),
    )
    return float(cents)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------


def effective_margin(product_price: float, profit_margin: Optional[float] = None) -> float:
    """Absolute profit per sale.

    Uses the explicit margin when positive, otherwise 30% of the price.
    A non-positive price yields 0.
    """
    margin = _finite(profit_margin)
    if margin > 0:
        return margin
    price = _finite(product_price)
    if price <= 0:
        return 0.0
    return price * DEFAULT_MARGIN_RATIO


def roi_percent(keyword: KeywordMetrics, margin: float) -> float:
    """Unrounded ROI % over 100 clicks.

    0 when the clicks cost nothing or the ratio overflows.
    """
    conversion_rate = CONVERSION_RATES.get(keyword.competition, CONVERSION_RATES["high"])
    cost_per_100_clicks = _finite(keyword.cpc_avg) * 100
    if cost_per_100_clicks <= 0:
        return 0.0
    conversions = 100 * conversion_rate
    profit = conversions * _finite(margin)
    return _finite((profit - cost_per_100_clicks) / cost_per_100_clicks * 100)


def estimate_roi(keyword: KeywordMetrics, margin: float) -> int:
    """Signed ROI estimate as an integer percentage."""
    return _round(roi_percent(keyword, margin))


def calculate_stability_score(trend: Sequence[float]) -> int:
    """Lower dispersion of the monthly trend -> higher score."""
    if not trend or len(trend) < 2:
        return NEUTRAL_STABILITY
    try:
        std_dev = statistics.pstdev([_finite(v) for v in trend])
    except OverflowError:
        return 0
    return _round(_clamp(100 - std_dev * 2))


def calculate_roi_score(roi: float) -> int:
    """Map a signed ROI % onto 0-100, break-even at 50."""
    return _round(_clamp(50 + _finite(roi) / 2))


def calculate_cpc_score(cpc: float, avg_cpc: float) -> int:
    """Free clicks score 100, the batch average 50, double the average 0."""
    avg_cpc = _finite(avg_cpc)
    if avg_cpc <= 0:
        avg_cpc = 1.0
    ratio = _finite(cpc) / avg_cpc
    return _round(_clamp((2 - ratio) * 50))


def calculate_volume_score(volume: int) -> int:
    """Log scale: 100 searches ~50, 1000 ~60, 10000 ~80."""
    volume = _finite(volume)
    if volume <= 0:
        return 0
    return _round(_clamp(20 * math.log10(volume + 1)))


def calculate_competition_score(competition_index: float) -> int:
    return _round(_clamp(100 - _finite(competition_index)))


def _batch_average_cpc(keywords: Sequence[KeywordMetrics]) -> float:
    if not keywords:
        return 1.0
    avg = sum(_finite(k.cpc_avg) for k in keywords) / len(keywords)
    return avg if math.isfinite(avg) and avg > 0 else 1.0


# ---------------------------------------------------------------------------
# Reasoning
# ---------------------------------------------------------------------------


def generate_reasoning(keyword: ScoredKeyword, goal: CampaignGoal) -> str:
    """One-line explanation built from the thresholds the keyword crosses."""
    parts: list[str] = []

    if keyword.volume > 5000:
        parts.append("High search volume")
    elif keyword.volume > 1000:
        parts.append("Decent search volume")
    else:
        parts.append("Limited but targeted volume")

    cpc = _finite(keyword.cpc_avg)
    if cpc < 0.5:
        parts.append("very affordable CPC")
    elif cpc > 2:
        parts.append("high CPC")

    if keyword.competition == "low":
        parts.append("low competition")
    elif keyword.competition == "high":
        parts.append("high competition")

    if goal == "conversions":
        if keyword.roi_estimate > 50:
            parts.append("potentially high ROI")
        elif keyword.roi_estimate < 0:
            parts.append("watch the ROI")

    if keyword.stability_score > 70:
        parts.append("stable trend")
    elif keyword.stability_score < 40:
        parts.append("unstable trend")

    return ", ".join(parts) + "."


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def score_keywords(
    keywords: Sequence[KeywordMetrics],
    config: CampaignConfig,
) -> list[ScoredKeyword]:
    """Score, rank and classify a batch of keywords for one campaign.

    Returns a new list sorted by profitability score (descending, stable)
    with recommendation levels and reasoning filled in.
    """
    if not keywords:
        return []

    weights = GOAL_WEIGHTS[config.goal]
    margin = effective_margin(config.product_price, config.profit_margin)
    avg_cpc = _batch_average_cpc(keywords)

    scored: list[ScoredKeyword] = []
    for keyword in keywords:
        stability_score = calculate_stability_score(keyword.trend)
        roi = roi_percent(keyword, margin)
        sub_scores = {
            "roi": calculate_roi_score(roi),
            "volume": calculate_volume_score(keyword.volume),
            "cpc": calculate_cpc_score(_finite(keyword.cpc_avg), avg_cpc),
            "stability": stability_score,
            "competition": calculate_competition_score(keyword.competition_index),
        }
        profitability_score = _round(
            sum(sub_scores[name] * weight for name, weight in weights.items()),
        )
        scored.append(
            ScoredKeyword(
                **keyword.model_dump(include=set(KeywordMetrics.model_fields)),
                profitability_score=profitability_score,
                roi_estimate=_round(roi),
                stability_score=stability_score,
            ),
        )

    scored.sort(key=lambda kw: kw.profitability_score, reverse=True)

    assign_profitability_levels(scored, margin)
    for kw in scored:
        kw.reasoning = generate_reasoning(kw, config.goal)

    return scored


def summarize(
    scored: Sequence[ScoredKeyword],
    top_n: int = TOP_RECOMMENDATIONS,
) -> KeywordSummary:
    """Aggregate statistics over an already-sorted scored list."""
    total = len(scored)
    if total == 0:
        return KeywordSummary()

    avg_volume = sum(_finite(k.volume) for k in scored) / total
    avg_cpc = sum(_finite(k.cpc_avg) for k in scored) / total
    avg_score = sum(k.profitability_score for k in scored) / total

    return KeywordSummary(
        total_keywords=total,
        avg_volume=_round(avg_volume),
        avg_cpc=_round_cents(avg_cpc),
        avg_score=_round(avg_score),
        excellent_count=sum(1 for k in scored if k.recommendation_level == "eccellente"),
        good_count=sum(1 for k in scored if k.recommendation_level == "buona"),
        top_recommendations=list(scored[:top_n]),
    )
