"""KeywordProfit - Recommendation tier cascade.

An ordered list of (predicate -> tier) rules evaluated per keyword; the first
matching rule wins and keywords matching none are "scarsa". Thresholds mix
absolute scores with volume/ROI/CPC checks scaled by the campaign margin.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from keyword_profit.schemas import RecommendationLevel, ScoredKeyword

logger = logging.getLogger(__name__)

# Expected conversion rate used to derive the sustainable CPC
_SUSTAINABLE_CPC_RATE = 0.03


@dataclass(frozen=True)
class TierThresholds:
    volume_excellent: int
    volume_good: int
    volume_minimum: int
    cpc_sustainable: float
    cpc_acceptable: float


@dataclass(frozen=True)
class TierRule:
    name: str
    level: RecommendationLevel
    predicate: Callable[[ScoredKeyword, TierThresholds], bool]


def thresholds_for_margin(margin: float) -> TierThresholds:
    """High-margin products need less volume to be worthwhile."""
    if not math.isfinite(margin):
        margin = 0.0
    if margin > 50:
        volumes = (200, 100, 50)
    elif margin > 20:
        volumes = (500, 250, 100)
    else:
        volumes = (1000, 500, 200)
    cpc_sustainable = margin * _SUSTAINABLE_CPC_RATE
    return TierThresholds(
        volume_excellent=volumes[0],
        volume_good=volumes[1],
        volume_minimum=volumes[2],
        cpc_sustainable=cpc_sustainable,
        cpc_acceptable=cpc_sustainable * 2,
    )


def _cpc(kw: ScoredKeyword) -> float:
    value = kw.cpc_avg if kw.cpc_avg is not None else 0.0
    return value if math.isfinite(value) else 0.0


# ---------------------------------------------------------------------------
# Cascade (order matters)
# ---------------------------------------------------------------------------

TIER_RULES: tuple[TierRule, ...] = (
    TierRule(
        "high_score_profitable",
        "eccellente",
        lambda kw, t: (
            kw.profitability_score >= 60
            and (kw.roi_estimate > 0 or kw.volume >= t.volume_excellent)
            and (_cpc(kw) <= t.cpc_sustainable or kw.volume >= t.volume_excellent)
        ),
    ),
    TierRule(
        "strong_roi_good_volume",
        "eccellente",
        lambda kw, t: (
            kw.profitability_score >= 50
            and kw.roi_estimate > 30
            and kw.volume >= t.volume_good
        ),
    ),
    TierRule(
        "solid_score",
        "buona",
        lambda kw, t: (
            kw.profitability_score >= 50
            and (kw.roi_estimate > 0 or kw.volume >= t.volume_good)
        ),
    ),
    TierRule(
        "volume_with_acceptable_cpc",
        "buona",
        lambda kw, t: (
            kw.profitability_score >= 45
            and kw.volume >= t.volume_good
            and _cpc(kw) <= t.cpc_acceptable
        ),
    ),
    TierRule(
        "strong_roi",
        "buona",
        lambda kw, t: kw.profitability_score >= 40 and kw.roi_estimate > 30,
    ),
    TierRule(
        "some_signal",
        "moderata",
        lambda kw, t: (
            kw.profitability_score >= 35
            and (
                kw.volume >= t.volume_minimum
                or kw.roi_estimate > 0
                or kw.competition in ("low", "medium")
            )
        ),
    ),
    TierRule(
        "low_score_good_volume",
        "moderata",
        lambda kw, t: kw.profitability_score >= 30 and kw.volume >= t.volume_good,
    ),
    TierRule(
        "minimum_volume_acceptable_cpc",
        "moderata",
        lambda kw, t: kw.volume >= t.volume_minimum and _cpc(kw) <= t.cpc_acceptable,
    ),
)

FALLBACK_LEVEL: RecommendationLevel = "scarsa"


def classify_keyword(kw: ScoredKeyword, thresholds: TierThresholds) -> RecommendationLevel:
    """Return the level of the first rule that matches *kw*."""
    for rule in TIER_RULES:
        if rule.predicate(kw, thresholds):
            return rule.level
    return FALLBACK_LEVEL


def assign_profitability_levels(keywords: Sequence[ScoredKeyword], margin: float) -> None:
    """Set ``recommendation_level`` on every keyword in place."""
    if not keywords:
        return

    thresholds = thresholds_for_margin(margin)
    for kw in keywords:
        kw.recommendation_level = classify_keyword(kw, thresholds)

    logger.debug(
        "Assigned tiers for %d keywords (margin=%.2f, volume thresholds=%d/%d/%d)",
        len(keywords),
        margin,
        thresholds.volume_excellent,
        thresholds.volume_good,
        thresholds.volume_minimum,
    )
