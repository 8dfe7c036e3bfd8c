"""KeywordProfit - Normalization of keyword metrics from external providers."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Optional

from keyword_profit.schemas import KeywordMetrics

logger = logging.getLogger(__name__)

_MICROS = 1_000_000
_TREND_MONTHS = 12
_FLAT_TREND_VALUE = 50
_DEFAULT_COMPETITION_INDEX = {"high": 75, "medium": 50, "low": 25}


def _to_int(value: Any) -> int:
    """Lenient int parsing: ads payloads send numbers as strings."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_float(value: Any) -> Optional[float]:
    """Lenient float parsing; None for missing, non-numeric or non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def remove_duplicate_keywords(keywords: Iterable[KeywordMetrics]) -> list[KeywordMetrics]:
    """Collapse case-insensitive duplicates, keeping the highest-volume record.

    The surviving record takes the position of the first occurrence.
    """
    unique: dict[str, KeywordMetrics] = {}
    for kw in keywords:
        key = kw.keyword.lower().strip()
        existing = unique.get(key)
        if existing is None or kw.volume > existing.volume:
            unique[key] = kw
    return list(unique.values())


def normalize_trend(values: list[int]) -> list[int]:
    """Scale monthly volumes to 0-100 against their maximum."""
    if not values:
        return [_FLAT_TREND_VALUE] * _TREND_MONTHS
    peak = max(max(values), 1)
    return [int(math.floor(v / peak * 100 + 0.5)) for v in values]


def metrics_from_keyword_idea(result: dict) -> Optional[KeywordMetrics]:
    """Convert one ads-network keyword idea into KeywordMetrics.

    Returns None when the idea has no keyword text or no search volume.
    """
    metrics = result.get("keywordIdeaMetrics") or {}
    keyword = (result.get("text") or result.get("keyword") or "").strip()

    monthly = [
        _to_int(m.get("monthlySearches"))
        for m in metrics.get("monthlySearchVolumes") or []
    ]

    volume = 0
    if metrics.get("avgMonthlySearches"):
        volume = _to_int(metrics["avgMonthlySearches"])
    elif monthly:
        volume = int(math.floor(sum(monthly) / len(monthly) + 0.5))

    if not keyword or volume <= 0:
        return None

    raw_competition = str(metrics.get("competition") or "UNSPECIFIED").upper()
    if raw_competition == "HIGH":
        competition = "high"
    elif raw_competition == "MEDIUM":
        competition = "medium"
    else:
        competition = "low"

    competition_index = _to_float(metrics.get("competitionIndex"))
    if not competition_index:
        competition_index = _DEFAULT_COMPETITION_INDEX[competition]

    cpc_low = _to_int(metrics.get("lowTopOfPageBidMicros")) / _MICROS
    cpc_high = _to_int(metrics.get("highTopOfPageBidMicros")) / _MICROS

    return KeywordMetrics(
        keyword=keyword,
        volume=volume,
        competition=competition,
        competition_index=competition_index,
        cpc_low=cpc_low,
        cpc_high=cpc_high,
        cpc_avg=(cpc_low + cpc_high) / 2,
        trend=normalize_trend(monthly[-_TREND_MONTHS:]),
    )


def parse_keyword_ideas(results: Iterable[dict]) -> list[KeywordMetrics]:
    """Parse a list of keyword ideas, dropping unusable entries."""
    parsed: list[KeywordMetrics] = []
    skipped = 0
    for result in results:
        metrics = metrics_from_keyword_idea(result)
        if metrics is None:
            skipped += 1
            continue
        parsed.append(metrics)

    if skipped:
        logger.debug("Skipped %d keyword ideas without keyword or volume", skipped)
    logger.info("Parsed %d keyword ideas", len(parsed))
    return parsed
