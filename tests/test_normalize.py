"""Tests for keyword metrics normalization."""

from __future__ import annotations

import pytest

from keyword_profit.schemas import KeywordMetrics
from keyword_profit.utils.normalize import (
    metrics_from_keyword_idea,
    normalize_trend,
    parse_keyword_ideas,
    remove_duplicate_keywords,
)


def _idea(text: str = "scarpe running", **metrics) -> dict:  # noqa: ANN003
    return {"text": text, "keywordIdeaMetrics": metrics}


class TestRemoveDuplicates:
    def test_case_insensitive_keeps_highest_volume(self):
        keywords = [
            KeywordMetrics(keyword="Scarpe Running", volume=100),
            KeywordMetrics(keyword="scarpe trail", volume=50),
            KeywordMetrics(keyword="scarpe running ", volume=900),
            KeywordMetrics(keyword="SCARPE RUNNING", volume=300),
        ]
        unique = remove_duplicate_keywords(keywords)
        assert [(k.keyword, k.volume) for k in unique] == [
            ("scarpe running", 900),
            ("scarpe trail", 50),
        ]

    def test_equal_volume_keeps_first(self):
        keywords = [
            KeywordMetrics(keyword="A", volume=10, competition="low"),
            KeywordMetrics(keyword="a", volume=10, competition="high"),
        ]
        [kept] = remove_duplicate_keywords(keywords)
        assert kept.competition == "low"

    def test_empty(self):
        assert remove_duplicate_keywords([]) == []


class TestNormalizeTrend:
    def test_scaled_to_peak(self):
        assert normalize_trend([50, 100, 25]) == [50, 100, 25]
        assert normalize_trend([1000, 500, 0]) == [100, 50, 0]

    def test_all_zero(self):
        assert normalize_trend([0, 0, 0]) == [0, 0, 0]

    def test_empty_is_flat(self):
        assert normalize_trend([]) == [50] * 12

    def test_negative_values_round_half_up(self):
        # -1.25 rounds to -1, not towards zero
        assert normalize_trend([-5, 400]) == [-1, 100]
        assert normalize_trend([-2, 400]) == [0, 100]


class TestMetricsFromKeywordIdea:
    def test_full_payload(self):
        monthly = [{"monthlySearches": str(v)} for v in range(100, 1500, 100)]  # 14 months
        kw = metrics_from_keyword_idea(_idea(
            avgMonthlySearches="1500",
            competition="HIGH",
            lowTopOfPageBidMicros="500000",
            highTopOfPageBidMicros="1500000",
            monthlySearchVolumes=monthly,
        ))
        assert kw is not None
        assert kw.volume == 1500
        assert kw.competition == "high"
        assert kw.competition_index == 75
        assert kw.cpc_low == pytest.approx(0.5)
        assert kw.cpc_high == pytest.approx(1.5)
        assert kw.cpc_avg == pytest.approx(1.0)
        assert len(kw.trend) == 12
        assert kw.trend[-1] == 100
        assert kw.trend[0] == 21  # 300 / 1400

    def test_volume_from_monthly_mean(self):
        kw = metrics_from_keyword_idea(_idea(
            competition="MEDIUM",
            competitionIndex=42,
            monthlySearchVolumes=[{"monthlySearches": "100"}, {"monthlySearches": "200"}],
        ))
        assert kw.volume == 150
        assert kw.competition == "medium"
        assert kw.competition_index == 42
        assert kw.trend == [50, 100]

    def test_missing_history_gives_flat_trend(self):
        kw = metrics_from_keyword_idea(_idea(avgMonthlySearches="90"))
        assert kw.competition == "low"
        assert kw.competition_index == 25
        assert kw.cpc_avg == 0.0
        assert kw.trend == [50] * 12

    @pytest.mark.parametrize("raw", ["n/a", "", [], {}, "nan", "inf", True])
    def test_non_numeric_competition_index_uses_tier_default(self, raw):  # noqa: ANN001
        kw = metrics_from_keyword_idea(_idea(
            avgMonthlySearches="10", competition="MEDIUM", competitionIndex=raw,
        ))
        assert kw.competition_index == 50

    def test_numeric_string_competition_index(self):
        kw = metrics_from_keyword_idea(_idea(avgMonthlySearches="10", competitionIndex="37"))
        assert kw.competition_index == 37

    def test_keyword_field_fallback(self):
        kw = metrics_from_keyword_idea(
            {"keyword": "fallback", "keywordIdeaMetrics": {"avgMonthlySearches": 10}},
        )
        assert kw.keyword == "fallback"

    @pytest.mark.parametrize("idea", [
        _idea(text="", avgMonthlySearches="100"),
        _idea(avgMonthlySearches="0"),
        _idea(),
        {"text": "no metrics"},
    ])
    def test_unusable_ideas(self, idea: dict):
        assert metrics_from_keyword_idea(idea) is None


def test_parse_keyword_ideas_drops_unusable():
    results = [
        _idea("uno", avgMonthlySearches="10"),
        _idea("", avgMonthlySearches="10"),
        _idea("due", avgMonthlySearches="abc"),
        _idea("tre", avgMonthlySearches="30"),
    ]
    assert [k.keyword for k in parse_keyword_ideas(results)] == ["uno", "tre"]
