"""KeywordProfit - Domain-specific exceptions for keyword analysis."""

from __future__ import annotations


class KeywordAnalysisError(Exception):
    """Base exception for analysis errors surfaced to the user."""
    pass


class NoKeywordsError(KeywordAnalysisError):
    """Raised when no usable keywords remain after normalization."""
    pass


class InvalidInputError(KeywordAnalysisError):
    """Raised when an input file or payload cannot be interpreted."""
    pass
