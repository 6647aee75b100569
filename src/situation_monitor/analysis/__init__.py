"""LLM headline significance analysis, caching and notifications."""

from situation_monitor.analysis.cache import AnalysisResult, SignificanceCache
from situation_monitor.analysis.significance import SignificanceAnalyzer

__all__ = ["AnalysisResult", "SignificanceAnalyzer", "SignificanceCache"]
