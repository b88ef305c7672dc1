"""Keyword search over index records."""
from .engine import SearchEngine
from .scoring import Scorer, SubstringFrequencyScorer, tokenize_query

__all__ = ["SearchEngine", "Scorer", "SubstringFrequencyScorer", "tokenize_query"]
