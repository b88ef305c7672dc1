"""시트 이미지 분석 패키지."""
from .schema import PageAnalysis, AnalysisResult, StructuredAnalysis, FallbackAnalysis
from .prompts import AnalysisPrompts
from .analyzer import PageAnalyzer, parse_analysis, strip_code_fences

__all__ = [
    "PageAnalysis",
    "AnalysisResult",
    "StructuredAnalysis",
    "FallbackAnalysis",
    "AnalysisPrompts",
    "PageAnalyzer",
    "parse_analysis",
    "strip_code_fences",
]
