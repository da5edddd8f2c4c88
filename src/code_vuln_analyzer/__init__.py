"""Security code-smell detection for single source files."""

from .analyzer import CodeAnalyzer
from .models import AnalysisOutcome, AnalysisState, EnhanceResponse, Finding, Language, Severity, SourceFile

__all__ = [
    "AnalysisOutcome",
    "AnalysisState",
    "CodeAnalyzer",
    "EnhanceResponse",
    "Finding",
    "Language",
    "Severity",
    "SourceFile",
]
