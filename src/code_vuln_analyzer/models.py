"""Pydantic models for code-vuln-analyzer."""

from enum import Enum
from pathlib import PurePath
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severity levels for findings."""

    high = "high"
    medium = "medium"
    low = "low"


class Language(str, Enum):
    """Language families the rule engine knows about."""

    javascript = "javascript"
    python = "python"
    java = "java"
    unknown = "unknown"

    @classmethod
    def from_extension(cls, extension: str | None) -> "Language":
        """Map a file extension (with or without the leading dot) to a language family."""
        if not extension:
            return cls.unknown
        return _EXTENSION_LANGUAGES.get(extension.lower().lstrip("."), cls.unknown)


_EXTENSION_LANGUAGES: dict[str, Language] = {
    "js": Language.javascript,
    "jsx": Language.javascript,
    "ts": Language.javascript,
    "tsx": Language.javascript,
    "py": Language.python,
    "java": Language.java,
}


class Finding(BaseModel):
    """A single security finding in an analyzed file."""

    severity: Severity = Field(description="Severity level")
    message: str = Field(min_length=1, description="Human-readable description of the issue")
    line: int = Field(ge=1, description="1-based line number (best effort)")
    rule: Optional[str] = Field(default=None, description="Identifier of the detection rule, e.g. no-eval")
    improvement: Optional[str] = Field(default=None, description="Suggested remediation")


class SourceFile(BaseModel):
    """An uploaded source file to analyze."""

    name: str = Field(description="Original file name, used to infer the language")
    content: bytes = Field(description="Raw file content")

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower().lstrip(".")

    @property
    def language(self) -> Language:
        return Language.from_extension(self.extension)

    def text(self) -> str:
        """Decode the content as UTF-8.

        Raises:
            UnicodeDecodeError: If the content is not valid UTF-8 text.
        """
        return self.content.decode("utf-8-sig")


class AnalysisState(str, Enum):
    """Terminal state of one analysis run."""

    remote_ok = "remote_ok"
    local_only = "local_only"
    fallback = "fallback"


class AnalysisOutcome(BaseModel):
    """Findings plus how they were produced."""

    state: AnalysisState = Field(description="Which strategy produced the findings")
    findings: list[Finding] = Field(default_factory=list, description="Findings in detection order")
    model: Optional[str] = Field(default=None, description="Model used for the remote attempt, if any")
    fallback_reason: Optional[str] = Field(
        default=None, description="Why the remote path was abandoned, when state is fallback"
    )


class SeveritySummary(BaseModel):
    """Summary counts by severity."""

    high: int = Field(default=0, description="Number of high findings")
    medium: int = Field(default=0, description="Number of medium findings")
    low: int = Field(default=0, description="Number of low findings")
    total: int = Field(default=0, description="Total number of findings")


class AnalyzeResponse(BaseModel):
    """Response from analyzing one file."""

    analysis_id: str = Field(description="Unique identifier for this analysis")
    file_name: str = Field(description="Name of the analyzed file")
    language: Language = Field(description="Language family inferred from the extension")
    state: AnalysisState = Field(description="remote_ok, local_only or fallback")
    model: Optional[str] = Field(default=None, description="Model used for the remote attempt")
    findings: list[Finding] = Field(default_factory=list, description="Findings in detection order")
    summary: SeveritySummary = Field(default_factory=SeveritySummary, description="Counts by severity")
    analyzed_at: str = Field(description="UTC timestamp of the analysis (ISO 8601)")


class EnhanceResponse(BaseModel):
    """Response from asking the model to improve one file."""

    file_name: str = Field(description="Name of the submitted file")
    model: str = Field(description="Model that produced the improved code")
    enhanced_code: str = Field(description="Improved code with brief explanatory comments")
