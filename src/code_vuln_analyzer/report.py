"""
Report building for analyzed files.

Wraps an analysis outcome with an id, timestamp and severity counts, which
is the record shape callers hand to a history store.
"""

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone

from .models import AnalysisOutcome, AnalyzeResponse, Finding, Severity, SeveritySummary, SourceFile


def calculate_summary(findings: list[Finding]) -> SeveritySummary:
    """Calculate summary counts from findings."""
    summary = SeveritySummary()

    for finding in findings:
        if finding.severity == Severity.high:
            summary.high += 1
        elif finding.severity == Severity.medium:
            summary.medium += 1
        elif finding.severity == Severity.low:
            summary.low += 1

    summary.total = summary.high + summary.medium + summary.low

    return summary


def filter_by_severity(
    findings: list[Finding],
    severities: Iterable[Severity | str],
) -> list[Finding]:
    """Keep findings whose severity is selected, preserving order.

    An empty selection keeps everything.
    """
    selected = {Severity(s) for s in severities}
    if not selected:
        return list(findings)
    return [f for f in findings if f.severity in selected]


def build_response(
    source: SourceFile,
    outcome: AnalysisOutcome,
    severities: Iterable[Severity | str] = (),
) -> AnalyzeResponse:
    """Build the response returned to API and sandbox callers.

    When severities are given, only those findings are kept and the
    summary counts the kept findings.
    """
    findings = filter_by_severity(outcome.findings, severities)
    return AnalyzeResponse(
        analysis_id=str(uuid.uuid4()),
        file_name=source.name,
        language=source.language,
        state=outcome.state,
        model=outcome.model,
        findings=findings,
        summary=calculate_summary(findings),
        analyzed_at=datetime.now(timezone.utc).isoformat(),
    )
