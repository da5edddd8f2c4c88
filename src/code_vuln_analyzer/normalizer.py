"""Turn free-text model replies into validated findings."""

import json
import logging
import re
from typing import Any

from .errors import InvalidFindingShapeError, UnparsableResponseError
from .models import Finding, Severity

logger = logging.getLogger(__name__)

# Greedy on purpose: spans from the first "[{" to the last "}]".
_FINDINGS_ARRAY_RE = re.compile(r"\[\s*\{.*\}\s*\]", re.DOTALL)
_EMPTY_ARRAY_RE = re.compile(r"\[\s*\]")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_SEVERITY_ALIASES: dict[str, Severity] = {
    "critical": Severity.high,
    "error": Severity.high,
    "moderate": Severity.medium,
    "warning": Severity.medium,
    "info": Severity.low,
}


def _extract_array(raw_text: str) -> list[Any]:
    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError):
        data = None
    if isinstance(data, list):
        return data

    match = _FINDINGS_ARRAY_RE.search(raw_text)
    if match:
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise UnparsableResponseError(f"Embedded JSON array is invalid: {e}") from e
        if isinstance(data, list):
            return data

    if _EMPTY_ARRAY_RE.search(raw_text):
        return []

    logger.debug(f"Raw AI response: {raw_text}")
    raise UnparsableResponseError("Could not parse analysis results from AI response")


def _coerce_severity(value: Any) -> Severity | None:
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    try:
        return Severity(key)
    except ValueError:
        return _SEVERITY_ALIASES.get(key)


def coerce_line(value: Any) -> int:
    """Coerce a reported line number to a positive int, defaulting to 1."""
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        line = int(match.group(1)) if match else 0
    else:
        try:
            line = int(value)
        except (TypeError, ValueError, OverflowError):
            line = 0
    return line if line >= 1 else 1


def _is_valid_item(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    if not item.get("severity") or not item.get("message"):
        return False
    line = item.get("line")
    return isinstance(line, (int, float, str)) and not isinstance(line, bool)


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def normalize_response(raw_text: str) -> list[Finding]:
    """
    Parse a model reply into findings.

    The whole text is tried as JSON first, then the first embedded
    ``[{...}]`` array. An empty array means no issues were found.

    Args:
        raw_text: The model's message content

    Returns:
        Findings in the order the model listed them

    Raises:
        UnparsableResponseError: If no JSON array can be extracted
        InvalidFindingShapeError: If any element is not a valid finding
    """
    items = _extract_array(raw_text)
    if not items:
        logger.info("No vulnerabilities found in the code")
        return []

    # All or nothing: one bad element rejects the whole batch.
    for index, item in enumerate(items):
        if not _is_valid_item(item):
            raise InvalidFindingShapeError(f"Analysis result {index} is missing required properties")

    findings: list[Finding] = []
    for index, item in enumerate(items):
        severity = _coerce_severity(item["severity"])
        if severity is None:
            raise InvalidFindingShapeError(
                f"Analysis result {index} has unknown severity {item['severity']!r}"
            )
        findings.append(Finding(
            severity=severity,
            message=str(item["message"]),
            line=coerce_line(item["line"]),
            rule=_optional_text(item.get("rule")),
            improvement=_optional_text(item.get("improvement")),
        ))

    return findings
