"""Local rule scan used when the remote analysis is unavailable."""

from ..models import Finding, Language
from .base import MatchMode, Rule
from .java import JAVA_RULES
from .javascript import JAVASCRIPT_RULES
from .python import PYTHON_RULES


RULE_CATALOGS: dict[Language, list[Rule]] = {
    Language.javascript: JAVASCRIPT_RULES,
    Language.python: PYTHON_RULES,
    Language.java: JAVA_RULES,
}


def rules_for(language: Language) -> list[Rule]:
    """Return the catalog for a language family (empty for unknown languages)."""
    return RULE_CATALOGS.get(language, [])


def _make_finding(rule: Rule, line_num: int) -> Finding:
    return Finding(
        severity=rule.severity,
        message=rule.message,
        line=line_num,
        rule=rule.rule_id,
        improvement=rule.improvement,
    )


def scan(content: str, language: Language) -> list[Finding]:
    """
    Scan source text against the rule catalog for its language.

    Presence rules report once, at the first matching line. Only that line
    is reported even when later lines match too. Repeated rules report every
    matching line.

    Args:
        content: Decoded source text
        language: Language family selecting the catalog

    Returns:
        Findings in catalog order, then line order. An empty list means no
        issues were found.
    """
    rules = rules_for(language)
    if not rules:
        return []

    lines = [line.rstrip("\r") for line in content.split("\n")]
    findings: list[Finding] = []

    for rule in rules:
        if rule.mode is MatchMode.repeated:
            for index, line in enumerate(lines):
                if rule.regex.search(line):
                    findings.append(_make_finding(rule, index + 1))
            continue

        line_num = next(
            (index + 1 for index, line in enumerate(lines) if rule.regex.search(line)),
            None,
        )
        if line_num is None:
            # Matched across lines only; no single line to point at.
            if not rule.regex.search(content):
                continue
            line_num = 1
        findings.append(_make_finding(rule, line_num))

    return findings
