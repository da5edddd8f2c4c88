"""Rule definition shared by the per-language catalogs."""

import re
from enum import Enum
from typing import NamedTuple

from ..models import Severity


class MatchMode(str, Enum):
    """How often a rule reports."""

    # Once per file, at the first matching line.
    presence = "presence"
    # Once per matching line.
    repeated = "repeated"


class Rule(NamedTuple):
    """A detection rule with its metadata."""

    rule_id: str
    severity: Severity
    regex: re.Pattern
    message: str
    improvement: str
    mode: MatchMode = MatchMode.presence


def literal(text: str, flags: int = 0) -> re.Pattern:
    """Compile a plain substring as a pattern."""
    return re.compile(re.escape(text), flags)
