"""Declarative rule catalogs and the scan loop that applies them."""

from .base import MatchMode, Rule
from .engine import RULE_CATALOGS, rules_for, scan

__all__ = ["MatchMode", "Rule", "RULE_CATALOGS", "rules_for", "scan"]
