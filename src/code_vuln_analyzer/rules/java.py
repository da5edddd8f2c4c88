"""Rules for Java (.java).

Detects:
- Runtime.getRuntime().exec() command execution
- printStackTrace() calls
- System.out.println statements
- Null comparisons where Optional would fit
"""

import re

from ..models import Severity
from .base import MatchMode, Rule, literal


JAVA_RULES: list[Rule] = [
    Rule(
        rule_id="no-runtime-exec",
        severity=Severity.high,
        regex=literal("Runtime.getRuntime().exec("),
        message="Using Runtime.exec() can be dangerous for command execution",
        improvement=(
            "Use ProcessBuilder instead, which has better security features. Always validate "
            "and sanitize any user input that goes into command execution."
        ),
    ),
    Rule(
        rule_id="no-stacktrace-print",
        severity=Severity.medium,
        regex=literal("printStackTrace"),
        message="printStackTrace exposes implementation details",
        improvement=(
            "Use a proper logging framework like SLF4J or Log4j. Pass exceptions to the logger "
            "rather than printing stack traces directly."
        ),
    ),
    Rule(
        rule_id="use-logger",
        severity=Severity.low,
        regex=literal("System.out.println"),
        message="System.out.println should be replaced with proper logging",
        improvement=(
            "Replace System.out.println with a proper logging framework like SLF4J or Log4j. "
            "This provides better control over log levels and output destinations."
        ),
        mode=MatchMode.repeated,
    ),
    Rule(
        rule_id="use-optional",
        severity=Severity.low,
        regex=re.compile(r" == null| != null"),
        message="Consider using Optional to handle null values",
        improvement=(
            "Use Java's Optional<T> type to represent optional values instead of null checks. "
            "This makes the API more explicit and helps prevent NullPointerExceptions."
        ),
    ),
]
