"""Rules for Python (.py).

Detects:
- exec() calls
- pickle.loads deserialization
- input() calls without validation
- subprocess calls with shell=True
"""

from ..models import Severity
from .base import MatchMode, Rule, literal


PYTHON_RULES: list[Rule] = [
    Rule(
        rule_id="no-exec",
        severity=Severity.high,
        regex=literal("exec("),
        message="Use of exec() can lead to code injection vulnerabilities",
        improvement=(
            "Avoid using exec() entirely. Restructure your code to use more specific functions "
            "or modules that perform the required functionality without executing arbitrary code."
        ),
    ),
    Rule(
        rule_id="no-unsafe-deserialization",
        severity=Severity.high,
        regex=literal("pickle.loads"),
        message="Unsafe deserialization using pickle can lead to code execution",
        improvement=(
            "Use safer serialization alternatives like JSON, YAML, or MessagePack. If pickle is "
            "necessary, only unpickle data from trusted sources and consider using safer modules "
            "like marshmallow."
        ),
    ),
    Rule(
        rule_id="validate-input",
        severity=Severity.medium,
        regex=literal("input("),
        message="Input should be type-checked and sanitized",
        improvement=(
            "Always validate and sanitize user input. Use type conversion functions like int() "
            "or float() with try/except blocks, or use input validation libraries like Pydantic."
        ),
        mode=MatchMode.repeated,
    ),
    Rule(
        rule_id="no-shell-true",
        severity=Severity.medium,
        regex=literal("shell=True"),
        message="Using shell=True with subprocess can be dangerous",
        improvement=(
            "Avoid using shell=True with subprocess. Instead, pass the command as a list of "
            "arguments and set shell=False (the default). This prevents shell injection attacks."
        ),
    ),
]
