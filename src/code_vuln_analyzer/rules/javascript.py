"""Rules for JavaScript and TypeScript (.js, .jsx, .ts, .tsx).

Detects:
- eval() calls
- dangerouslySetInnerHTML props
- innerHTML usage
- Hardcoded passwords
- console.log statements
- TODO/FIXME markers
"""

import re

from ..models import Severity
from .base import MatchMode, Rule, literal


JAVASCRIPT_RULES: list[Rule] = [
    Rule(
        rule_id="no-eval",
        severity=Severity.high,
        regex=literal("eval("),
        message="Use of eval() can be dangerous and lead to code injection vulnerabilities",
        improvement=(
            "Replace eval() with safer alternatives such as Function constructor or JSON.parse() "
            "for JSON data. Consider restructuring your code to avoid dynamic code execution."
        ),
    ),
    Rule(
        rule_id="no-dangerous-html",
        severity=Severity.high,
        regex=literal("dangerouslySetInnerHTML"),
        message="dangerouslySetInnerHTML can lead to XSS vulnerabilities",
        improvement=(
            "Use safer alternatives like React components and props. If you must use HTML, "
            "ensure all user input is properly sanitized using a library like DOMPurify."
        ),
    ),
    Rule(
        rule_id="no-inner-html",
        severity=Severity.medium,
        regex=literal("innerHTML"),
        message="Use of innerHTML can lead to XSS vulnerabilities",
        improvement=(
            "Use safer DOM manipulation methods like textContent or createElement() and "
            "appendChild(). For frameworks like React, use their built-in components and props system."
        ),
    ),
    Rule(
        rule_id="no-hardcoded-secrets",
        severity=Severity.medium,
        regex=re.compile(r"""password.*=.*['"][^'"]*['"]""", re.IGNORECASE),
        message="Hardcoded password detected",
        improvement=(
            "Use environment variables or a secure vault service to store sensitive information. "
            "Never hardcode secrets in your source code."
        ),
    ),
    Rule(
        rule_id="no-console",
        severity=Severity.low,
        regex=literal("console.log"),
        message="Console statements should be removed in production code",
        improvement=(
            "Remove console.log statements or replace with proper logging that can be disabled "
            "in production. Consider using a logging library that supports different log levels."
        ),
        mode=MatchMode.repeated,
    ),
    Rule(
        rule_id="no-todo-comments",
        severity=Severity.low,
        regex=re.compile(r"TODO|FIXME"),
        message="TODO or FIXME comment found",
        improvement=(
            "Address the TODO/FIXME comments before deploying to production. If it's a known "
            "limitation, document it properly and create an issue in your project management system."
        ),
    ),
]
