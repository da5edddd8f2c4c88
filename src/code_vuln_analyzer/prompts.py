"""Prompts sent to the chat-completion model.

Models have been tuned against this exact wording, so keep edits to a minimum.
"""

import re

OUTPUT_CONTRACT = """Your task is to return ONLY a JSON array of objects with these exact properties:
- severity: Must be exactly one of "high", "medium", or "low"
- message: A brief description of the vulnerability
- line: The line number where the issue occurs (as a number)
- rule: A short identifier for the type of vulnerability
- improvement: Specific actionable advice to fix the issue

Focus on:
- Security vulnerabilities (XSS, injections, etc.)
- Unsafe practices (eval, exec, etc.)
- Hardcoded credentials
- Input validation issues
- Insecure API usage patterns

IMPORTANT:
1. Return valid JSON and nothing else
2. No explanations, markdown formatting, or any text before or after the JSON
3. The JSON array should look like this:
[
  {
    "severity": "high",
    "message": "Use of eval() can lead to code injection",
    "line": 42,
    "rule": "no-eval",
    "improvement": "Replace eval() with safer alternatives"
  },
  {
    "severity": "medium",
    "message": "Unvalidated user input",
    "line": 27,
    "rule": "validate-input",
    "improvement": "Add input validation before processing"
  }
]
"""


def build_analysis_prompt(content: str, language_hint: str | None = None) -> str:
    """Embed the file content in the analysis prompt.

    ``language_hint`` is the file extension (``py``, ``tsx``...). Without one
    the prompt does not name a language.
    """
    subject = f"this {language_hint} code" if language_hint else "this code"
    fence = language_hint or ""
    return (
        "\n"
        "You are a code security expert analyzing code for vulnerabilities.\n"
        f"Analyze {subject} and identify security issues:\n"
        "\n"
        f"```{fence}\n"
        f"{content}\n"
        "```\n"
        "\n"
        f"{OUTPUT_CONTRACT}"
    )


ENHANCEMENT_INSTRUCTIONS = """Focus on:
- Improving code quality and readability
- Fixing potential bugs or edge cases
- Optimizing performance
- Following best practices

Your task is to return ONLY the improved code, with brief comments explaining the changes.
Do not include any explanations outside the code block, just return the enhanced code.
"""

# First fenced block; the optional language tag line is dropped.
_CODE_BLOCK_RE = re.compile(r"```(?:\w*\n)?([^`]+)```", re.DOTALL)


def build_enhancement_prompt(content: str) -> str:
    """Embed the file content in the code-improvement prompt."""
    return (
        "\n"
        "You are an expert code reviewer. Analyze this code and suggest improvements:\n"
        "\n"
        "```\n"
        f"{content}\n"
        "```\n"
        "\n"
        f"{ENHANCEMENT_INSTRUCTIONS}"
    )


def extract_code_block(text: str) -> str:
    """Return the body of the first fenced code block, or the text as-is."""
    match = _CODE_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()
    return text
