#!/usr/bin/env python3
"""
Sandbox entrypoint for code-vuln-analyzer.
Reads the uploaded file manifest (plus optional model and severities) from stdin JSON, analyzes the file, outputs JSON to stdout.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from code_vuln_analyzer.analyzer import CodeAnalyzer
from code_vuln_analyzer.config import get_settings, selectable_models
from code_vuln_analyzer.models import Severity, SourceFile
from code_vuln_analyzer.report import build_response

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        sys.exit(1)

    files = input_data.get("files", [])
    if not files:
        print(json.dumps({"error": "No files provided"}))
        sys.exit(1)

    file_info = files[0]
    file_path = Path(file_info["path"])
    original_name = file_info.get("original_name") or file_path.name

    if not file_path.exists():
        print(json.dumps({"error": f"File not found: {file_path}"}))
        sys.exit(1)

    allowed_models = selectable_models(get_settings())
    model = input_data.get("model")
    if model and model not in allowed_models:
        print(
            json.dumps(
                {
                    "error": f"Invalid model '{model}'",
                    "valid_models": sorted(allowed_models),
                }
            )
        )
        sys.exit(1)

    severities = input_data.get("severities") or []
    valid_severities = [s.value for s in Severity]
    invalid = [s for s in severities if s not in valid_severities]
    if invalid:
        print(
            json.dumps(
                {
                    "error": f"Invalid severities: {invalid}",
                    "valid_severities": valid_severities,
                }
            )
        )
        sys.exit(1)

    try:
        file_bytes = file_path.read_bytes()
        if not file_bytes:
            print(json.dumps({"error": "Empty file"}))
            sys.exit(1)

        source = SourceFile(name=original_name, content=file_bytes)
        outcome = asyncio.run(CodeAnalyzer().run(source, model))
        print(json.dumps(build_response(source, outcome, severities).model_dump(mode="json")))
    except Exception as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)


if __name__ == "__main__":
    main()
