#!/usr/bin/env python3
"""
Sandbox entrypoint for gemsec.
Reads a tool call from stdin JSON, runs the analysis, outputs JSON to stdout.

Input: {"tool": "analyze_file" | "analyze_directory" | "get_security_best_practices", ...}
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from gemsec.config import get_settings
from gemsec.service import (
    analyze_directory_tool,
    analyze_file_tool,
    get_security_best_practices,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VALID_TOOLS = {"analyze_file", "analyze_directory", "get_security_best_practices"}


def _fail(payload: dict) -> None:
    print(json.dumps(payload))
    sys.exit(1)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        _fail({"error": f"Invalid JSON input: {e}"})

    tool = input_data.get("tool")
    if not tool:
        # Infer the tool from the arguments supplied
        if input_data.get("file_path"):
            tool = "analyze_file"
        elif input_data.get("directory_path") or input_data.get("path"):
            tool = "analyze_directory"

    if tool not in VALID_TOOLS:
        _fail(
            {
                "error": f"Invalid or missing tool '{tool}'",
                "valid_tools": sorted(VALID_TOOLS),
                "examples": {
                    "file": {"tool": "analyze_file", "file_path": "src/app.ts"},
                    "directory": {"tool": "analyze_directory", "directory_path": "."},
                },
            }
        )

    # No browser inside a sandbox
    settings = get_settings().model_copy(update={"auto_open": False})

    try:
        if tool == "get_security_best_practices":
            print(json.dumps({"text": get_security_best_practices()}))
            return

        if tool == "analyze_file":
            file_path = input_data.get("file_path")
            if not file_path:
                _fail({"error": "Missing required input 'file_path'"})
            response = analyze_file_tool(
                file_path, input_data.get("file_content"), settings=settings
            )
        else:
            directory_path = input_data.get("directory_path") or input_data.get("path")
            if not directory_path:
                _fail({"error": "Missing required input 'directory_path'"})
            response = analyze_directory_tool(
                directory_path, input_data.get("files"), settings=settings
            )

        print(json.dumps(response.model_dump(mode="json")))
    except Exception as e:
        logger.error(f"{tool} failed: {e}")
        print(json.dumps({"error": str(e)}))
        sys.exit(1)


if __name__ == "__main__":
    main()
