"""
MCP server exposing the scanner as remotely callable tools.

Tools: analyze_file, analyze_directory, get_security_best_practices.
Runs over stdio by default; GEMSEC_TRANSPORT=sse|http serves on PORT.
"""

import logging
from typing import Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .config import TOOL_NAME, configure_logging, get_settings
from .models import SourceFile
from .service import (
    analyze_directory_tool,
    analyze_file_tool,
    get_security_best_practices as best_practices_text,
    render_response_text,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("gemsec")


@mcp.tool()
def analyze_file(file_path: str, file_content: Optional[str] = None) -> str:
    """
    Analyze a single file for security vulnerabilities in Next.js/React TypeScript code.

    Args:
        file_path: Path to the file (used for reporting and local file access)
        file_content: File content; use this with a remote server to send the
            content directly instead of reading from the filesystem

    Returns:
        Text report of the findings
    """
    try:
        return render_response_text(analyze_file_tool(file_path, file_content))
    except Exception as e:
        logger.error(f"analyze_file failed for {file_path}: {e}")
        raise ToolError(f"Error: {e}") from e


@mcp.tool()
def analyze_directory(directory_path: str, files: Optional[list[SourceFile]] = None) -> str:
    """
    Recursively analyze all TypeScript/JavaScript files in a directory for security issues.

    Args:
        directory_path: Directory path (used for reporting and local directory access)
        files: Files as {path, content}; use this with a remote server.
            Relative paths are resolved against directory_path

    Returns:
        Text report of the findings
    """
    try:
        return render_response_text(analyze_directory_tool(directory_path, files))
    except Exception as e:
        logger.error(f"analyze_directory failed for {directory_path}: {e}")
        raise ToolError(f"Error: {e}") from e


@mcp.tool()
def get_security_best_practices() -> str:
    """Get security best practices for Next.js/React applications."""
    return best_practices_text()


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    if settings.transport == "stdio":
        logger.info(f"{TOOL_NAME} MCP server running on stdio")
        mcp.run()
    else:
        logger.info(f"{TOOL_NAME} MCP server listening on {settings.host}:{settings.port} ({settings.transport})")
        mcp.run(transport=settings.transport, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
