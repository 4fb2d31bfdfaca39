"""FastMCP server exposing the analyzer as two tools over stdio.

The tool functions only adapt arguments: dispatch and packaging live in
CommandHandler. A ToolResult flagged as an error is raised as ToolError, which
the MCP layer reports to the client with ``isError`` set.
"""

import asyncio
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from pdfanalyzer.core.command_handler import (
    ANALYZE_TOOL_NAME,
    ARG_FILE_REFERENCE,
    ARG_INSTRUCTION,
    ARG_MODEL_OVERRIDE,
    LIST_MODELS_TOOL_NAME,
    CommandHandler,
)
from pdfanalyzer.domain.models.analysis import ToolResult

logger = logging.getLogger(__name__)

SERVER_NAME = "gemini-pdf-analyzer"

SERVER_INSTRUCTIONS = (
    "Analyzes local PDF files with Google Gemini. Pass the file URI of the PDF and "
    "the user's original prompt; the answer is Gemini's response."
)

ANALYZE_TOOL_DESCRIPTION = (
    "Sends a local PDF (or, if the model rejects the file, its extracted text) together "
    "with the original prompt to the Gemini API and returns Gemini's response. "
    "pdfResourceUri: the file URI of the PDF (e.g. file:///path/to/your.pdf). "
    "originalPrompt: the prompt to analyze the PDF with. "
    "modelOverride: optional Gemini model id for this request."
)

LIST_MODELS_TOOL_DESCRIPTION = "Lists the Gemini models that can be used with the PDF analyzer"


def _unwrap(result: ToolResult) -> str:
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def build_server(command_handler: CommandHandler) -> FastMCP:
    """Creates the FastMCP app with both tools bound to ``command_handler``."""
    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)

    @server.tool(name=ANALYZE_TOOL_NAME, description=ANALYZE_TOOL_DESCRIPTION)
    async def analyze_pdf(pdfResourceUri: str, originalPrompt: str, modelOverride: Optional[str] = None) -> str:
        arguments = {
            ARG_FILE_REFERENCE: pdfResourceUri,
            ARG_INSTRUCTION: originalPrompt,
            ARG_MODEL_OVERRIDE: modelOverride,
        }
        # The pipeline blocks on network I/O; keep the protocol loop free
        result = await asyncio.to_thread(command_handler.handle_tool_invocation, ANALYZE_TOOL_NAME, arguments)
        return _unwrap(result)

    @server.tool(name=LIST_MODELS_TOOL_NAME, description=LIST_MODELS_TOOL_DESCRIPTION)
    def list_models() -> str:
        return _unwrap(command_handler.handle_tool_invocation(LIST_MODELS_TOOL_NAME, {}))

    logger.info(f"Tools registered: '{ANALYZE_TOOL_NAME}' and '{LIST_MODELS_TOOL_NAME}'")
    return server


def run_stdio_server(command_handler: CommandHandler) -> None:
    """Serves MCP over stdin/stdout until the client disconnects."""
    server = build_server(command_handler)
    logger.info("Gemini PDF Analyzer MCP Server is ready and waiting for client connection.")
    server.run(transport="stdio")
