import asyncio
import json
from unittest.mock import MagicMock

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from pdfanalyzer.core.command_handler import ANALYZE_TOOL_NAME, LIST_MODELS_TOOL_NAME, CommandHandler
from pdfanalyzer.domain.models.analysis import ToolResult
from pdfanalyzer.infrastructure.mcp.server import SERVER_NAME, build_server


@pytest.fixture
def mock_command_handler():
    mock = MagicMock(spec=CommandHandler)
    mock.handle_tool_invocation.return_value = ToolResult(text="Summary.")
    return mock

@pytest.fixture
def server(mock_command_handler):
    return build_server(mock_command_handler)


def _texts(result):
    # Newer FastMCP releases return (content, structured_output)
    content = result[0] if isinstance(result, tuple) else result
    return [block.text for block in content]


def test_server_identity(server):
    assert server.name == SERVER_NAME


def test_both_tools_are_listed(server):
    tools = asyncio.run(server.list_tools())

    by_name = {tool.name: tool for tool in tools}
    assert set(by_name) == {ANALYZE_TOOL_NAME, LIST_MODELS_TOOL_NAME}
    schema = by_name[ANALYZE_TOOL_NAME].inputSchema
    assert set(schema["required"]) == {"pdfResourceUri", "originalPrompt"}
    assert "modelOverride" in schema["properties"]


def test_analyze_tool_forwards_arguments(server, mock_command_handler):
    result = asyncio.run(
        server.call_tool(ANALYZE_TOOL_NAME, {"pdfResourceUri": "file:///tmp/a.pdf", "originalPrompt": "Summarize this"})
    )

    assert _texts(result) == ["Summary."]
    mock_command_handler.handle_tool_invocation.assert_called_once_with(
        ANALYZE_TOOL_NAME,
        {"pdfResourceUri": "file:///tmp/a.pdf", "originalPrompt": "Summarize this", "modelOverride": None},
    )


def test_error_result_is_raised_as_tool_error(server, mock_command_handler):
    mock_command_handler.handle_tool_invocation.return_value = ToolResult(
        text="Error: PDF file not found or not readable at: /tmp/a.pdf", is_error=True
    )

    with pytest.raises(ToolError, match="not found or not readable"):
        asyncio.run(
            server.call_tool(ANALYZE_TOOL_NAME, {"pdfResourceUri": "file:///tmp/a.pdf", "originalPrompt": "Q"})
        )


def test_list_models_tool(server, mock_command_handler):
    mock_command_handler.handle_tool_invocation.return_value = ToolResult(
        text=json.dumps({"defaultModel": "gemini-2.0-flash"})
    )

    result = asyncio.run(server.call_tool(LIST_MODELS_TOOL_NAME, {}))

    assert json.loads(_texts(result)[0])["defaultModel"] == "gemini-2.0-flash"
    mock_command_handler.handle_tool_invocation.assert_called_once_with(LIST_MODELS_TOOL_NAME, {})
