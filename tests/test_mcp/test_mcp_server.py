"""Tests for the MCP tool handlers."""

import asyncio
from unittest.mock import patch

import pytest

from codeseek import __mcp__ as mcp_server
from codeseek.api import CodebaseContext
from codeseek.db.vector.memory import InMemoryVectorDB
from codeseek.embeddings.base import EmbeddingError


@pytest.fixture
def shared_context(keyword_embedder):
    ctx = CodebaseContext(vector_store="memory")
    ctx._embedder = keyword_embedder
    ctx._vector_db = InMemoryVectorDB()
    with patch.object(mcp_server, "_context", ctx):
        yield ctx


def _text(contents):
    assert len(contents) == 1
    return contents[0].text


def test_list_tools():
    tools = asyncio.run(mcp_server.list_tools())

    assert {tool.name for tool in tools} == {"ingest_codebase", "ask"}
    schemas = {tool.name: tool.inputSchema for tool in tools}
    assert schemas["ingest_codebase"]["required"] == ["path"]
    assert schemas["ask"]["required"] == ["query"]


def test_ingest_then_ask_share_the_store(shared_context, source_tree):
    status = _text(asyncio.run(mcp_server.call_tool("ingest_codebase", {"path": str(source_tree)})))
    answer = _text(asyncio.run(mcp_server.call_tool("ask", {"query": "old implementation kept for reference"})))

    assert status == "Indexed 4 chunks from 2 files."
    assert answer.startswith("Legacy/VersionService.cs (chunk 1):\n")


def test_ask_before_ingest(shared_context):
    answer = _text(asyncio.run(mcp_server.handle_ask("where is the version saved?")))

    assert answer == "No relevant information found."


def test_ingest_missing_directory(shared_context, tmp_path):
    missing = tmp_path / "missing"

    text = _text(asyncio.run(mcp_server.handle_ingest(str(missing))))

    assert text == f"Directory not found: {missing}"


def test_ingest_failure_is_reported(shared_context, source_tree):
    with patch.object(shared_context._embedder, "embed", side_effect=EmbeddingError("throttled", "bedrock")):
        text = _text(asyncio.run(mcp_server.handle_ingest(str(source_tree))))

    assert text.startswith("✗ Embedding failed for chunk 'Legacy/VersionService.cs_1'")


def test_blank_query_is_reported(shared_context):
    text = _text(asyncio.run(mcp_server.handle_ask("   ")))

    assert text.startswith("✗ Invalid query")


def test_unknown_tool(shared_context):
    text = _text(asyncio.run(mcp_server.call_tool("delete_everything", {})))

    assert text == "✗ Unknown tool: delete_everything"


def test_bad_arguments(shared_context):
    text = _text(asyncio.run(mcp_server.call_tool("ask", {"question": "x"})))

    assert text.startswith("✗ Invalid arguments for ask")


def test_type_error_while_handling_is_not_reported_as_bad_arguments(shared_context, source_tree):
    with patch.object(mcp_server, "ingest_codebase", side_effect=TypeError("unsupported operand")):
        with pytest.raises(TypeError, match="unsupported operand"):
            asyncio.run(mcp_server.call_tool("ingest_codebase", {"path": str(source_tree)}))
