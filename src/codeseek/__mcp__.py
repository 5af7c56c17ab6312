"""MCP server for codeseek.

Exposes the two codebase actions as Model Context Protocol tools so a chat
host can call them:
- ingest_codebase: index the source files under a directory
- ask: retrieve the indexed chunks most relevant to a question

One CodebaseContext is shared by all tool calls, so the in-memory vector
store keeps its contents for the lifetime of the server.

Run with: python -m codeseek.__mcp__
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
from pydantic import ValidationError

from codeseek import __version__
from codeseek.api import (
    CodebaseContext,
    CodebaseNotFoundError,
    EmbeddingError,
    IndexingError,
    StoreError,
    ask,
    ingest_codebase,
)

logger = logging.getLogger(__name__)

server = Server("codeseek")

_context: Optional[CodebaseContext] = None


def get_context() -> CodebaseContext:
    """Return the shared context, creating a default one on first use."""
    global _context
    if _context is None:
        _context = CodebaseContext()
    return _context


@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="ingest_codebase",
            description=(
                "Ingest all C# files from a folder into the vector store for semantic search. "
                "Re-ingesting the same folder overwrites existing chunks."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the folder containing C# files"
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="ask",
            description=(
                "Ask a question about the ingested codebase using vector similarity search. "
                "Returns the most relevant code chunks with their file names."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "A natural language question about the codebase"
                    }
                },
                "required": ["query"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Dispatch a tool call."""
    handlers = {
        "ingest_codebase": handle_ingest,
        "ask": handle_ask,
    }
    handler = handlers.get(name)
    if handler is None:
        return [TextContent(type="text", text=f"✗ Unknown tool: {name}")]

    # Only binding the arguments is guarded; errors raised while handling propagate
    try:
        pending = handler(**(arguments or {}))
    except TypeError as e:
        return [TextContent(type="text", text=f"✗ Invalid arguments for {name}: {e}")]
    return await pending


async def handle_ingest(path: str) -> list[TextContent]:
    """Run an indexing pass off the event loop."""
    try:
        status = await asyncio.to_thread(ingest_codebase, path, get_context())
        return [TextContent(type="text", text=status)]

    except CodebaseNotFoundError as e:
        return [TextContent(type="text", text=str(e))]

    except IndexingError as e:
        logger.error("Ingest failed: %s", e)
        return [TextContent(type="text", text=f"✗ {e}")]

    except (EmbeddingError, StoreError, ValueError) as e:
        logger.error("Ingest failed: %s", e)
        return [TextContent(type="text", text=f"✗ Error ingesting codebase: {e}")]


async def handle_ask(query: str) -> list[TextContent]:
    """Retrieve the chunks most relevant to a question."""
    try:
        answer = await asyncio.to_thread(ask, query, get_context())
        return [TextContent(type="text", text=answer)]

    except ValidationError as e:
        return [TextContent(type="text", text=f"✗ Invalid query: {e.errors()[0]['msg']}")]

    except (EmbeddingError, StoreError, ValueError) as e:
        logger.error("Ask failed: %s", e)
        return [TextContent(type="text", text=f"✗ Error searching codebase: {e}")]


async def main():
    """Main entry point for MCP server."""
    global _context

    parser = argparse.ArgumentParser(description="codeseek MCP Server")
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument(
        '--embedding-provider',
        type=str,
        choices=['openai', 'azure', 'bedrock', 'local'],
        default=None,
        help='Embedding provider (default: CODESEEK_EMBEDDING_PROVIDER or openai)',
    )
    parser.add_argument(
        '--vector-store',
        type=str,
        choices=['chroma', 'memory'],
        default=None,
        help='Vector store backend (default: chroma)',
    )
    parser.add_argument(
        '--data-dir',
        type=Path,
        help='Base directory for index storage (default: ~/.codeseek)',
    )
    args = parser.parse_args()

    _context = CodebaseContext(
        data_dir=args.data_dir,
        embedding_provider=args.embedding_provider,
        vector_store=args.vector_store,
        debug=args.debug,
    )

    # stdout carries the MCP protocol; logs go to stderr (and a file in debug mode)
    log_level = logging.DEBUG if args.debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if args.debug:
        from codeseek.utils.debug import DebugLogger

        log_dir = _context.settings.debug_log_dir
        DebugLogger.configure(enabled=True, log_dir=log_dir)
        file_handler = logging.FileHandler(log_dir / f"mcp-{os.getpid()}.log", mode='w', encoding='utf-8')
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    logger.info(
        "Starting codeseek MCP server (embeddings: %s, store: %s)",
        _context.settings.embedding_provider,
        _context.settings.vector_store,
    )

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="codeseek",
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
    finally:
        _context.close()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
