"""CLI entry point for codeseek."""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from codeseek import __version__
from codeseek.api import (
    CodebaseAPIError,
    CodebaseContext,
    EmbeddingError,
    IndexingError,
    StoreError,
    ask as ask_codebase,
    ingest_codebase,
)
from codeseek.utils.progress import log_error, log_info, log_success, log_warning


@click.group()
@click.option('--debug', is_flag=True, help='Write embedding requests and responses to the log directory')
@click.option('--data-dir', type=click.Path(path_type=Path), help='Base directory for index storage (default: ~/.codeseek)')
@click.option('--embedding-provider', type=click.Choice(['openai', 'azure', 'bedrock', 'local']), default=None, help='Embedding provider (default: CODESEEK_EMBEDDING_PROVIDER or openai)')
@click.option('--vector-store', type=click.Choice(['chroma', 'memory']), default=None, help='Vector store backend (default: chroma)')
@click.version_option(version=__version__)
@click.pass_context
def main(ctx, debug: bool, data_dir: Optional[Path], embedding_provider: Optional[str], vector_store: Optional[str]) -> None:
    """codeseek - index a source tree and ask questions about it.

    \b
    Examples:
        $ codeseek ingest ~/src/MyService
        $ codeseek ask "Where is the release version persisted?"
    """
    from codeseek.utils.debug import DebugLogger

    context = CodebaseContext(
        data_dir=data_dir.expanduser().resolve() if data_dir else None,
        embedding_provider=embedding_provider,
        vector_store=vector_store,
        debug=debug,
    )
    ctx.obj = context
    ctx.call_on_close(context.close)

    if debug:
        DebugLogger.configure(enabled=True, log_dir=context.settings.debug_log_dir)


@main.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_obj
def ingest(context: CodebaseContext, path: Path) -> None:
    """Index every source file under PATH.

    Re-running on the same directory overwrites chunks with the same key;
    chunks of deleted files are not removed.
    """
    if context.settings.vector_store == "memory":
        log_warning("The in-memory store is discarded when this command exits.")

    log_info(f"Ingesting {path} using {context.settings.embedding_provider} embeddings")
    try:
        status = ingest_codebase(path, context=context)
    except (CodebaseAPIError, IndexingError) as e:
        log_error(str(e))
        sys.exit(1)
    except (EmbeddingError, StoreError, ValueError) as e:
        log_error(f"Ingest failed: {e}")
        sys.exit(1)

    log_success(status)


@main.command()
@click.argument("query", type=str)
@click.pass_obj
def ask(context: CodebaseContext, query: str) -> None:
    """Print the indexed chunks most relevant to QUERY."""
    try:
        answer = ask_codebase(query, context=context)
    except ValidationError as e:
        log_error(f"Invalid query: {e.errors()[0]['msg']}")
        sys.exit(1)
    except (EmbeddingError, StoreError, ValueError) as e:
        log_error(f"Ask failed: {e}")
        sys.exit(1)

    click.echo(answer)


if __name__ == "__main__":
    main()
