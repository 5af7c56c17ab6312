"""Utility modules for codeseek."""

from codeseek.utils.chunking import (
    ChunkerState,
    chunk_lines,
    finish,
    is_declaration_start,
    parse_file,
    step,
)
from codeseek.utils.debug import DebugLogger
from codeseek.utils.progress import (
    create_progress_bar,
    log_error,
    log_info,
    log_success,
    log_warning,
    update_progress,
)

__all__ = [
    "ChunkerState",
    "chunk_lines",
    "finish",
    "is_declaration_start",
    "parse_file",
    "step",
    "DebugLogger",
    "create_progress_bar",
    "update_progress",
    "log_info",
    "log_warning",
    "log_error",
    "log_success",
]
