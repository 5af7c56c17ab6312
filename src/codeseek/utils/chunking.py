"""Declaration-aware chunking of source files.

Splits a file into chunks at lines that look like method or constructor
declarations. This is a keyword heuristic rather than a parser: a line
starts a new chunk when, once trimmed, it begins with an access modifier,
contains both parentheses and does not end with a semicolon.

The splitting logic is a fold over lines (``step`` / ``finish``) so it can be
exercised without touching the file system; ``parse_file`` adds the I/O.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..models.text_chunk import TextChunk

ACCESS_MODIFIERS = ("public ", "private ", "protected ", "internal ")

METHOD_ANNOTATION = "// METHOD: {signature}\n"


def is_declaration_start(line: str) -> bool:
    """Return True if the line looks like the start of a method declaration.

    Args:
        line: Raw source line (leading/trailing whitespace is ignored)
    """
    trimmed = line.strip()
    return (
        trimmed.startswith(ACCESS_MODIFIERS)
        and "(" in trimmed
        and ")" in trimmed
        and not trimmed.endswith(";")
    )


@dataclass(frozen=True)
class ChunkerState:
    """Accumulator threaded through the chunking fold.

    Attributes:
        document_name: Name used for chunk keys
        buffer: Lines collected for the chunk being built
        signature: Declaration that encloses the chunk being built, if any
        counter: Sequence number of the last emitted chunk
    """

    document_name: str
    buffer: Tuple[str, ...] = ()
    signature: Optional[str] = None
    counter: int = 0


def _flush(state: ChunkerState) -> Tuple[ChunkerState, Optional[TextChunk]]:
    text = "\n".join(state.buffer).strip()
    if not text:
        # Whitespace-only buffers never consume a sequence number
        return replace(state, buffer=()), None

    counter = state.counter + 1
    if state.signature:
        text = METHOD_ANNOTATION.format(signature=state.signature) + text
    chunk = TextChunk.create(state.document_name, counter, text)
    return replace(state, buffer=(), counter=counter), chunk


def step(state: ChunkerState, line: str) -> Tuple[ChunkerState, Optional[TextChunk]]:
    """Consume one line.

    Returns:
        Tuple of (next state, chunk emitted by this line or None)
    """
    emitted = None
    if is_declaration_start(line):
        if state.buffer:
            state, emitted = _flush(state)
        state = replace(state, signature=line.strip())
    return replace(state, buffer=state.buffer + (line,)), emitted


def finish(state: ChunkerState) -> Tuple[ChunkerState, Optional[TextChunk]]:
    """Flush whatever is left in the buffer at end of input."""
    if not state.buffer:
        return state, None
    return _flush(state)


def chunk_lines(lines: Iterable[str], document_name: str) -> Iterator[TextChunk]:
    """Split a sequence of lines into ordered chunks.

    Args:
        lines: Source lines without trailing newlines
        document_name: Name used for chunk keys and attribution

    Yields:
        TextChunk objects numbered from 1, without embeddings
    """
    state = ChunkerState(document_name=document_name)
    for line in lines:
        state, chunk = step(state, line)
        if chunk is not None:
            yield chunk
    state, chunk = finish(state)
    if chunk is not None:
        yield chunk


def read_lines(file_path: Union[str, Path]) -> Iterator[str]:
    """Yield a file's lines with line terminators removed.

    Universal newlines are used, so ``\\r\\n``, ``\\r`` and ``\\n`` all end a
    line. A leading BOM is dropped and undecodable bytes are replaced rather
    than raising.
    """
    with open(file_path, "r", encoding="utf-8-sig", errors="replace") as f:
        for line in f:
            yield line.rstrip("\n")


def parse_file(file_path: Union[str, Path], document_name: Optional[str] = None) -> Iterator[TextChunk]:
    """Chunk a single source file.

    Args:
        file_path: Path of the file to read
        document_name: Name used for chunk keys (default: the file's base name)

    Yields:
        TextChunk objects in file order
    """
    path = Path(file_path)
    yield from chunk_lines(read_lines(path), document_name or path.name)
