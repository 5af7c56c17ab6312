from .text_chunk import TextChunk, make_chunk_key
from .query import AskParams
from .query_result import ChunkSearchResult
