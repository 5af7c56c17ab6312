"""codeseek - semantic search over a source tree."""

__version__ = "0.1.0"
