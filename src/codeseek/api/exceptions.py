"""Custom exceptions for the codeseek API."""


class CodebaseAPIError(Exception):
    """Base exception for all codeseek API errors."""
    pass


class CodebaseNotFoundError(CodebaseAPIError):
    """Raised when the directory to ingest does not exist."""

    def __init__(self, path: str, message: str = None):
        """Initialize exception.

        Args:
            path: Directory that was not found
            message: Optional custom message
        """
        self.path = path
        if message is None:
            message = f"Directory not found: {path}"
        super().__init__(message)
