"""Debug logging of embedding provider traffic as JSON files."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
import threading
import uuid


class DebugLogger:
    """Writes provider requests and responses to disk (class-level singleton)."""

    _enabled: bool = False
    _log_dir: Optional[Path] = None
    _lock = threading.Lock()

    @classmethod
    def configure(cls, enabled: bool = False, log_dir: Optional[Path] = None) -> None:
        """Configure the debug logger.

        Args:
            enabled: Whether debug logging is enabled
            log_dir: Directory for log files (default: ~/.codeseek/logs)
        """
        with cls._lock:
            cls._enabled = enabled
            cls._log_dir = log_dir or Path.home() / ".codeseek" / "logs"

            if cls._enabled and cls._log_dir:
                cls._log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def is_enabled(cls) -> bool:
        return cls._enabled

    @classmethod
    def log_request(cls, operation: str, payload: Dict[str, Any], request_id: Optional[str] = None, category: str = "embedding") -> str:
        """Log a provider request.

        Args:
            operation: Provider name (e.g., "openai", "bedrock")
            payload: Request payload to log
            request_id: Optional request ID; a UUID is generated when omitted
            category: Subdirectory under the log directory

        Returns:
            The request_id used for this request
        """
        if request_id is None:
            request_id = str(uuid.uuid4())
        if cls._enabled:
            cls._log("request", operation, payload, request_id, category)
        return request_id

    @classmethod
    def log_response(cls, operation: str, payload: Dict[str, Any], request_id: Optional[str] = None, category: str = "embedding") -> None:
        """Log a provider response, paired with its request by request_id."""
        if not cls._enabled:
            return
        cls._log("response", operation, payload, request_id or str(uuid.uuid4()), category)

    @classmethod
    def _log(cls, log_type: str, operation: str, data: Dict[str, Any], request_id: str, category: str) -> None:
        if not cls._enabled or not cls._log_dir:
            return

        category_dir = cls._log_dir / category
        category_dir.mkdir(parents=True, exist_ok=True)

        # Compact timestamp, e.g. 20251029T054015Z
        now = datetime.now(timezone.utc)
        timestamp = now.strftime('%Y%m%dT%H%M%SZ')
        filename = f"{operation}_{timestamp}_{request_id[:8]}_{log_type}.json"

        log_entry = {
            "timestamp": now.isoformat(),
            "type": log_type,
            "operation": operation,
            "request_id": request_id,
            "payload": data
        }

        with cls._lock:
            try:
                with open(category_dir / filename, "w", encoding="utf-8") as f:
                    json.dump(log_entry, f, indent=2, default=str)
            except OSError:
                # best effort
                pass
