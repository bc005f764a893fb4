"""HTTP transport for delivering metric batches to the collector.

Delivery is fire-and-forget: send() returns immediately and the request runs
on a daemon thread. The outcome is reported once through the completion
callback and is never retried.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from loguru import logger

from ..core.events import encode_payload


@dataclass
class SenderConfig:
    """Configuration for the HTTP sender."""

    timeout_seconds: float = 10.0  # Request timeout
    user_agent: str = "sampled-metrics"


@dataclass
class SendResponse:
    """Collector response; the body is never parsed."""

    status: int
    reason: str = ""
    elapsed_seconds: float = 0.0


class TransportError(Exception):
    """Delivery of a batch failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


Completion = Callable[[Optional[Exception], Optional[SendResponse]], None]


class Transport(Protocol):
    """Protocol for fire-and-forget delivery of JSON payloads."""

    def send(self, url: str, payload: Any, headers: Mapping[str, str], completion: Completion) -> None:
        """Send payload to url and call completion(error, response) exactly once."""
        ...


class HTTPSender:
    """Default transport posting payloads with urllib on a background thread."""

    def __init__(self, config: SenderConfig = SenderConfig()):
        """Initialize the HTTP sender.

        Args:
            config: Sender configuration
        """
        self.config = config
        self._lock = threading.Lock()

        # Statistics
        self._total_sent = 0
        self._total_failed = 0
        self._last_successful_send: Optional[datetime] = None
        self._last_error: Optional[str] = None

    def send(self, url: str, payload: Any, headers: Mapping[str, str], completion: Completion) -> None:
        """Dispatch the request and return without waiting for the response."""
        body = encode_payload(payload)
        thread = threading.Thread(
            target=self._deliver,
            args=(url, body, dict(headers), completion),
            name="metrics-sender",
            daemon=True,
        )
        thread.start()

    def get_stats(self) -> Dict[str, Any]:
        """Get sender statistics."""
        with self._lock:
            return {
                "total_sent": self._total_sent,
                "total_failed": self._total_failed,
                "last_successful_send": self._last_successful_send.isoformat() if self._last_successful_send else None,
                "last_error": self._last_error,
            }

    def _deliver(self, url: str, body: bytes, headers: Dict[str, str], completion: Completion) -> None:
        """Perform the request and report the outcome."""
        error, response = self._post(url, body, headers)

        with self._lock:
            if error is None:
                self._total_sent += 1
                self._last_successful_send = datetime.now()
            else:
                self._total_failed += 1
                self._last_error = str(error)

        try:
            completion(error, response)
        except Exception as e:
            logger.error(f"Metrics completion callback failed: {e}")

    def _post(self, url: str, body: bytes, headers: Dict[str, str]) -> tuple[Optional[TransportError], Optional[SendResponse]]:
        """Send a single HTTP POST.

        Returns:
            Tuple of (error, response); exactly one of them is None
        """
        headers.setdefault("User-Agent", self.config.user_agent)
        req = Request(url, data=body, headers=headers, method="POST")
        start_time = time.monotonic()

        try:
            with urlopen(req, timeout=self.config.timeout_seconds) as response:
                elapsed = time.monotonic() - start_time
                if 200 <= response.status < 300:
                    return None, SendResponse(status=response.status, reason=response.reason, elapsed_seconds=elapsed)
                return TransportError(f"HTTP {response.status}: {response.reason}", status=response.status), None

        except HTTPError as e:
            return TransportError(f"HTTP error: {e.code} {e.reason}", status=e.code), None

        except URLError as e:
            return TransportError(f"Network error: {e.reason}"), None

        except Exception as e:
            return TransportError(f"Request error: {e}"), None
