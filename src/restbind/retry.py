import threading
from typing import Optional, Protocol, runtime_checkable

from .models.errors import TransportFailure


@runtime_checkable
class RetryHandler(Protocol):
    """Decides whether a failed request is sent again.

    ``retry`` returns ``None`` to resend the identical request, or the
    failure to surface to the caller. Handlers own their limits and backoff.
    """

    def retry(self, failure: TransportFailure) -> Optional[TransportFailure]: ...


class BasicRetryHandler:
    """Allows up to ``max_retries`` resends over the handler's lifetime.

    The counter is shared by every call made through the client the handler
    is configured on. Use one handler per client, or call ``reset``.
    """

    def __init__(self, max_retries: int) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")
        self.max_retries = max_retries
        self._retry_count = 0
        self._lock = threading.Lock()

    @property
    def retry_count(self) -> int:
        return self._retry_count

    def retry(self, failure: TransportFailure) -> Optional[TransportFailure]:
        with self._lock:
            if self._retry_count < self.max_retries:
                self._retry_count += 1
                return None
        return failure

    def reset(self) -> None:
        with self._lock:
            self._retry_count = 0
