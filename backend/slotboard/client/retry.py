"""
Retry con backoff esponenziale per le letture del client.

Un solo helper per tutte le viste: `max_attempts` tentativi, attesa
`base_delay * 2**n` tra uno e l'altro, niente jitter. Un 401 in contesto admin
interrompe subito la catena, come ogni altro 4xx (non transitorio): si
riprova solo su errori di rete, 5xx e 429. Un CancelToken interrompe anche
l'attesa.
"""
import logging
import threading
from typing import Callable, TypeVar

import requests

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchCancelled(Exception):
    """La vista ha cambiato pagina o è stata chiusa."""


class ReauthRequired(Exception):
    """Il server ha rifiutato la credenziale: serve un nuovo login."""


class RetryExhausted(Exception):
    def __init__(self, attempts: int, last_error: Exception | None):
        super().__init__(f"Failed to load after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class CancelToken:
    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Attende `seconds`; True se annullato nel frattempo."""
        return self._event.wait(seconds)


def _status_of(exc: Exception) -> int | None:
    resp = getattr(exc, "response", None)
    return resp.status_code if resp is not None else None


def _is_transient(exc: Exception) -> bool:
    # rete giù, timeout, 5xx, 429; gli altri 4xx non cambiano riprovando
    status = _status_of(exc)
    return status is None or status >= 500 or status == 429


class RetryingFetch:
    def __init__(
        self,
        max_attempts: int = 5,
        base_delay: float = 1.0,
        on_unauthorized: Callable[[], None] | None = None,
        sleep: Callable[[float], None] | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.on_unauthorized = on_unauthorized
        # sleep iniettabile nei test; di default si aspetta sul token
        self._sleep = sleep

    def delays(self) -> list[float]:
        return [self.base_delay * 2 ** n for n in range(self.max_attempts - 1)]

    def _wait(self, token: CancelToken, seconds: float) -> bool:
        if self._sleep is None:
            return token.wait(seconds)
        self._sleep(seconds)
        return token.cancelled

    def __call__(
        self,
        fetch: Callable[[], T],
        *,
        token: CancelToken | None = None,
        admin: bool = False,
        label: str = "fetch",
    ) -> T:
        token = token or CancelToken()
        last_error: Exception | None = None

        for attempt in range(self.max_attempts):
            if token.cancelled:
                raise FetchCancelled(label)
            try:
                return fetch()
            except requests.RequestException as e:
                if admin and _status_of(e) == 401:
                    logger.warning("%s: 401 in admin context, re-authentication required", label)
                    if self.on_unauthorized:
                        self.on_unauthorized()
                    raise ReauthRequired(label) from e
                if not _is_transient(e):
                    logger.warning("Error in %s: %s (not retried)", label, e)
                    raise
                last_error = e
                logger.warning("Error in %s (attempt %d/%d): %s", label, attempt + 1, self.max_attempts, e)

            if attempt == self.max_attempts - 1:
                break
            if self._wait(token, self.base_delay * 2 ** attempt):
                raise FetchCancelled(label)

        raise RetryExhausted(self.max_attempts, last_error) from last_error
