"""
HTTP client for the SQL to DSQL translation backend.

The backend takes a JSON-encoded string (the SQL text) as the POST body and
answers with the DSQL rendering as plain text. The body is handed back as-is;
laying it out is sql2dsql.core.pretty's job.
"""
import functools
import json
import logging
from time import sleep

import requests

from sql2dsql import __version__
from sql2dsql.core.errors import TranslationError
from sql2dsql.core.settings import Settings

logger = logging.getLogger("sql2dsql.translator")

def retry(exceptions, tries=3, delay=1.5, logger=None):  # pylint: disable=redefined-outer-name
    """
    A decorator that allows calls to retry a set number of times before failing.

    :param exceptions: The exception(s) to catch and retry on.
    :param tries: The number of times to try the function.
    :param delay: The delay between retries (exponentially increasing).
    :param logger: The logger to use for messages.
    :return: The result of the function call.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            last_exc = None
            for attempt in range(1, tries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exc = e
                    if attempt == tries:
                        break
                    sleeptime = delay ** attempt
                    msg = f'{e}, Retrying in {sleeptime:.1f} seconds...'
                    if logger:
                        logger.warning(msg)
                    sleep(sleeptime)
            if logger:
                logger.error("Failed to execute %s after %s attempts.", func.__name__, tries)
            raise last_exc
        return wrapper
    return decorator


def new_session() -> requests.Session:
    """Create a requests Session with the headers the backend expects."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": f"sql2dsql/{__version__}",
        "Content-Type": "application/json",
    })
    return session


class TranslationClient:
    """Sends SQL text to the translation backend and returns its reply."""

    def __init__(
        self,
        backend_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 3,
        retry_delay: float = 1.5,
        session: requests.Session | None = None,
    ):
        if timeout <= 0:
            raise ValueError(f"timeout must be greater than 0, got {timeout}")
        self.backend_url = backend_url
        self.timeout = timeout
        self.retries = max(1, retries)
        self.retry_delay = retry_delay
        self.session = session if session is not None else new_session()

    @classmethod
    def from_settings(cls, settings: Settings, session: requests.Session | None = None) -> 'TranslationClient':
        """Build a client from user Settings."""
        return cls(
            settings.backend_url,
            timeout=settings.timeout,
            retries=settings.retries,
            retry_delay=settings.retry_delay,
            session=session,
        )

    def _post(self, source: str) -> requests.Response:
        return self.session.post(
            self.backend_url,
            data=json.dumps(source),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def translate(self, source: str) -> str:
        """
        POST `source` to the backend and return the response body as text.
        Raises TranslationError on any transport or HTTP failure.
        """
        post = retry(
            (requests.ConnectionError, requests.Timeout),
            tries=self.retries,
            delay=self.retry_delay,
            logger=logger,
        )(self._post)
        logger.debug("Sending %d characters to %s", len(source), self.backend_url)
        try:
            response = post(source)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TranslationError(
                f"Backend returned HTTP {status} for {self.backend_url}",
                status_code=status,
            ) from e
        except requests.RequestException as e:
            raise TranslationError(f"Could not reach {self.backend_url}: {e}") from e
        logger.debug("Received %d characters", len(response.text))
        return response.text

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()
