"""
Editor sessions: the state behind one pair of SQL/DSQL panes.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
import logging
import threading
import time
from typing import TYPE_CHECKING, Callable
from uuid import uuid4

from sql2dsql.core.errors import TranslationError
from sql2dsql.core.pretty import count_records, reformat
from sql2dsql.core.settings import DEFAULT_SOURCE

if TYPE_CHECKING:
    from sql2dsql.core.translator import TranslationClient

logger = logging.getLogger("sql2dsql.session")

READY = "Ready"
SUBMITTED = "Code submitted successfully!"
FAILED = "Error processing code."
MAX_SESSIONS = 256


@dataclass
class EditorSession:
    """
    One user's editor: the SQL being written (`source`), the last DSQL
    reply (`output`) and a transient status message.
    """
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    source: str = DEFAULT_SOURCE
    output: str = ""
    status_reset_seconds: float = 3.0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _status: str = field(default=READY, repr=False)
    _status_at: float | None = field(default=None, repr=False)

    @property
    def status(self) -> str:
        """Current status line; reverts to Ready after the reset delay."""
        if self._status_at is None:
            return self._status
        if self.clock() - self._status_at >= self.status_reset_seconds:
            return READY
        return self._status

    def set_status(self, message: str) -> None:
        """Show a message until the reset delay elapses."""
        self._status = message
        self._status_at = self.clock()

    def process(self, client: 'TranslationClient') -> bool:
        """
        Translate `source` and lay out the reply in `output`.

        On failure `output` holds "Error: <message>" instead and nothing is
        reformatted. Returns True on success.
        """
        try:
            raw = client.translate(self.source)
        except TranslationError as e:
            logger.error("Error processing code in session %s: %s", self.id, e)
            self.output = f"Error: {e}"
            self.set_status(FAILED)
            return False
        self.output = reformat(raw)
        logger.info("Session %s: translated into %d record(s)", self.id, count_records(self.output))
        self.set_status(SUBMITTED)
        return True


class SessionStore:
    """
    In-memory registry of editor sessions, keyed by id.

    Holds at most `max_sessions`; creating one more evicts the least
    recently used.
    """

    def __init__(
        self,
        *,
        default_source: str = DEFAULT_SOURCE,
        status_reset_seconds: float = 3.0,
        max_sessions: int = MAX_SESSIONS,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.default_source = default_source
        self.status_reset_seconds = status_reset_seconds
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, EditorSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def create(self) -> EditorSession:
        """Start a fresh session seeded with the default SQL."""
        s = EditorSession(
            source=self.default_source,
            status_reset_seconds=self.status_reset_seconds,
        )
        with self._lock:
            self._sessions[s.id] = s
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted idle session %s", evicted)
        logger.debug("Created session %s", s.id)
        return s

    def get(self, session_id: str) -> EditorSession:
        """Look up a session and mark it recently used. Raises KeyError if unknown."""
        with self._lock:
            s = self._sessions[session_id]
            self._sessions.move_to_end(session_id)
            return s

    def get_or_create(self, session_id: str | None) -> EditorSession:
        """Return the session for `session_id`, or a new one if missing/unknown."""
        if session_id:
            try:
                return self.get(session_id)
            except KeyError:
                pass
        return self.create()

    def delete(self, session_id: str) -> None:
        """Forget a session. Raises ValueError if unknown."""
        try:
            with self._lock:
                del self._sessions[session_id]
        except KeyError as e:
            raise ValueError(f"Session ID: {session_id} not found for deletion.") from e
