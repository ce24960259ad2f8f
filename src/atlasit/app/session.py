"""
AtlasIT - Visualization Session State.

The UI owns one VizSession and passes it to the loaders. It holds what the
browser scripts kept in module globals: the payloads already fetched and
the current result of each selection control.

Loads are single-flight per control: ``begin`` issues a ticket that
supersedes every earlier ticket of the same control, and ``commit`` only
accepts the result of the newest one. A slow fetch that resolves after a
newer selection is discarded instead of overwriting it.
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from atlasit.settings import logger


@dataclass(frozen=True)
class Ticket:
    control: str
    generation: int
    source: str = ""


class VizSession:
    def __init__(self):
        self._lock = threading.Lock()
        self._generations: Dict[str, int] = {}
        self._current: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}
        self._payloads: Dict[str, Any] = {}
        self._loading: Dict[str, threading.Lock] = {}

    # --- Selection tickets ---

    def begin(self, control: str, source: str = "") -> Ticket:
        """Starts a load for ``control``; earlier pending loads become stale."""
        with self._lock:
            generation = self._generations.get(control, 0) + 1
            self._generations[control] = generation
        return Ticket(control=control, generation=generation, source=source)

    def is_current(self, ticket: Ticket) -> bool:
        with self._lock:
            return self._generations.get(ticket.control) == ticket.generation

    def commit(self, ticket: Ticket, result: Any) -> bool:
        """
        Stores ``result`` as the control's current value if the ticket is
        still the newest. Returns False (and keeps the newer state) otherwise.
        """
        with self._lock:
            if self._generations.get(ticket.control) != ticket.generation:
                logger.debug(
                    f"    Discarding stale result for '{ticket.control}' "
                    f"(generation {ticket.generation})"
                )
                return False
            self._current[ticket.control] = result
            self._sources[ticket.control] = ticket.source
            return True

    def current(self, control: str) -> Optional[Any]:
        with self._lock:
            return self._current.get(control)

    def current_source(self, control: str) -> Optional[str]:
        with self._lock:
            return self._sources.get(control)

    # --- Fetched payloads ---

    def fetch(self, key: str, loader: Callable[[], Any]) -> Any:
        """
        Returns the cached payload for ``key``, loading it on first use.

        Concurrent callers of an uncached key share one ``loader()`` call.
        """
        with self._lock:
            if key in self._payloads:
                return self._payloads[key]
            key_lock = self._loading.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._payloads:
                    return self._payloads[key]
            payload = loader()
            with self._lock:
                self._payloads[key] = payload
                self._loading.pop(key, None)
            return payload

    def forget(self, key: Optional[str] = None):
        """Drops one cached payload, or all of them."""
        with self._lock:
            if key is None:
                self._payloads.clear()
            else:
                self._payloads.pop(key, None)


def fetch_source(
    path: str,
    *,
    as_json: bool = False,
    session: Optional[VizSession] = None,
    data_root: Optional[str] = None,
) -> Any:
    """Reads a source through the session cache when a session is given."""
    # Local import to keep adapters out of the app import path
    from atlasit.infra.adapters import files

    def _load():
        if as_json:
            return files.fetch_json(path, data_root=data_root)
        return files.fetch_text(path, data_root=data_root)

    if session is None:
        return _load()
    key = f"{'json' if as_json else 'text'}:{data_root or ''}:{path}"
    return session.fetch(key, _load)
