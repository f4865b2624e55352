"""
Database connection lifecycle.

``ConnectionState`` is the handle the health probe reads; it is created by the
application factory and handed to the monitor, never looked up globally.
``ConnectionMonitor`` establishes the first connection, retrying on a fixed
delay until it succeeds, and keeps the state current by listening to the
engine's disconnect and pool-connect events.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ConnectionState:
    """Thread-safe connected/disconnected flag."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connected = False
        self._ever_connected = False

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._connected

    @property
    def ever_connected(self) -> bool:
        with self._lock:
            return self._ever_connected

    @property
    def label(self) -> str:
        return "connected" if self.connected else "disconnected"

    def mark_connected(self) -> bool:
        """Flag the store as reachable; True when this changed the state."""
        with self._lock:
            changed = not self._connected
            self._connected = True
            self._ever_connected = True
            return changed

    def mark_disconnected(self) -> bool:
        with self._lock:
            changed = self._connected
            self._connected = False
            return changed


class ConnectionMonitor:
    def __init__(
        self,
        engine: Engine,
        state: ConnectionState,
        *,
        retry_delay: float = 5.0,
        on_connect: Optional[Callable[[Engine], None]] = None,
    ) -> None:
        self.engine = engine
        self.state = state
        self.retry_delay = retry_delay
        self._on_connect = on_connect
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._stopped = False
        self._listening = False

    def start(self) -> None:
        """Listen for engine events and begin connecting in the background."""
        with self._lock:
            self._stopped = False
        self._listen()
        self._schedule(0)

    def stop(self) -> None:
        with self._lock:
            self._stopped = True
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        self._unlisten()

    def connect_once(self) -> bool:
        """Try a single round trip to the store; True on success."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            if self._on_connect is not None:
                self._on_connect(self.engine)
        except SQLAlchemyError as exc:
            self.state.mark_disconnected()
            logger.error("Database connection error: %s", exc)
            return False
        self.state.mark_connected()
        logger.info("Database connected successfully (%s)", self.engine.url.render_as_string(hide_password=True))
        return True

    def _attempt(self) -> None:
        with self._lock:
            if self._stopped:
                return
        if not self.connect_once():
            logger.info("Retrying connection in %s seconds...", self.retry_delay)
            self._schedule(self.retry_delay)

    def _schedule(self, delay: float) -> None:
        with self._lock:
            if self._stopped:
                return
            timer = threading.Timer(delay, self._attempt)
            timer.daemon = True
            self._timer = timer
        timer.start()

    # ------------------------------------------------------------------ events
    def _listen(self) -> None:
        if self._listening:
            return
        event.listen(self.engine, "handle_error", self._on_engine_error)
        event.listen(self.engine, "connect", self._on_pool_connect)
        self._listening = True

    def _unlisten(self) -> None:
        if not self._listening:
            return
        event.remove(self.engine, "handle_error", self._on_engine_error)
        event.remove(self.engine, "connect", self._on_pool_connect)
        self._listening = False

    def _on_engine_error(self, context) -> None:
        if context.is_disconnect and self.state.mark_disconnected():
            logger.warning("Database disconnected. Attempting to reconnect...")

    def _on_pool_connect(self, dbapi_connection, connection_record) -> None:
        if self.state.ever_connected and self.state.mark_connected():
            logger.info("Database reconnected successfully")
