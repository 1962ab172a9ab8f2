"""Host lifecycle: single-fire signals and capability lookup."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from modelseed.exceptions import CapabilityNotFoundError, SignalError

logger = logging.getLogger(__name__)


class Signal:
    """
    Notification that fires at most once.

    Exactly one handler may be connected. Firing calls it with the fire
    arguments; any later fire is ignored. A signal that never fires keeps
    nothing alive except the handler reference.

    Example:
        >>> started = Signal("database_started")
        >>> started.connect(lambda schema, backend: "seeded")
        >>> started.fire(None, None)
        'seeded'
        >>> started.fire(None, None) is None
        True
    """

    def __init__(self, name: str):
        self.name = name
        self._handler: Callable[..., Any] | None = None
        self._fired = False
        self._lock = threading.Lock()

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def connected(self) -> bool:
        return self._handler is not None

    def connect(self, handler: Callable[..., Any]) -> None:
        """
        Subscribe the single handler.

        Raises:
            SignalError: If a handler is already connected
        """
        with self._lock:
            if self._handler is not None:
                raise SignalError(f"Signal '{self.name}' already has a handler")
            self._handler = handler

    def fire(self, *args: Any, **kwargs: Any) -> Any:
        """
        Fire the signal.

        Returns:
            The handler's return value on the first fire, None afterwards or
            when no handler is connected
        """
        with self._lock:
            if self._fired:
                logger.debug(f"Signal '{self.name}' already fired, ignoring")
                return None
            self._fired = True
            handler = self._handler
            # Drop the reference once delivered
            self._handler = None

        if handler is None:
            return None
        return handler(*args, **kwargs)


class CapabilityRegistry:
    """Named capabilities other components can look up."""

    def __init__(self):
        self._capabilities: dict[str, Any] = {}

    def reply(self, name: str, capability: Any) -> None:
        """
        Register a capability under a name (replaces any previous one).

        Args:
            name: Capability name, e.g. "seeder"
            capability: Object served for that name
        """
        self._capabilities[name] = capability

    def request(self, name: str) -> Any:
        """
        Get a capability by name.

        Raises:
            CapabilityNotFoundError: If nothing is registered under name
        """
        if name not in self._capabilities:
            raise CapabilityNotFoundError(name, list(self._capabilities))
        return self._capabilities[name]

    def list_capabilities(self) -> list[str]:
        return list(self._capabilities.keys())


class Host(CapabilityRegistry):
    """
    Minimal host application: capabilities plus named single-fire signals.

    Example:
        >>> host = Host()
        >>> Seeder().register(host)
        >>> host.request("seeder").set_iterations(5)
        >>> host.emit("database_started", schema, backend)
    """

    def __init__(self):
        super().__init__()
        self._signals: dict[str, Signal] = {}

    def signal(self, name: str) -> Signal:
        """Get (or create) the signal called name."""
        if name not in self._signals:
            self._signals[name] = Signal(name)
        return self._signals[name]

    def once(self, name: str, handler: Callable[..., Any]) -> None:
        """Subscribe handler to the named signal."""
        self.signal(name).connect(handler)

    def emit(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Fire the named signal; returns the handler's result."""
        return self.signal(name).fire(*args, **kwargs)
