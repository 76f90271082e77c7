"""Process-wide logging state.

Only the setup helpers in this package touch it; components receive a
``logging.Logger`` when they are constructed.
"""

import queue
import threading
from dataclasses import dataclass, field
from logging.handlers import QueueListener


@dataclass
class _LoggerState:
    """Root handler bookkeeping.

    Attributes:
        lock: Serializes (re)initialization of the root logger
        root_initialized: Whether root handlers are installed
        queue_listener: Thread draining ``log_queue`` into the handlers
        log_queue: Queue fed by the root ``QueueHandler``

    """

    lock: threading.Lock = field(default_factory=threading.Lock)
    root_initialized: bool = False
    queue_listener: QueueListener | None = None
    log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Return the logging state shared by this process."""
    return _state
