import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, List

logger = logging.getLogger("snapscribe")

MAX_LOG_LINES = 200


@dataclass
class StatusStore:
    busy: bool = False
    last_error: Optional[str] = None
    logs: List[str] = field(default_factory=list)
    # gateway requests log from threadpool workers
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def set_busy(self, v: bool):
        self.busy = v

    def log(self, msg: str, level: int = logging.INFO):
        logger.log(level, msg)
        with self._lock:
            self.logs.append(msg)
            if len(self.logs) > MAX_LOG_LINES:
                del self.logs[:-MAX_LOG_LINES]

    def warn(self, msg: str):
        self.log(msg, level=logging.WARNING)
