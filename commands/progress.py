"""
Progress logging of long commands
"""
import logging
import threading


class Progress:
    """Logs the completion of a task every 10%, safe to tick from many threads"""

    def __init__(self, total: int, logger: logging.Logger, description: str = "Progress"):
        self.total = total
        self.logger = logger
        self.description = description
        self._current = 0
        self._next_step = 1
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        return self._current

    def tick(self, count: int = 1):
        with self._lock:
            self._current += count
            while self.total and self._next_step <= 10 and self._current * 10 >= self._next_step * self.total:
                self.logger.debug(f"{self.description}: {self._next_step * 10} %")
                self._next_step += 1
