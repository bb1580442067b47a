"""Logging utilities for the Alfen Eve client."""

import logging
import time
from typing import Dict


class SmartLogger:
    """Logger for one charger, shared by its poller and every cycle's client.

    Status lines (login and logout replies, property values) are keyed and
    only logged when they change. Failed poll cycles are counted; once
    ``verbose_after`` cycles have failed within ``failure_window`` seconds
    every status line is logged again until a cycle succeeds.
    """

    def __init__(self, logger_name: str, failure_window: float = 300, verbose_after: int = 3):
        self._logger = logging.getLogger(logger_name)
        self._failure_window = failure_window
        self._verbose_after = verbose_after
        self._failed_cycles = 0
        self._last_failure_time = 0.0
        self._last_status: Dict[str, str] = {}

    @property
    def failed_cycles(self) -> int:
        return self._failed_cycles

    @property
    def verbose(self) -> bool:
        """Return True while recent failures warrant full status logging."""
        if time.monotonic() - self._last_failure_time > self._failure_window:
            return False
        return self._failed_cycles >= self._verbose_after

    def cycle_failed(self, msg: str, *args) -> None:
        """Log a failed poll cycle and count it."""
        self._failed_cycles += 1
        self._last_failure_time = time.monotonic()
        self._logger.error(msg + " (failed polls: %d)", *args, self._failed_cycles)

    def cycle_succeeded(self, address: str) -> None:
        """Reset the failure count after a good cycle."""
        if self._failed_cycles:
            self._logger.info(
                "Charger %s recovered after %d failed polls", address, self._failed_cycles
            )
            self._last_status.clear()
        self._failed_cycles = 0

    def status(self, key: str, msg: str, *args) -> None:
        """Debug-log a status line unless it repeats the last one for ``key``."""
        rendered = str(args)
        if not self.verbose and self._last_status.get(key) == rendered:
            return
        self._last_status[key] = rendered
        self._logger.debug(msg, *args)

    def debug(self, msg: str, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        self._logger.exception(msg, *args, **kwargs)
