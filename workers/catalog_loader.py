"""
workers/catalog_loader.py – Background QThread that runs one fetch coroutine.

Signal contract
---------------
  loaded(object) : Whatever the coroutine returned (the decoded payload)
  failed(object) : The exception that ended the coroutine
  finished()     : Built-in QThread signal; fires after either of the above,
                   which makes it the place for cleanup that must always run

The coroutine is driven with asyncio.run on the worker thread so the GUI
thread never blocks on the network.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from PySide6.QtCore import QThread, Signal

logger = logging.getLogger(__name__)


class CatalogLoader(QThread):
    """
    Runs *job* (a zero-argument coroutine function) on a background thread.

    Instantiate, connect signals, then call start().
    """

    loaded = Signal(object)
    failed = Signal(object)

    def __init__(self, job: Callable[[], Awaitable[Any]], parent=None) -> None:
        super().__init__(parent)
        self._job = job

    def run(self) -> None:
        try:
            result = asyncio.run(self._job())
        except Exception as exc:  # noqa: BLE001
            # Catch-all so the worker thread never silently dies.
            logger.debug("Loader job failed: %r", exc)
            self.failed.emit(exc)
        else:
            self.loaded.emit(result)
