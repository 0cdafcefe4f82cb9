"""
workers/thumbnail_loader.py – Background QThread that downloads thumbnails.

Signal contract
---------------
  loaded(str, object) : URL and raw image bytes, once per downloaded image
  finished()          : Built-in QThread signal; all URLs were tried

Decoding into a QPixmap happens on the GUI thread, in the receiver.
"""

import logging
from typing import Callable, Sequence

from PySide6.QtCore import QThread, Signal

from services import thumbnail_service

logger = logging.getLogger(__name__)

FetchMany = Callable[..., int]


class ThumbnailLoader(QThread):
    """
    Downloads *urls* one after another with *fetch*.

    requestInterruption() stops the loop before the next download.
    """

    loaded = Signal(str, object)

    def __init__(
        self,
        urls: Sequence[str],
        fetch: FetchMany = thumbnail_service.fetch_thumbnails,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._urls = list(urls)
        self._fetch = fetch

    def run(self) -> None:
        try:
            count = self._fetch(
                self._urls, self.loaded.emit, should_stop=self.isInterruptionRequested
            )
        except Exception as exc:  # noqa: BLE001
            # Catch-all so the worker thread never silently dies.
            logger.error("Thumbnail loader failed: %s", exc)
        else:
            logger.debug("Downloaded %d of %d thumbnails", count, len(self._urls))
