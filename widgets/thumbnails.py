"""
widgets/thumbnails.py – Shared cache of card thumbnails.

Both the Games list and the Home carousels ask the same pool, so an image is
downloaded once per session however many cards show it.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from PySide6.QtCore import QObject, QSize, Qt, Signal, Slot
from PySide6.QtGui import QPixmap

from workers.thumbnail_loader import ThumbnailLoader

logger = logging.getLogger(__name__)

# FreeToGame thumbnails are 365×206.
THUMBNAIL_SIZE = QSize(184, 104)


class ThumbnailPool(QObject):
    """
    Emits ready(url, QPixmap) once per URL, on the GUI thread.
    """

    ready = Signal(str, object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._pixmaps: Dict[str, QPixmap] = {}
        self._requested: Set[str] = set()
        self._loaders: List[ThumbnailLoader] = []

    def pixmap(self, url: str) -> Optional[QPixmap]:
        return self._pixmaps.get(url)

    def request(self, urls: Iterable[str]) -> None:
        """Start downloading every URL not already cached or on its way."""
        missing = [url for url in urls if url and url not in self._requested]
        if not missing:
            return
        self._requested.update(missing)
        loader = ThumbnailLoader(missing, parent=self)
        loader.loaded.connect(self._on_loaded)
        loader.finished.connect(self._on_loader_finished)
        self._loaders.append(loader)
        loader.start()

    def shutdown(self) -> None:
        """Stop and join running loaders; call before the window closes."""
        for loader in list(self._loaders):
            loader.requestInterruption()
            loader.wait()

    @Slot(str, object)
    def _on_loaded(self, url: str, data: object) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(bytes(data)):
            logger.warning("Could not decode thumbnail %s", url)
            return
        pixmap = pixmap.scaled(
            THUMBNAIL_SIZE,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._pixmaps[url] = pixmap
        self.ready.emit(url, pixmap)

    @Slot()
    def _on_loader_finished(self) -> None:
        loader = self.sender()
        if loader in self._loaders:
            self._loaders.remove(loader)
        loader.deleteLater()
