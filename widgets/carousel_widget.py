"""
widgets/carousel_widget.py – Horizontally paged strip of game cards.

  ┌───┬──────────────────────────────────────────┬───┐
  │ ‹ │  [card] [card] [card] … [Ver más]        │ › │
  └───┴──────────────────────────────────────────┴───┘

The track is a child of a clipping viewport; moving it by offset_percent of
the viewport width is what pages the strip.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from PySide6.QtCore import Qt, QUrl, Signal, Slot
from PySide6.QtGui import QDesktopServices, QPixmap
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from models.game_record import GameRecord, SeeMoreEntry
from services import thumbnail_service
from services.carousel import CarouselController, CarouselItem
from widgets.thumbnails import ThumbnailPool

logger = logging.getLogger(__name__)

CARD_HEIGHT: int = 230
CARD_SPACING: int = 8


class _CarouselCard(QFrame):
    """One card; clicking opens the game page or emits the see-more link."""

    clicked = Signal()

    def __init__(self, item: CarouselItem, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.item = item
        self.setObjectName("carouselCard")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        self.thumbnail = QLabel()
        self.thumbnail.setObjectName("carouselThumb")
        self.thumbnail.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.thumbnail.setVisible(False)
        layout.addWidget(self.thumbnail)

        if isinstance(item, SeeMoreEntry):
            self.setProperty("seeMore", True)
            title = QLabel("→  Ver más")
            subtitle = QLabel("Explorar catálogo completo")
        else:
            title = QLabel(item.title)
            subtitle = QLabel(item.genre)
            self.setToolTip(item.detail_url)
        title.setObjectName("carouselTitle")
        title.setWordWrap(True)
        subtitle.setObjectName("carouselSubtitle")
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addStretch()

    def set_thumbnail(self, pixmap: QPixmap) -> None:
        self.thumbnail.setPixmap(pixmap)
        self.thumbnail.setVisible(True)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mouseReleaseEvent(event)


class CarouselWidget(QWidget):
    """
    Qt front-end for a CarouselController.

    Emits link_activated(str) with the in-app location of the "see more" card.
    """

    link_activated = Signal(str)

    def __init__(
        self,
        records: Sequence[GameRecord],
        see_more: SeeMoreEntry,
        name: str,
        thumbnails: Optional[ThumbnailPool] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName(f"carousel-{name}")
        self._name = name
        self._thumbnails = thumbnails
        self._controller = CarouselController(records, see_more, self._viewport_width)
        self._cards: List[_CarouselCard] = []
        self._build_ui()
        self._update_view()
        self._attach_thumbnails()

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self._prev_btn = QPushButton("‹")
        self._prev_btn.setObjectName("carouselPrev")
        self._prev_btn.setFixedWidth(36)
        self._next_btn = QPushButton("›")
        self._next_btn.setObjectName("carouselNext")
        self._next_btn.setFixedWidth(36)

        self._viewport = QFrame()
        self._viewport.setFixedHeight(CARD_HEIGHT)
        self._track = QWidget(self._viewport)
        for item in self._controller.items:
            card = _CarouselCard(item, self._track)
            card.clicked.connect(lambda item=item: self._on_card_clicked(item))
            self._cards.append(card)

        layout.addWidget(self._prev_btn)
        layout.addWidget(self._viewport, stretch=1)
        layout.addWidget(self._next_btn)

        self._prev_btn.clicked.connect(self._on_prev)
        self._next_btn.clicked.connect(self._on_next)

    # ── Thumbnails ────────────────────────────────────────────────────────────

    def _attach_thumbnails(self) -> None:
        if self._thumbnails is None:
            return
        self._thumbnails.ready.connect(self._on_thumbnail_ready)
        for card in self._cards:
            url = _thumbnail_url(card.item)
            pixmap = self._thumbnails.pixmap(url) if url else None
            if pixmap is not None:
                card.set_thumbnail(pixmap)
        games = [card.item for card in self._cards if isinstance(card.item, GameRecord)]
        self._thumbnails.request(thumbnail_service.thumbnail_urls(games))

    @Slot(str, object)
    def _on_thumbnail_ready(self, url: str, pixmap: object) -> None:
        for card in self._cards:
            if _thumbnail_url(card.item) == url:
                card.set_thumbnail(pixmap)

    # ── Controller bridge ─────────────────────────────────────────────────────

    @property
    def controller(self) -> CarouselController:
        return self._controller

    def _viewport_width(self) -> int:
        window = self.window()
        return window.width() if window is not None else self.width()

    @Slot()
    def _on_prev(self) -> None:
        self._controller.previous()
        self._update_view()

    @Slot()
    def _on_next(self) -> None:
        self._controller.next()
        self._update_view()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._controller.resize()
        self._update_view()

    def _on_card_clicked(self, item: CarouselItem) -> None:
        if isinstance(item, SeeMoreEntry):
            logger.debug("[%s] see-more → %s", self._name, item.link)
            self.link_activated.emit(item.link)
        elif item.detail_url:
            QDesktopServices.openUrl(QUrl(item.detail_url))

    def _update_view(self) -> None:
        ctrl = self._controller
        width = max(self._viewport.width(), 1)
        card_width = width // ctrl.items_visible

        for index, card in enumerate(self._cards):
            card.setGeometry(
                index * card_width, 0, card_width - CARD_SPACING, CARD_HEIGHT
            )
        self._track.resize(card_width * ctrl.total_items, CARD_HEIGHT)
        self._track.move(int(ctrl.offset_percent * width / 100), 0)

        self._prev_btn.setEnabled(ctrl.prev_enabled)
        self._next_btn.setEnabled(ctrl.next_enabled)


def _thumbnail_url(item: CarouselItem) -> str:
    return item.thumbnail_url if isinstance(item, GameRecord) else ""
