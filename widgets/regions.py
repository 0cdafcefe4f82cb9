"""
widgets/regions.py – Qt implementations of the renderer's display regions.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import Qt, QUrl, Slot
from PySide6.QtGui import QDesktopServices, QIcon
from PySide6.QtWidgets import QComboBox, QLabel, QListWidget, QListWidgetItem

from models.game_record import GameRecord
from services import thumbnail_service
from widgets.thumbnails import THUMBNAIL_SIZE, ThumbnailPool


def card_text(record: GameRecord) -> str:
    return (
        f"{record.title}\n"
        f"{record.genre}\n"
        f"Plataforma: {record.platform}\n"
        f"Lanzamiento: {record.release_date}"
    )


class ListGridRegion:
    """
    Result grid backed by a QListWidget; activating a card opens its page.

    With a ThumbnailPool, each card shows its game's thumbnail as the item
    icon once the image has been downloaded.
    """

    def __init__(self, widget: QListWidget, thumbnails: Optional[ThumbnailPool] = None) -> None:
        self._widget = widget
        self._thumbnails = thumbnails
        self._widget.itemActivated.connect(self._on_item_activated)
        if thumbnails is not None:
            self._widget.setIconSize(THUMBNAIL_SIZE)
            thumbnails.ready.connect(self._on_thumbnail_ready)

    def show_records(self, records: Sequence[GameRecord]) -> None:
        self._widget.clear()
        for record in records:
            item = QListWidgetItem(card_text(record))
            item.setData(Qt.ItemDataRole.UserRole, record)
            item.setToolTip(record.detail_url)
            self._set_icon(item, record)
            self._widget.addItem(item)
        if self._thumbnails is not None:
            self._thumbnails.request(thumbnail_service.thumbnail_urls(records))

    def show_message(self, text: str) -> None:
        self._widget.clear()
        item = QListWidgetItem(text)
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        self._widget.addItem(item)

    def _set_icon(self, item: QListWidgetItem, record: GameRecord) -> None:
        if self._thumbnails is None:
            return
        pixmap = self._thumbnails.pixmap(record.thumbnail_url)
        if pixmap is not None:
            item.setIcon(QIcon(pixmap))

    @Slot(str, object)
    def _on_thumbnail_ready(self, url: str, pixmap: object) -> None:
        for row in range(self._widget.count()):
            item = self._widget.item(row)
            record = item.data(Qt.ItemDataRole.UserRole)
            if isinstance(record, GameRecord) and record.thumbnail_url == url:
                item.setIcon(QIcon(pixmap))

    @Slot(QListWidgetItem)
    def _on_item_activated(self, item: QListWidgetItem) -> None:
        record = item.data(Qt.ItemDataRole.UserRole)
        if isinstance(record, GameRecord) and record.detail_url:
            QDesktopServices.openUrl(QUrl(record.detail_url))


class LabelRegion:
    """Counter or status line backed by a QLabel."""

    def __init__(self, label: QLabel) -> None:
        self._label = label

    def set_text(self, text: str) -> None:
        self._label.setText(text)

    def set_visible(self, visible: bool) -> None:
        self._label.setVisible(visible)


class ComboFacetRegion:
    """Filter choice list backed by a QComboBox; item data holds the value."""

    def __init__(self, combo: QComboBox) -> None:
        self._combo = combo

    def set_choices(self, all_label: str, all_value: str, values: Sequence[str]) -> None:
        self._combo.blockSignals(True)
        try:
            self._combo.clear()
            self._combo.addItem(all_label, all_value)
            for value in values:
                self._combo.addItem(value, value)
        finally:
            self._combo.blockSignals(False)
