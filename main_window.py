"""
main_window.py – GamerStore main window.

Layout
------
  ┌──────────────────────────────────────────────────────┐
  │  GamerStore            [Inicio]  [Juegos]            │  ← NAV
  ├──────────────────────────────────────────────────────┤
  │  Home:   Populares  ‹ [card] [card] [card] ›         │
  │          Recientes  ‹ [card] [card] [card] ›         │
  │  ── or ──                                            │
  │  Games:  [Search] [Genre ▾] [Platform ▾] [Sort ▾]    │
  │          N juegos                                    │
  │          Game list (QListWidget)                     │
  ├──────────────────────────────────────────────────────┤
  │  Status bar                                          │
  └──────────────────────────────────────────────────────┘

The window owns the catalog store and starts a single fetch the first time
any page is shown; both pages are listeners of that one load.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from models.game_record import ALL, FilterCriteria, SeeMoreEntry, SortKey
from services import carousel, fetch_service
from services.catalog_feed import CatalogFeed
from services.catalog_session import CatalogSession
from services.catalog_store import CatalogStore, LoadState
from services.navigation import GAMES, HOME, Location, parse_location
from services.renderer import CatalogRenderer
from widgets.carousel_widget import CarouselWidget
from widgets.debounce import Debouncer
from widgets.regions import ComboFacetRegion, LabelRegion, ListGridRegion
from widgets.thumbnails import ThumbnailPool
from workers.catalog_loader import CatalogLoader

logger = logging.getLogger(__name__)

# ── Colour palette ─────────────────────────────────────────────────────────────
_BG         = "#0f1117"
_BG2        = "#1a1d27"
_BG3        = "#22263a"
_ACCENT     = "#4f8ef7"
_ACCENT2    = "#7c5af0"
_TEXT       = "#e2e8f0"
_TEXT_DIM   = "#718096"
_BORDER     = "#2d3748"

_STYLESHEET = f"""
QMainWindow, QWidget {{
    background-color: {_BG};
    color: {_TEXT};
    font-family: 'Segoe UI', sans-serif;
    font-size: 13px;
}}

/* ── Navigation ─────────────────────────────────────────────────────────── */
QLabel#brand {{
    font-size: 20px;
    font-weight: bold;
    color: {_ACCENT};
}}
QPushButton#navButton {{
    background: transparent;
    border: none;
    padding: 6px 14px;
    color: {_TEXT_DIM};
    font-size: 14px;
}}
QPushButton#navButton:checked {{
    color: {_TEXT};
    border-bottom: 2px solid {_ACCENT};
}}

/* ── Filters ────────────────────────────────────────────────────────────── */
QLineEdit#searchBar, QComboBox {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    padding: 6px 12px;
    color: {_TEXT};
    selection-background-color: {_ACCENT};
}}
QLineEdit#searchBar:focus {{
    border-color: {_ACCENT};
}}
QLabel#counter, QLabel#loading {{
    color: {_TEXT_DIM};
}}

/* ── Game list ──────────────────────────────────────────────────────────── */
QListWidget#gameList {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    outline: none;
    padding: 4px;
}}
QListWidget#gameList::item {{
    padding: 10px 12px;
    border-bottom: 1px solid {_BORDER};
}}
QListWidget#gameList::item:hover {{
    background-color: {_BG3};
}}

/* ── Carousels ──────────────────────────────────────────────────────────── */
QLabel#sectionTitle {{
    font-size: 16px;
    font-weight: bold;
}}
QFrame#carouselCard {{
    background-color: {_BG2};
    border: 1px solid {_BORDER};
    border-radius: 8px;
}}
QFrame#carouselCard[seeMore="true"] {{
    background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
        stop:0 {_ACCENT}, stop:1 {_ACCENT2});
}}
QLabel#carouselTitle {{
    font-weight: bold;
    background: transparent;
}}
QLabel#carouselSubtitle {{
    color: {_TEXT_DIM};
    background: transparent;
}}

/* ── Buttons ────────────────────────────────────────────────────────────── */
QPushButton {{
    background-color: {_BG3};
    border: 1px solid {_BORDER};
    border-radius: 5px;
    padding: 6px 10px;
    color: {_TEXT};
}}
QPushButton:hover {{
    background-color: {_ACCENT};
    border-color: {_ACCENT};
}}
QPushButton:disabled {{
    color: {_BORDER};
    background-color: {_BG};
}}

/* ── Status bar ─────────────────────────────────────────────────────────── */
QStatusBar {{
    background: {_BG2};
    color: {_TEXT_DIM};
    border-top: 1px solid {_BORDER};
    font-size: 11px;
}}
"""

_SORT_LABELS = (
    (SortKey.POPULARITY, "Popularidad"),
    (SortKey.RELEASE_DATE, "Fecha de lanzamiento"),
    (SortKey.ALPHABETICAL, "Alfabético"),
)


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(self, start: Optional[Location] = None) -> None:
        super().__init__()
        self.setWindowTitle("GamerStore  ·  Catálogo de juegos gratuitos")
        self.setMinimumSize(480, 560)
        self.resize(1200, 780)
        self.setStyleSheet(_STYLESHEET)

        self._loader: Optional[CatalogLoader] = None
        self._store = CatalogStore()
        self._feed = CatalogFeed(self._store, self._start_fetch)
        self._thumbnails = ThumbnailPool(self)

        self._build_ui()
        self._connect_signals()
        self.navigate(start or Location())

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(24, 16, 24, 16)
        root_layout.setSpacing(16)

        # ── Zone A: Navigation ─────────────────────────────────────────────
        nav = QHBoxLayout()
        brand = QLabel("GamerStore")
        brand.setObjectName("brand")
        nav.addWidget(brand)
        nav.addStretch()

        self._home_btn = QPushButton("Inicio")
        self._games_btn = QPushButton("Juegos")
        self._nav_group = QButtonGroup(self)
        for btn in (self._home_btn, self._games_btn):
            btn.setObjectName("navButton")
            btn.setCheckable(True)
            self._nav_group.addButton(btn)
            nav.addWidget(btn)
        root_layout.addLayout(nav)

        # ── Zone B: Pages ──────────────────────────────────────────────────
        self._stack = QStackedWidget()
        self._home_page = HomePage(self._feed, self._thumbnails)
        self._games_page = CatalogPage(self._feed, self._thumbnails)
        self._stack.addWidget(self._home_page)
        self._stack.addWidget(self._games_page)
        root_layout.addWidget(self._stack, stretch=1)

        # Status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _connect_signals(self) -> None:
        self._home_btn.clicked.connect(lambda: self.navigate(Location(page=HOME)))
        self._games_btn.clicked.connect(self._on_games_clicked)
        self._home_page.link_activated.connect(self._on_link_activated)

    # ── Navigation ────────────────────────────────────────────────────────────

    def navigate(self, location: Location) -> None:
        if location.page == GAMES:
            self._games_btn.setChecked(True)
            self._stack.setCurrentWidget(self._games_page)
            self._games_page.open(location.sort_key)
        else:
            self._home_btn.setChecked(True)
            self._stack.setCurrentWidget(self._home_page)
            self._home_page.open()

    @Slot()
    def _on_games_clicked(self) -> None:
        self.navigate(Location(page=GAMES, sort_key=self._games_page.current_sort_key()))

    @Slot(str)
    def _on_link_activated(self, link: str) -> None:
        self.navigate(parse_location(link))

    def set_status(self, msg: str) -> None:
        self._status_bar.showMessage(msg)

    # ── Catalog loading ───────────────────────────────────────────────────────

    def _start_fetch(self) -> None:
        """Called by the feed, once per session."""
        self.set_status("Cargando catálogo…")
        job = partial(fetch_service.fetch_games, sort_by=SortKey.POPULARITY.value)
        self._loader = CatalogLoader(job, self)
        self._loader.loaded.connect(self._on_catalog_loaded)
        self._loader.failed.connect(self._on_catalog_failed)
        self._loader.finished.connect(self._on_catalog_settled)
        self._loader.start()

    @Slot(object)
    def _on_catalog_loaded(self, payload: object) -> None:
        # GUI thread: the only place the store is populated.
        self._feed.deliver(payload)
        if self._store.state is LoadState.EMPTY:
            self.set_status("La API no devolvió juegos.")
        else:
            self.set_status(f"{len(self._store.records)} juegos cargados.")

    @Slot(object)
    def _on_catalog_failed(self, exc: object) -> None:
        self._feed.fail(exc)
        self.set_status("Error al cargar el catálogo.")

    @Slot()
    def _on_catalog_settled(self) -> None:
        self._feed.settle()

    def closeEvent(self, event) -> None:
        self._thumbnails.shutdown()
        if self._loader is not None and self._loader.isRunning():
            self._loader.wait()
        super().closeEvent(event)


class HomePage(QWidget):
    """Landing page with the "popular" and "recent" carousels."""

    link_activated = Signal(str)

    def __init__(
        self,
        feed: CatalogFeed,
        thumbnails: Optional[ThumbnailPool] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._feed = feed
        self._thumbnails = thumbnails

        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        self._popular_box = self._section(layout, "Juegos populares")
        self._recent_box = self._section(layout, "Lanzamientos recientes")
        layout.addStretch()

        feed.subscribe(self)

    def _section(self, layout: QVBoxLayout, title: str) -> QVBoxLayout:
        label = QLabel(title)
        label.setObjectName("sectionTitle")
        layout.addWidget(label)
        box = QVBoxLayout()
        placeholder = QLabel("Cargando juegos...")
        placeholder.setObjectName("loading")
        box.addWidget(placeholder)
        layout.addLayout(box)
        return box

    def open(self) -> None:
        self._feed.request()

    # ── Catalog listener ──────────────────────────────────────────────────────

    def catalog_ready(self, store: CatalogStore) -> None:
        records = list(store.records)
        if not records:
            logger.warning("Carousels: listing API returned no games")
            self._clear_all()
            return
        self._install(self._popular_box, CarouselWidget(
            carousel.popular_slice(records), SeeMoreEntry(SortKey.POPULARITY),
            "populares", self._thumbnails,
        ))
        self._install(self._recent_box, CarouselWidget(
            carousel.recent_slice(records), SeeMoreEntry(SortKey.RELEASE_DATE),
            "recientes", self._thumbnails,
        ))

    def catalog_failed(self, exc: BaseException) -> None:
        # Carousels fail quietly; the catalog page shows the error.
        logger.error("Could not load carousels: %s", exc)
        self._clear_all()

    def catalog_settled(self) -> None:
        pass

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _install(self, box: QVBoxLayout, widget: CarouselWidget) -> None:
        self._clear(box)
        widget.link_activated.connect(self.link_activated)
        box.addWidget(widget)

    def _clear_all(self) -> None:
        for box in (self._popular_box, self._recent_box):
            self._clear(box)

    @staticmethod
    def _clear(box: QVBoxLayout) -> None:
        while box.count():
            child = box.takeAt(0).widget()
            if child is not None:
                child.deleteLater()


class CatalogPage(QWidget):
    """Filterable game list."""

    def __init__(
        self,
        feed: CatalogFeed,
        thumbnails: Optional[ThumbnailPool] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._feed = feed

        self._build_ui()

        renderer = CatalogRenderer(
            grid=ListGridRegion(self._game_list, thumbnails),
            counter=LabelRegion(self._counter),
            loading=LabelRegion(self._loading),
            genre_filter=ComboFacetRegion(self._genre_combo),
            platform_filter=ComboFacetRegion(self._platform_combo),
        )
        self._session = CatalogSession(feed.store, renderer, self.criteria)
        self._debouncer = Debouncer(parent=self)
        self._connect_signals()

        feed.subscribe(self)

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        filters = QHBoxLayout()
        filters.setSpacing(10)
        self._search_bar = QLineEdit()
        self._search_bar.setObjectName("searchBar")
        self._search_bar.setPlaceholderText("Buscar por título...")
        self._search_bar.setClearButtonEnabled(True)
        self._search_bar.setMinimumHeight(36)
        self._search_bar.setFont(QFont("Segoe UI", 13))

        self._genre_combo = QComboBox()
        self._genre_combo.addItem("Todos los géneros", ALL)
        self._platform_combo = QComboBox()
        self._platform_combo.addItem("Todas las plataformas", ALL)
        self._sort_combo = QComboBox()
        for key, label in _SORT_LABELS:
            self._sort_combo.addItem(label, key.value)

        filters.addWidget(self._search_bar, 4)
        filters.addWidget(self._genre_combo, 2)
        filters.addWidget(self._platform_combo, 2)
        filters.addWidget(self._sort_combo, 2)
        layout.addLayout(filters)

        info = QHBoxLayout()
        self._counter = QLabel("")
        self._counter.setObjectName("counter")
        self._loading = QLabel("")
        self._loading.setObjectName("loading")
        self._loading.setVisible(False)
        info.addWidget(self._counter)
        info.addStretch()
        info.addWidget(self._loading)
        layout.addLayout(info)

        self._game_list = QListWidget()
        self._game_list.setObjectName("gameList")
        self._game_list.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._game_list.setWordWrap(True)
        layout.addWidget(self._game_list, stretch=1)

    def _connect_signals(self) -> None:
        self._search_bar.textChanged.connect(lambda _text: self._debouncer.poke())
        self._debouncer.triggered.connect(self._on_filters_changed)
        self._genre_combo.currentIndexChanged.connect(lambda _i: self._on_filters_changed())
        self._platform_combo.currentIndexChanged.connect(lambda _i: self._on_filters_changed())
        self._sort_combo.currentIndexChanged.connect(lambda _i: self._on_filters_changed())

    # ── Public API ────────────────────────────────────────────────────────────

    def open(self, sort_key: SortKey) -> None:
        """Show the page with *sort_key* selected; joins or starts the shared load."""
        self._select_sort(sort_key)
        if not self._feed.settled:
            self._session.begin_load()
        self._feed.request()

    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            genre=self._genre_combo.currentData() or ALL,
            platform=self._platform_combo.currentData() or ALL,
            search_term=self._search_bar.text(),
            sort_key=self.current_sort_key(),
        )

    def current_sort_key(self) -> SortKey:
        return SortKey.parse(self._sort_combo.currentData())

    # ── Catalog listener ──────────────────────────────────────────────────────

    def catalog_ready(self, store: CatalogStore) -> None:
        self._session.complete_load()

    def catalog_failed(self, exc: BaseException) -> None:
        self._session.fail_load(exc)

    def catalog_settled(self) -> None:
        self._session.end_load()

    # ── Filters ───────────────────────────────────────────────────────────────

    @Slot()
    def _on_filters_changed(self) -> None:
        self._debouncer.cancel()
        self._session.apply_filters()

    def _select_sort(self, sort_key: SortKey) -> None:
        index = self._sort_combo.findData(sort_key.value)
        if index >= 0 and index != self._sort_combo.currentIndex():
            # Triggers a filter pass once the catalog is loaded.
            self._sort_combo.setCurrentIndex(index)
