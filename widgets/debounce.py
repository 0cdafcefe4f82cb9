"""
widgets/debounce.py – Collapses bursts of input events into one action.

QtCore only, so it can run under a plain QCoreApplication.
"""

from PySide6.QtCore import QObject, QTimer, Signal, Slot

# Quiet period (ms) before a burst of search keystrokes triggers a filter pass.
SEARCH_DEBOUNCE_MS: int = 300


class Debouncer(QObject):
    """
    Emits triggered() once, *interval_ms* after the last poke().

    Every poke() restarts the pending timer, cancelling the previously
    scheduled emission.
    """

    triggered = Signal()

    def __init__(self, interval_ms: int = SEARCH_DEBOUNCE_MS, parent=None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.triggered)

    @Slot()
    def poke(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()

    def is_pending(self) -> bool:
        return self._timer.isActive()
