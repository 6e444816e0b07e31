"""
Life Expectancy Map - Main Window

Fixed-size PySide6 window holding the map viewport and the frame loop.
"""

import logging

from PySide6 import QtCore, QtWidgets

from core.config import DEFAULT_CONFIG
from core.hover import HoverController
from core.state import AppState
from vis.projection import MapView
from vis.renderer import MapRenderer
from .viewport import MapViewport

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """
    Main application window.

    Owns the AppState and wires it to the hover controller, map view and
    renderer. Data must already be loaded; see `core.data.load_map_data`.
    """

    def __init__(self, map_data, config=DEFAULT_CONFIG):
        super().__init__()
        self.config = config
        self.setWindowTitle("Life Expectancy")
        self.setFixedSize(*self.config.window_size)

        # Core State
        self.state = AppState.from_map_data(map_data)
        self.view = MapView(*self.config.viewport)
        self.hover = HoverController(self.state, self.view.screen_to_geo)
        self.renderer = MapRenderer(self.config)

        # Build UI
        self.viewport = MapViewport(self.state, self.view, self.renderer, self.hover)
        self.setCentralWidget(self.viewport)
        self.viewport.view_changed.connect(self.viewport.update)

        # Frame timer
        self.timer = QtCore.QTimer()
        self.timer.setInterval(self.config.frame_interval_ms)
        self.timer.timeout.connect(self._game_loop)

    def showEvent(self, event):
        super().showEvent(event)
        if not self.timer.isActive():
            self.timer.start()
            logger.info("Map window shown with %d regions.", len(self.state.regions))

    def _game_loop(self):
        """Per-frame update: apply queued input, then repaint."""
        self.hover.process_events()
        self.viewport.update()

    def keyPressEvent(self, event):
        """Handle keyboard shortcuts."""
        key = event.key()

        if key == QtCore.Qt.Key_R:
            # Reset pan/zoom to the whole world
            self.view.reset()
            self.hover.clear_selection()

        elif key == QtCore.Qt.Key_Escape:
            self.close()

        else:
            super().keyPressEvent(event)
