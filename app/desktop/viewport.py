"""
Map viewport widget.

Paints the map with QPainter and forwards mouse input: pointer moves are
queued for the hover controller, drag pans and wheel zooms the map view.
"""

from PySide6 import QtCore, QtWidgets
from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QPainter, QWheelEvent

ZOOM_STEP = 1.25


class MapViewport(QtWidgets.QWidget):
    """
    A PySide6 widget that renders the life expectancy map.

    Input is turned into event dicts and queued on the hover controller; the
    owning window drains the queue once per frame.
    """

    # Signal emitted when the view changes (pan/zoom)
    view_changed = QtCore.Signal()

    def __init__(self, state, view, renderer, hover, parent=None):
        super().__init__(parent)
        self.state = state
        self.view = view
        self.renderer = renderer
        self.hover = hover
        self._drag_origin = None

        # Hover needs move events without a pressed button
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            self.renderer.draw(painter, self.state, self.view)
        finally:
            painter.end()

    # ─────────────────────────────────────────────────────────────────────────
    # Mouse Event Handling
    # ─────────────────────────────────────────────────────────────────────────

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            if self.view.contains_screen(pos.x(), pos.y()):
                self._drag_origin = (pos.x(), pos.y())
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_origin = None
        super().mouseReleaseEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        if self._drag_origin is not None:
            self.view.pan(pos.x() - self._drag_origin[0], pos.y() - self._drag_origin[1])
            self._drag_origin = (pos.x(), pos.y())
            self.view_changed.emit()

        self.hover.post_event({
            "event_type": "pointer_move",
            "x": pos.x(),
            "y": pos.y(),
        })
        super().mouseMoveEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        pos = event.position()
        dy = event.angleDelta().y()
        if dy and self.view.contains_screen(pos.x(), pos.y()):
            factor = ZOOM_STEP if dy > 0 else 1.0 / ZOOM_STEP
            self.view.zoom(factor, pos.x(), pos.y())
            self.view_changed.emit()
            # Geography under a still pointer changed, so re-hit-test
            self.hover.post_event({"event_type": "pointer_move", "x": pos.x(), "y": pos.y()})
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        """Forward key events to parent for handling."""
        event.ignore()
