"""
QPainter renderer for the life expectancy map.

Draws the base map, every region in its resting color, and the hovered region
in its highlight color with a name/value label box.
"""
import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QFontMetricsF, QPainter, QPainterPath, QPen, QPolygonF

from core.config import DEFAULT_CONFIG

GRATICULE_STEP = 30
OUTLINE_COLOR = QColor(60, 60, 60)
GRATICULE_COLOR = QColor(255, 255, 255, 70)


def label_text(region, value):
    """
    '{name}:{value}', or just the name when the region has no value.

    Values print as the shortest single-precision repr, so 78.7414634146342
    reads 78.74146 and 40 reads 40.0.
    """
    if value is None:
        return region.name
    return f"{region.name}:{str(np.float32(value))}"


class MapRenderer:
    """
    Stateless apart from configuration and cached region paths.

    Region outlines only change with the view, so screen paths are cached per
    (region id, zoom, offset).
    """

    def __init__(self, config=DEFAULT_CONFIG):
        self.config = config
        self.last_label = None
        self._path_cache = {}
        self._cache_key = None

    def draw(self, painter: QPainter, state, view):
        """Render one frame of the map for the given AppState and MapView."""
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self._draw_base_map(painter, view)

        view_rect = QRectF(view.x, view.y, view.width, view.height)
        painter.save()
        painter.setClipRect(view_rect)
        for region in state.regions:
            self._draw_region(painter, region, view)

        selected = state.selected
        if selected is not None:
            selected.set_highlight_color(self.config.highlight_color)
            self._draw_region(painter, selected, view)
        painter.restore()

        self.last_label = None
        if selected is not None:
            self.last_label = label_text(selected, state.selected_value)
            self._draw_label(painter, self.last_label)

    # ─────────────────────────────────────────────────────────────────────────
    # Base map
    # ─────────────────────────────────────────────────────────────────────────

    def _draw_base_map(self, painter, view):
        width, height = self.config.window_size
        painter.fillRect(QRectF(0, 0, width, height), QColor(*self.config.background_color))
        view_rect = QRectF(view.x, view.y, view.width, view.height)
        painter.fillRect(view_rect, QColor(*self.config.ocean_color))

        painter.save()
        painter.setClipRect(view_rect)
        pen = QPen(GRATICULE_COLOR)
        pen.setCosmetic(True)
        painter.setPen(pen)
        for lon in range(-180, 181, GRATICULE_STEP):
            x0, y0 = view.geo_to_screen(lon, 85.0)
            x1, y1 = view.geo_to_screen(lon, -85.0)
            painter.drawLine(QPointF(float(x0), float(y0)), QPointF(float(x1), float(y1)))
        for lat in range(-60, 61, GRATICULE_STEP):
            x0, y0 = view.geo_to_screen(-180.0, lat)
            x1, y1 = view.geo_to_screen(180.0, lat)
            painter.drawLine(QPointF(float(x0), float(y0)), QPointF(float(x1), float(y1)))
        painter.restore()

    # ─────────────────────────────────────────────────────────────────────────
    # Regions
    # ─────────────────────────────────────────────────────────────────────────

    def _ring_polygon(self, ring, view):
        coords = np.asarray(ring.coords, dtype=np.float64)
        xs, ys = view.geo_to_screen(coords[:, 0], coords[:, 1])
        return QPolygonF([QPointF(x, y) for x, y in zip(xs.tolist(), ys.tolist())])

    def _part_path(self, polygon, view):
        path = QPainterPath()
        path.setFillRule(Qt.FillRule.OddEvenFill)
        path.addPolygon(self._ring_polygon(polygon.exterior, view))
        path.closeSubpath()
        for interior in polygon.interiors:
            path.addPolygon(self._ring_polygon(interior, view))
            path.closeSubpath()
        return path

    def _region_paths(self, region, view):
        key = (view.zoom_level, view.offset_x, view.offset_y)
        if key != self._cache_key:
            self._path_cache.clear()
            self._cache_key = key
        paths = self._path_cache.get(id(region))
        if paths is None:
            paths = [self._part_path(part.polygon, view) for part in region.parts()]
            self._path_cache[id(region)] = paths
        return paths

    def _draw_region(self, painter, region, view):
        pen = QPen(OUTLINE_COLOR)
        pen.setCosmetic(True)
        painter.setPen(pen)
        fill = region.fill_color or self.config.fallback_color
        for part, path in zip(region.parts(), self._region_paths(region, view)):
            color = part.highlight_color if region.is_selected and part.highlight_color else fill
            painter.setBrush(QColor(*color))
            painter.drawPath(path)

    # ─────────────────────────────────────────────────────────────────────────
    # Label
    # ─────────────────────────────────────────────────────────────────────────

    def _draw_label(self, painter, text):
        xbase, ybase = self.config.label_origin
        font = QFont()
        font.setPixelSize(self.config.label_font_px)
        painter.setFont(font)
        text_width = QFontMetricsF(font).horizontalAdvance(text)

        painter.setPen(QColor(0, 0, 0))
        painter.setBrush(QColor(*self.config.label_background))
        painter.drawRoundedRect(QRectF(xbase, ybase + 15, text_width + 6, 18), 5, 5)

        # Left aligned, vertically centred on ybase + 22
        painter.drawText(
            QRectF(xbase + 3, ybase + 13, text_width + 3, 18),
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
            text,
        )
