"""
Web-Mercator map view for the inset map viewport.

Converts between screen pixels and (lon, lat) degrees, and carries the
pan/zoom state driven by mouse drag and wheel.
"""
import numpy as np

MAX_LATITUDE = 85.0511287798
MIN_ZOOM = 1.0
MAX_ZOOM = 64.0


class MapView:
    """
    Screen <-> geographic transform for a rectangular viewport.

    At zoom 1 the whole world is exactly as wide as the viewport and centred
    vertically in it.
    """

    def __init__(self, x=50, y=50, width=700, height=500):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.zoom_level = MIN_ZOOM
        self.reset()

    def reset(self):
        """Back to the whole-world view."""
        self.zoom_level = MIN_ZOOM
        self.offset_x = 0.0
        self.offset_y = (self.height - self.world_size) / 2.0

    @property
    def world_size(self):
        return self.width * self.zoom_level

    def contains_screen(self, sx, sy):
        return self.x <= sx < self.x + self.width and self.y <= sy < self.y + self.height

    def geo_to_screen(self, lon, lat):
        """Project degrees to screen pixels. Accepts scalars or arrays."""
        lon = np.asarray(lon, dtype=np.float64)
        lat = np.clip(np.asarray(lat, dtype=np.float64), -MAX_LATITUDE, MAX_LATITUDE)

        x_norm = (lon + 180.0) / 360.0
        lat_rad = np.radians(lat)
        y_norm = 0.5 - np.log(np.tan(np.pi / 4.0 + lat_rad / 2.0)) / (2.0 * np.pi)

        sx = self.x + self.offset_x + x_norm * self.world_size
        sy = self.y + self.offset_y + y_norm * self.world_size
        return sx, sy

    def screen_to_geo(self, sx, sy):
        """
        Inverse projection of a single screen point.
        Returns (lon, lat), or None outside the viewport or off the world.
        """
        if not self.contains_screen(sx, sy):
            return None

        x_norm = (sx - self.x - self.offset_x) / self.world_size
        y_norm = (sy - self.y - self.offset_y) / self.world_size
        if not (0.0 <= x_norm <= 1.0 and 0.0 <= y_norm <= 1.0):
            return None

        lon = x_norm * 360.0 - 180.0
        lat = np.degrees(np.arctan(np.sinh(np.pi * (1.0 - 2.0 * y_norm))))
        return float(lon), float(lat)

    def zoom(self, factor, sx, sy):
        """Zoom by factor keeping the point under (sx, sy) fixed."""
        new_zoom = min(max(self.zoom_level * factor, MIN_ZOOM), MAX_ZOOM)
        scale = new_zoom / self.zoom_level
        if scale == 1.0:
            return
        anchor_x = sx - self.x
        anchor_y = sy - self.y
        self.offset_x = anchor_x - (anchor_x - self.offset_x) * scale
        self.offset_y = anchor_y - (anchor_y - self.offset_y) * scale
        self.zoom_level = new_zoom

    def pan(self, dx, dy):
        self.offset_x += dx
        self.offset_y += dy
