"""
Country regions: polygon shapes plus display and selection state.

A country is either a single polygon or a multi-polygon; both variants expose
the same `contains` / `set_highlight_color` / `parts` operations.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from shapely.geometry import Point, Polygon

Color = Tuple[int, int, int]


@dataclass
class SinglePolygon:
    polygon: Polygon
    highlight_color: Optional[Color] = None

    def contains(self, lon: float, lat: float) -> bool:
        return self.polygon.contains(Point(lon, lat))

    def set_highlight_color(self, color: Color) -> None:
        self.highlight_color = color

    def parts(self) -> List["SinglePolygon"]:
        return [self]


@dataclass
class MultiPolygon:
    members: List[SinglePolygon]

    def contains(self, lon: float, lat: float) -> bool:
        return any(member.contains(lon, lat) for member in self.members)

    def set_highlight_color(self, color: Color) -> None:
        for member in self.members:
            member.set_highlight_color(color)

    @property
    def highlight_color(self) -> Optional[Color]:
        return self.members[0].highlight_color if self.members else None

    def parts(self) -> List[SinglePolygon]:
        return list(self.members)


@dataclass
class Region:
    """
    One country: its shape plus display/selection state.

    `fill_color` is assigned once at startup by shading and never recomputed.
    """
    id: str
    name: str
    shape: object  # SinglePolygon | MultiPolygon
    fill_color: Optional[Color] = None
    is_selected: bool = False
    properties: Dict[str, object] = field(default_factory=dict)

    @property
    def highlight_color(self) -> Optional[Color]:
        return self.shape.highlight_color

    def set_highlight_color(self, color: Color) -> None:
        self.shape.set_highlight_color(color)

    def contains(self, lon: float, lat: float) -> bool:
        return self.shape.contains(lon, lat)

    def parts(self) -> List[SinglePolygon]:
        return self.shape.parts()


class RegionIndex:
    """Insertion-ordered, read-only collection of regions."""

    def __init__(self, regions):
        self._regions = list(regions)
        self._by_id = {}
        for region in self._regions:
            self._by_id.setdefault(region.id, region)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __len__(self):
        return len(self._regions)

    def get(self, region_id: str) -> Optional[Region]:
        return self._by_id.get(region_id)
